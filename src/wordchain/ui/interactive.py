"""Interactive console input for human players.

Uses rich to show the chain state and read the next word.
"""

from typing import Optional

from rich.console import Console
from rich.prompt import Prompt

from wordchain.config import MAX_WORDS_FOR_WIN
from wordchain.models.player import HumanPlayer, MoveContext


class ConsoleWordSource:
    """A WordSource that reads words typed at the terminal.

    Usage:
        source = ConsoleWordSource(console=console)
        human = HumanPlayer(name="Ann").attach_source(source)
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        show_context: bool = True,
    ):
        """Initialize the source.

        Args:
            console: Rich Console instance. Creates one if None.
            show_context: Print the last word and required letter before asking
        """
        self._console = console or Console()
        self._show_context = show_context

    async def read_word(self, player: HumanPlayer, context: MoveContext) -> str:
        """Prompt the player for a word.

        Interrupts and closed input return an empty string, which the
        game records as a skipped turn.
        """
        if self._show_context:
            self._print_context(context)

        try:
            return Prompt.ask(
                f"[bold]{player.name}[/bold], your word",
                console=self._console,
                default="",
                show_default=False,
            )
        except (KeyboardInterrupt, EOFError):
            self._console.print("\n[yellow]No input, skipping turn...[/yellow]")
            return ""

    def _print_context(self, context: MoveContext) -> None:
        words = f"{len(context.used_words)}/{MAX_WORDS_FOR_WIN}"
        if context.last_word:
            letter = context.last_word.strip().casefold()[-1]
            self._console.print(
                f"[dim]Words: {words}. Last word: [/dim][cyan]{context.last_word}[/cyan]"
                f"[dim], next starts with [/dim][bold cyan]{letter.upper()}[/bold cyan]"
            )
        else:
            self._console.print(f"[dim]Words: {words}. Any {context.category} word to begin.[/dim]")


class ScriptedWordSource:
    """A WordSource that replays a fixed list of words, then empty strings.

    Useful for demos and tests where no terminal is available.
    """

    def __init__(self, words: list[str]):
        self._words = list(words)
        self.calls: list[MoveContext] = []

    async def read_word(self, player: HumanPlayer, context: MoveContext) -> str:
        self.calls.append(context)
        if not self._words:
            return ""
        return self._words.pop(0)
