#!/usr/bin/env python
"""Playable word chain game: human vs computer from the terminal.

Usage:
    wordchain                                  # Human vs computer, default settings
    wordchain --category animals --difficulty hard --name Ann
    wordchain --ai --seed 42                   # Watch computer vs computer
    wordchain --load game_save.json            # Resume a saved game
    wordchain --menu --user ann --stats stats.json
"""

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path
from typing import Optional

# Enable Windows console colors
if sys.platform == "win32":
    import colorama
    colorama.init()

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from wordchain.ai import DEFAULT_DATABASE, WordDatabase
from wordchain.config import CATEGORIES, DIFFICULTY_LEVELS, Difficulty, parse_difficulty
from wordchain.engine import GameStateMachine
from wordchain.events import EventFormatter
from wordchain.game import GameResult, WordChainGame
from wordchain.models import ComputerPlayer, HumanPlayer, Player
from wordchain.reports import game_summary, word_analysis
from wordchain.snapshot import (
    DEFAULT_SAVE_FILE,
    SnapshotError,
    from_snapshot,
    load_snapshot,
    save_snapshot,
    to_snapshot,
)
from wordchain.stats import StatsStore
from wordchain.ui import ConsoleWordSource

logger = logging.getLogger(__name__)


class GameSession:
    """Everything the terminal front end keeps between games.

    The signed-in identity lives here and is passed explicitly to the
    snapshot codec and the stats store.
    """

    def __init__(
        self,
        console: Console,
        current_user: Optional[str] = None,
        stats: Optional[StatsStore] = None,
        database: WordDatabase = DEFAULT_DATABASE,
        seed: Optional[int] = None,
        delay: float = 0.0,
    ):
        self.console = console
        self.current_user = current_user
        self.stats = stats if stats is not None else StatsStore()
        self.database = database
        self.seed = seed
        self.delay = delay
        self.players: list[Player] = []
        self.machine: Optional[GameStateMachine] = None
        self._source = ConsoleWordSource(console=console)
        self._formatter = EventFormatter()

    def computer(
        self, difficulty: Difficulty, name: Optional[str] = None, offset: int = 0
    ) -> ComputerPlayer:
        fields = {"difficulty": difficulty}
        if name:
            fields["name"] = name
        seed = None if self.seed is None else self.seed + offset
        return ComputerPlayer(database=self.database, seed=seed, **fields)

    def human(self, name: str, email: str = "", username: str = "") -> HumanPlayer:
        return HumanPlayer(name=name, email=email, username=username).attach_source(self._source)

    async def play(self, category: str, players: Optional[list[Player]] = None) -> GameResult:
        """Start a fresh game in the category and run it to the end."""
        if players is not None:
            self.players = list(players)
        self.machine = GameStateMachine(self.players, category=category)
        self.machine.start(category)
        return await self.resume()

    async def resume(self) -> GameResult:
        """Run the current machine until it is terminal."""
        if self.machine is None:
            raise RuntimeError("No game to resume")
        game = WordChainGame(
            self.machine,
            stats=self.stats,
            on_event=self._print_event,
            computer_delay=self.delay,
        )
        return await game.run()

    def save(self, path: str) -> bool:
        if self.machine is None:
            self.console.print("[yellow]Nothing to save yet[/yellow]")
            return False
        result = save_snapshot(path, to_snapshot(self.machine.state, self.current_user))
        style = "green" if result.success else "red"
        self.console.print(f"[{style}]{result.message}[/{style}]")
        return result.success

    def load(self, path: str) -> bool:
        """Replace the current game with a saved one. All or nothing."""
        result = load_snapshot(path)
        if not result.success:
            self.console.print(f"[red]{result.message}[/red]")
            return False
        try:
            state, user = from_snapshot(result.snapshot, database=self.database, seed=self.seed)
        except SnapshotError as e:
            self.console.print(f"[red]{e}[/red]")
            return False

        players = []
        for player in state.players:
            if isinstance(player, HumanPlayer):
                player.attach_source(self._source)
            players.append(player)
        self.players = players
        self.machine = GameStateMachine(state=state) if state.players else None
        if user:
            self.current_user = user
        self.console.print(f"[green]{result.message}[/green]")
        return True

    def show_scores(self) -> None:
        table = Table(title="Players", show_header=True)
        table.add_column("#", width=4)
        table.add_column("Player", justify="left")
        table.add_column("Type")
        table.add_column("Score", justify="right")
        for index, player in enumerate(self.players, start=1):
            table.add_row(str(index), player.name, player.kind, str(player.score))
        self.console.print(table)

    def show_reports(self) -> None:
        if self.machine is not None:
            summary = game_summary(self.machine.state)
            self.console.print(
                f"Players: {summary.player_count}, words: {summary.word_count}, "
                f"category: {summary.category or '-'}, "
                f"best: {summary.best_player or '-'} ({summary.best_score})"
            )
            analysis = word_analysis(self.machine.state.used_words)
            if analysis is not None:
                self.console.print(
                    f"Words: {analysis.total}, average length: {analysis.average_length:.2f}, "
                    f"longest: \"{analysis.longest}\", shortest: \"{analysis.shortest}\""
                )
        if self.current_user:
            stats = self.stats.get(self.current_user)
            self.console.print(
                f"{self.current_user}: games {stats.games_played}, wins {stats.wins} "
                f"({stats.win_rate:.1f}%), points {stats.total_score}, best {stats.best_score}"
            )

    def _print_event(self, event) -> None:
        formatted = self._formatter.format(event)
        if formatted.strip():
            self.console.print(formatted)


def _choose(console: Console, title: str, options: list[str], default: str) -> str:
    """Numbered choice; anything invalid falls back to the default."""
    for index, option in enumerate(options, start=1):
        console.print(f"  {index}. {option}")
    answer = Prompt.ask(title, console=console, default=str(options.index(default) + 1))
    try:
        index = int(answer) - 1
    except ValueError:
        return default
    return options[index] if 0 <= index < len(options) else default


async def run_menu(session: GameSession, category: str, difficulty: Difficulty) -> None:
    """Interactive main menu loop."""
    console = session.console
    while True:
        user = session.current_user or "guest"
        console.print(Panel(
            "1. New game\n2. Players\n3. Reports\n4. Save\n5. Load\n0. Exit",
            title=f"Menu ({user})",
        ))
        try:
            choice = Prompt.ask("Choice", console=console, default="0")
        except (KeyboardInterrupt, EOFError):
            return

        if choice == "1":
            category = _choose(console, "Category", CATEGORIES, category)
            level = _choose(console, "Difficulty", DIFFICULTY_LEVELS, difficulty.value)
            difficulty = parse_difficulty(level)
            if not session.players:
                name = Prompt.ask("Your name", console=console, default=user)
                session.players = [
                    session.human(name, username=session.current_user or ""),
                    session.computer(difficulty),
                ]
            else:
                for player in session.players:
                    if isinstance(player, ComputerPlayer):
                        player.difficulty = difficulty
            await session.play(category)
        elif choice == "2":
            await _manage_players(session)
        elif choice == "3":
            session.show_reports()
        elif choice == "4":
            session.save(Prompt.ask("File", console=console, default=DEFAULT_SAVE_FILE))
        elif choice == "5":
            if session.load(Prompt.ask("File", console=console, default=DEFAULT_SAVE_FILE)):
                if session.machine is not None and session.machine.is_active:
                    await session.resume()
        elif choice == "0":
            return


async def _manage_players(session: GameSession) -> None:
    console = session.console
    choice = Prompt.ask("1. Add  2. Remove  3. List", console=console, default="3")
    if choice == "1":
        name = Prompt.ask("Name", console=console, default="").strip()
        email = Prompt.ask("Email", console=console, default="")
        if name:
            player = session.human(name)
            player.update_profile(email=email)
            session.players.append(player)
            console.print(f"Added: {name}")
    elif choice == "2" and session.players:
        session.show_scores()
        answer = Prompt.ask("Number", console=console, default="0")
        try:
            index = int(answer) - 1
        except ValueError:
            return
        if 0 <= index < len(session.players):
            removed = session.players.pop(index)
            console.print(f"Removed: {removed.name}")
    elif choice == "3":
        session.show_scores()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Word chain - each word starts with the last letter of the previous one",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        "--category",
        choices=CATEGORIES,
        default=CATEGORIES[0],
        help="Word category (default: %(default)s)"
    )
    parser.add_argument(
        "--difficulty",
        choices=DIFFICULTY_LEVELS,
        default=Difficulty.MEDIUM.value,
        help="Computer difficulty (default: %(default)s)"
    )
    parser.add_argument(
        "--name",
        type=str,
        default="Player",
        help="Display name of the human player"
    )
    parser.add_argument(
        "--user",
        type=str,
        default=None,
        help="Identity used to attribute stats (username)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible computer moves"
    )
    parser.add_argument(
        "--ai",
        action="store_true",
        help="Watch computer vs computer instead of playing"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.6,
        help="Pause in seconds after computer moves (default: %(default)s)"
    )
    parser.add_argument(
        "--load",
        type=str,
        default=None,
        help="Resume a saved game from this file"
    )
    parser.add_argument(
        "--save",
        type=str,
        default=None,
        help="Save the game to this file when it ends"
    )
    parser.add_argument(
        "--stats",
        type=str,
        default=None,
        help="JSON file with per-user statistics"
    )
    parser.add_argument(
        "--menu",
        action="store_true",
        help="Interactive menu (new game, players, reports, save, load)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    if args.delay < 0:
        print("Error: --delay must not be negative")
        return 1

    if args.seed is None:
        args.seed = random.randint(1, 1000000)

    console = Console()
    session = GameSession(
        console=console,
        current_user=args.user,
        stats=StatsStore(Path(args.stats)) if args.stats else None,
        seed=args.seed,
        delay=args.delay,
    )
    difficulty = parse_difficulty(args.difficulty)

    if args.menu:
        asyncio.run(run_menu(session, args.category, difficulty))
        return 0

    if args.load:
        if not session.load(args.load):
            return 1
        if session.machine is None or not session.machine.is_active:
            session.show_scores()
            session.show_reports()
            return 0
        result = asyncio.run(session.resume())
    else:
        if args.ai:
            players = [
                session.computer(difficulty, name="Computer 1", offset=1),
                session.computer(difficulty, name="Computer 2", offset=2),
            ]
        else:
            players = [
                session.human(args.name, username=args.user or ""),
                session.computer(difficulty),
            ]
        console.print(
            f"\n[bold]Category: {args.category}, difficulty: {difficulty.value}[/bold]\n"
        )
        result = asyncio.run(session.play(args.category, players))

    logger.debug("Finished: %s", result.outcome.value)

    if args.save:
        session.save(args.save)

    return 0


if __name__ == "__main__":
    exit(main())
