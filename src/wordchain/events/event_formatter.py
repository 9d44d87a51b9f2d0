"""Event formatter for console output.

Produces rich markup strings; callers print them with a rich Console.
"""

from .game_events import (
    GameEvent,
    GameStart,
    WordAccepted,
    WordRejected,
    GameOver,
)
from wordchain.engine.game_state import GameOutcome
from wordchain.engine.state_machine import RejectionReason
from wordchain.config import MIN_WORD_LENGTH


REJECTION_MESSAGES = {
    RejectionReason.EMPTY: "no word given",
    RejectionReason.TOO_SHORT: f"at least {MIN_WORD_LENGTH} letters required",
    RejectionReason.DUPLICATE: "already used",
    RejectionReason.CHAIN_MISMATCH: "wrong first letter",
    RejectionReason.TERMINAL: "the game is over",
}


class EventFormatter:
    """Format game events as human-readable rich markup."""

    def format(self, event: GameEvent) -> str:
        """Format a single event.

        Args:
            event: The game event to format

        Returns:
            Markup string describing the event
        """
        if isinstance(event, GameStart):
            return self._format_game_start(event)
        elif isinstance(event, WordAccepted):
            return self._format_word_accepted(event)
        elif isinstance(event, WordRejected):
            return self._format_word_rejected(event)
        elif isinstance(event, GameOver):
            return self._format_game_over(event)
        return str(event)

    def _format_game_start(self, event: GameStart) -> str:
        players = ", ".join(event.player_names)
        return f"[bold]Game started[/bold] - category: [cyan]{event.category}[/cyan], players: {players}"

    def _format_word_accepted(self, event: WordAccepted) -> str:
        return (
            f"[green]{event.player_name}: \"{event.word}\"[/green] "
            f"+{event.points} ({event.score})"
        )

    def _format_word_rejected(self, event: WordRejected) -> str:
        shown = event.word or "(empty)"
        message = REJECTION_MESSAGES.get(event.reason, event.reason.value)
        if event.reason == RejectionReason.CHAIN_MISMATCH and event.required_letter:
            message = f"must start with \"{event.required_letter}\""
        return f"[red]{event.player_name}: \"{shown}\" rejected - {message}[/red]"

    def _format_game_over(self, event: GameOver) -> str:
        if event.outcome == GameOutcome.LOST_BY_ATTRITION:
            headline = "Too many failed turns!"
        else:
            headline = "Game over!"
        lines = [f"[bold]{headline}[/bold]"]
        if event.winner_name is not None:
            lines.append(
                f"[bold yellow]WINNER: {event.winner_name} ({event.winner_score} points)[/bold yellow]"
            )
        for index, (name, score) in enumerate(event.scores, start=1):
            lines.append(f"  {index}. {name}: {score}")
        return "\n".join(lines)
