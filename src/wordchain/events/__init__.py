"""Game events and their console formatting."""

from .game_events import (
    GameEvent,
    GameStart,
    TurnEvent,
    WordAccepted,
    WordRejected,
    GameOver,
)
from .event_formatter import EventFormatter, REJECTION_MESSAGES

__all__ = [
    "GameEvent",
    "GameStart",
    "TurnEvent",
    "WordAccepted",
    "WordRejected",
    "GameOver",
    "EventFormatter",
    "REJECTION_MESSAGES",
]
