"""Engine package - game state and rule enforcement."""

from .game_state import GameOutcome, GameState, TERMINAL_OUTCOMES
from .state_machine import (
    GameStateMachine,
    RejectionReason,
    TurnResult,
    score_for,
)

__all__ = [
    "GameOutcome",
    "GameState",
    "TERMINAL_OUTCOMES",
    "GameStateMachine",
    "RejectionReason",
    "TurnResult",
    "score_for",
]
