"""Event types for game logging."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from wordchain.engine.game_state import GameOutcome
from wordchain.engine.state_machine import RejectionReason


class GameEvent(BaseModel):
    """Base class for all game events."""

    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
    round: int = 0  # accepted words so far

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(round={self.round})"


class GameStart(GameEvent):
    """A new game began."""

    category: str
    player_names: list[str]


class TurnEvent(GameEvent):
    """Base class for events produced by a player's turn."""

    player_index: int
    player_name: str

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(player={self.player_name}, round={self.round})"


class WordAccepted(TurnEvent):
    """A word extended the chain."""

    word: str
    points: int
    score: int  # player's total after this word


class WordRejected(TurnEvent):
    """A submission was rejected and counted as a skip."""

    word: str = ""
    reason: RejectionReason
    required_letter: Optional[str] = None  # set for chain mismatches
    skip_count: int = 0


class GameOver(GameEvent):
    """The game reached a terminal state."""

    outcome: GameOutcome
    winner_name: Optional[str] = None
    winner_score: int = 0
    scores: list[tuple[str, int]] = Field(default_factory=list)
    word_count: int = 0
    last_word: str = ""
