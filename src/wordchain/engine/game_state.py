"""Game state for the word chain game."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from wordchain.ai.selector import canonical
from wordchain.models.player import Player


class GameOutcome(str, Enum):
    """Lifecycle state of a game."""

    IDLE = "IDLE"  # created or restored, never started
    ACTIVE = "ACTIVE"
    WON_BY_WORDS = "WON_BY_WORDS"
    LOST_BY_ATTRITION = "LOST_BY_ATTRITION"


TERMINAL_OUTCOMES = frozenset({GameOutcome.WON_BY_WORDS, GameOutcome.LOST_BY_ATTRITION})


class GameState(BaseModel):
    """Represents the current state of a game.

    Mutated only by GameStateMachine. Players are kept in turn order.
    """

    players: list[Player]
    category: str = ""
    used_words: set[str] = Field(default_factory=set)  # canonical forms
    last_word: str = ""  # original casing
    is_active: bool = False
    skip_count: int = 0  # consecutive rejected turns
    round_count: int = 0  # accepted turns
    turn_index: int = 0
    outcome: GameOutcome = GameOutcome.IDLE
    winner_index: Optional[int] = None

    @property
    def last_word_canonical(self) -> str:
        return canonical(self.last_word) if self.last_word else ""

    @property
    def is_terminal(self) -> bool:
        return self.outcome in TERMINAL_OUTCOMES

    @property
    def word_count(self) -> int:
        return len(self.used_words)

    @property
    def current_player(self) -> Optional[Player]:
        if not self.players:
            return None
        return self.players[self.turn_index % len(self.players)]

    @property
    def winner(self) -> Optional[Player]:
        if self.winner_index is None or self.winner_index >= len(self.players):
            return None
        return self.players[self.winner_index]

    def find_winner_index(self) -> Optional[int]:
        """Index of the highest-scoring player; earliest in turn order wins ties.

        Returns:
            Player index, or None if there are no players
        """
        best: Optional[int] = None
        for index, player in enumerate(self.players):
            if best is None or player.score > self.players[best].score:
                best = index
        return best

    def scores(self) -> list[tuple[str, int]]:
        """(name, score) pairs in turn order."""
        return [(player.name, player.score) for player in self.players]
