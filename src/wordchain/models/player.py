"""Player models.

Two variants share identity and scoring fields:
- HumanPlayer: moves come from an attached WordSource (console, tests, ...)
- ComputerPlayer: moves come from the word selector over a WordDatabase

The ``kind`` field is the explicit variant tag used by the snapshot codec.
"""

import random
import re
import uuid
from typing import Annotated, Literal, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from wordchain.config import Difficulty, parse_difficulty
from wordchain.ai.selector import select_word
from wordchain.ai.word_database import DEFAULT_DATABASE, WordDatabase

COMPUTER_NAME = "Computer"

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]{3,}$")


class MoveContext(BaseModel):
    """Read-only view of the game handed to a player when it is their turn."""

    category: str
    used_words: frozenset[str] = frozenset()  # canonical forms
    last_word: str = ""

    model_config = ConfigDict(frozen=True)


class WordSource(Protocol):
    """External input channel for a human player."""

    async def read_word(self, player: "HumanPlayer", context: MoveContext) -> str:
        """Block until the player types a word and return it raw."""
        ...


def generate_player_id() -> str:
    """Return a short random player id."""
    return uuid.uuid4().hex[:9]


class BasePlayer(BaseModel):
    """Identity and score shared by every player variant."""

    name: str
    id: str = Field(default_factory=generate_player_id)
    score: int = Field(default=0, ge=0)

    model_config = ConfigDict(validate_assignment=True)

    def add_points(self, points: int = 1) -> int:
        """Add points to the score and return the new total."""
        if points < 0:
            raise ValueError(f"points must be non-negative, got {points}")
        self.score += points
        return self.score

    def reset_score(self) -> None:
        self.score = 0


class HumanPlayer(BasePlayer):
    """A player whose words are typed by a person."""

    kind: Literal["human"] = "human"
    email: str = ""
    username: str = ""

    _source: Optional[WordSource] = PrivateAttr(default=None)

    def attach_source(self, source: Optional[WordSource]) -> "HumanPlayer":
        """Attach the input channel used by produce_move."""
        self._source = source
        return self

    @property
    def identity(self) -> Optional[str]:
        """Identity reference used for stats attribution, if any."""
        return self.username or None

    def update_profile(self, email: str = "", username: str = "") -> None:
        """Update email/username, ignoring values that fail validation."""
        if email and EMAIL_PATTERN.match(email):
            self.email = email
        if username and USERNAME_PATTERN.match(username):
            self.username = username

    def variant_fields(self) -> dict:
        return {"email": self.email, "username": self.username}

    async def produce_move(self, context: MoveContext) -> Optional[str]:
        """Ask the attached source for a word.

        Returns None when no source is attached, which counts as a skip.
        """
        if self._source is None:
            return None
        raw = await self._source.read_word(self, context)
        if raw is None:
            return None
        return raw.strip()


class ComputerPlayer(BasePlayer):
    """A player driven by the word selector."""

    kind: Literal["computer"] = "computer"
    name: str = COMPUTER_NAME
    difficulty: Difficulty = Difficulty.MEDIUM

    _database: WordDatabase = PrivateAttr(default_factory=lambda: DEFAULT_DATABASE)
    _rng: random.Random = PrivateAttr(default_factory=random.Random)

    def __init__(
        self,
        database: Optional[WordDatabase] = None,
        seed: Optional[int] = None,
        **data,
    ):
        """Create a computer player.

        Args:
            database: Word lists to choose from. Defaults to the bundled lists.
            seed: Seed for the medium strategy's random choice.
            **data: Model fields (name, id, score, difficulty).
        """
        super().__init__(**data)
        if database is not None:
            self._database = database
        self._rng = random.Random(seed)

    @field_validator("difficulty", mode="before")
    @classmethod
    def _coerce_difficulty(cls, value):
        return parse_difficulty(value)

    @property
    def database(self) -> WordDatabase:
        return self._database

    def variant_fields(self) -> dict:
        return {"difficulty": self.difficulty.value}

    async def produce_move(self, context: MoveContext) -> Optional[str]:
        """Pick a word for the context, or None if no candidate exists."""
        return select_word(
            self._database.words(context.category),
            context.used_words,
            context.last_word,
            self.difficulty,
            self._rng,
        )


Player = Annotated[Union[HumanPlayer, ComputerPlayer], Field(discriminator="kind")]
