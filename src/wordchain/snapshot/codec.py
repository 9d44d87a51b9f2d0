"""Snapshot codec: GameState <-> plain serializable structure.

Snapshot JSON layout (camelCase keys):

    {
      "players": [
        {"type": "human", "name": "Ann", "score": 3, "id": "a1b2c3d4e",
         "email": "ann@example.com", "username": "ann"},
        {"type": "computer", "name": "Computer", "score": 2, "id": "...",
         "difficulty": "hard"}
      ],
      "usedWords": ["moscow", "warsaw"],
      "currentCategory": "cities",
      "lastWord": "Warsaw",
      "isGameActive": true,
      "currentUserRef": "ann",
      "skipCount": 0, "roundCount": 2, "turnIndex": 0
    }

Only ``players`` entries carry a discriminator. Every other field is optional
on load and falls back to a default; the last three exist so an active game
resumes on the right turn.
"""

import random
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from wordchain.ai.selector import canonical
from wordchain.ai.word_database import WordDatabase
from wordchain.config import DEFAULT_CONFIG, Difficulty, GameConfig, parse_difficulty
from wordchain.engine.game_state import GameOutcome, GameState
from wordchain.models.player import (
    COMPUTER_NAME,
    ComputerPlayer,
    HumanPlayer,
    Player,
    generate_player_id,
)

PLAYER_TAGS = ("human", "computer")

# Class-name tags written by older saves.
TAG_ALIASES = {"humanplayer": "human", "computerplayer": "computer"}


class SnapshotError(ValueError):
    """Raised when snapshot data cannot be decoded."""


class _SnapshotModel(BaseModel):
    """Base for snapshot models: explicit nulls count as missing fields."""

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class HumanPlayerSnapshot(_SnapshotModel):
    type: Literal["human"] = "human"
    name: str = ""
    score: int = Field(default=0, ge=0)
    id: str = Field(default_factory=generate_player_id)
    email: str = ""
    username: str = ""


class ComputerPlayerSnapshot(_SnapshotModel):
    type: Literal["computer"] = "computer"
    name: str = COMPUTER_NAME
    score: int = Field(default=0, ge=0)
    id: str = Field(default_factory=generate_player_id)
    difficulty: Difficulty = Difficulty.MEDIUM

    @field_validator("difficulty", mode="before")
    @classmethod
    def _coerce_difficulty(cls, value):
        return parse_difficulty(value)


PlayerSnapshot = Annotated[
    Union[HumanPlayerSnapshot, ComputerPlayerSnapshot],
    Field(discriminator="type"),
]


class GameSnapshot(_SnapshotModel):
    """Plain, versionless capture of a game."""

    players: list[PlayerSnapshot] = Field(default_factory=list)
    used_words: list[str] = Field(default_factory=list, alias="usedWords")
    current_category: str = Field(default="", alias="currentCategory")
    last_word: str = Field(default="", alias="lastWord")
    is_game_active: bool = Field(default=False, alias="isGameActive")
    current_user_ref: Optional[str] = Field(default=None, alias="currentUserRef")
    skip_count: int = Field(default=0, ge=0, alias="skipCount")
    round_count: Optional[int] = Field(default=None, ge=0, alias="roundCount")
    turn_index: int = Field(default=0, ge=0, alias="turnIndex")

    @field_validator("players", mode="before")
    @classmethod
    def _normalize_player_tags(cls, value: Any) -> Any:
        # Unknown or missing tags load as human players.
        if not isinstance(value, list):
            return value
        normalized = []
        for entry in value:
            if isinstance(entry, dict):
                tag = str(entry.get("type", "")).strip().lower()
                tag = TAG_ALIASES.get(tag, tag)
                entry = {**entry, "type": tag if tag in PLAYER_TAGS else "human"}
            normalized.append(entry)
        return normalized

    @field_validator("current_user_ref", mode="before")
    @classmethod
    def _coerce_user_ref(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return value.get("username") or None
        return value

    def to_dict(self) -> dict:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


def player_to_snapshot(player: Player) -> Union[HumanPlayerSnapshot, ComputerPlayerSnapshot]:
    """Snapshot one player using its tag and variant fields."""
    fields = {
        "name": player.name,
        "score": player.score,
        "id": player.id,
        **player.variant_fields(),
    }
    if player.kind == "computer":
        return ComputerPlayerSnapshot(**fields)
    return HumanPlayerSnapshot(**fields)


def player_from_snapshot(
    data: Union[HumanPlayerSnapshot, ComputerPlayerSnapshot],
    database: Optional[WordDatabase] = None,
    rng: Optional[random.Random] = None,
) -> Player:
    """Rebuild a live player from its snapshot."""
    if isinstance(data, ComputerPlayerSnapshot):
        seed = rng.randrange(2**32) if rng is not None else None
        return ComputerPlayer(
            database=database,
            seed=seed,
            name=data.name,
            id=data.id,
            score=data.score,
            difficulty=data.difficulty,
        )
    return HumanPlayer(
        name=data.name,
        id=data.id,
        score=data.score,
        email=data.email,
        username=data.username,
    )


def to_snapshot(state: GameState, current_user: Optional[str] = None) -> GameSnapshot:
    """Capture the state and the caller's identity as a GameSnapshot."""
    return GameSnapshot(
        players=[player_to_snapshot(player) for player in state.players],
        used_words=sorted(state.used_words),
        current_category=state.category,
        last_word=state.last_word,
        is_game_active=state.is_active,
        current_user_ref=current_user,
        skip_count=state.skip_count,
        round_count=state.round_count,
        turn_index=state.turn_index,
    )


def from_snapshot(
    data: Union[GameSnapshot, dict],
    database: Optional[WordDatabase] = None,
    config: GameConfig = DEFAULT_CONFIG,
    seed: Optional[int] = None,
) -> tuple[GameState, Optional[str]]:
    """Rebuild a GameState and the current user reference from a snapshot.

    Args:
        data: A GameSnapshot or its dict form (as read from JSON).
        database: Word lists for restored computer players.
        config: Thresholds used to derive the outcome of finished games.
        seed: Seed for restored computer players' random choices.

    Returns:
        Tuple of (state, current_user_ref)

    Raises:
        SnapshotError: If the data is not a valid snapshot.
    """
    if isinstance(data, GameSnapshot):
        snapshot = data
    else:
        try:
            snapshot = GameSnapshot.model_validate(data)
        except ValidationError as e:
            raise SnapshotError(f"Malformed snapshot: {e}") from e

    rng = random.Random(seed) if seed is not None else None
    players = [player_from_snapshot(entry, database, rng) for entry in snapshot.players]
    if snapshot.is_game_active and not players:
        raise SnapshotError("Active game snapshot has no players")

    used_words = {canonical(word) for word in snapshot.used_words if word and word.strip()}
    last_word = snapshot.last_word.strip()
    if last_word:
        used_words.add(canonical(last_word))

    state = GameState(
        players=players,
        category=snapshot.current_category,
        used_words=used_words,
        last_word=last_word,
        is_active=snapshot.is_game_active,
        skip_count=snapshot.skip_count,
        round_count=snapshot.round_count if snapshot.round_count is not None else len(used_words),
        turn_index=snapshot.turn_index % len(players) if players else 0,
    )
    state.outcome = _derive_outcome(state, config)
    if state.is_terminal:
        state.is_active = False
        state.winner_index = state.find_winner_index()
    return state, snapshot.current_user_ref


def _derive_outcome(state: GameState, config: GameConfig) -> GameOutcome:
    # Same order as the machine: win, then attrition. A snapshot saved past
    # either threshold restores as finished even if it claims to be active.
    if len(state.used_words) >= config.max_words_for_win:
        return GameOutcome.WON_BY_WORDS
    if state.skip_count >= config.max_skipped_turns:
        return GameOutcome.LOST_BY_ATTRITION
    return GameOutcome.ACTIVE if state.is_active else GameOutcome.IDLE
