"""Game configuration constants."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Category(str, Enum):
    """Word categories available for a game."""

    CITIES = "cities"
    ANIMALS = "animals"
    PLANTS = "plants"


class Difficulty(str, Enum):
    """Computer opponent difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


CATEGORIES = [category.value for category in Category]
DIFFICULTY_LEVELS = [level.value for level in Difficulty]

MIN_WORD_LENGTH = 2
MAX_WORDS_FOR_WIN = 5
MAX_SKIPPED_TURNS = 2
MAX_POINTS_PER_WORD = 3


class GameConfig(BaseModel):
    """Rule thresholds for a game."""

    min_word_length: int = MIN_WORD_LENGTH
    max_words_for_win: int = MAX_WORDS_FOR_WIN
    max_skipped_turns: int = MAX_SKIPPED_TURNS
    max_points_per_word: int = MAX_POINTS_PER_WORD

    model_config = ConfigDict(frozen=True)


DEFAULT_CONFIG = GameConfig()


def parse_difficulty(value: str | Difficulty | None) -> Difficulty:
    """Map a raw difficulty value to Difficulty, defaulting to MEDIUM."""
    if isinstance(value, Difficulty):
        return value
    try:
        return Difficulty(str(value).strip().lower())
    except ValueError:
        return Difficulty.MEDIUM
