"""Per-user game statistics.

The turn loop only depends on the StatsRecorder protocol. StatsStore is the
bundled implementation, persisted as a JSON file keyed by identity.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class StatsRecorder(Protocol):
    """Receives final results of a finished game."""

    def record_game(
        self,
        identity: str,
        score: int,
        is_winner: bool,
        last_word: str = "",
        category: str = "",
    ) -> None:
        ...


class UserStats(BaseModel):
    """Accumulated statistics for one identity."""

    games_played: int = 0
    total_score: int = 0
    wins: int = 0
    best_score: int = 0
    words_used: list[str] = Field(default_factory=list)
    categories: dict[str, int] = Field(default_factory=dict)

    @property
    def win_rate(self) -> float:
        """Percentage of games won, 0.0 when no games were played."""
        if self.games_played == 0:
            return 0.0
        return self.wins / self.games_played * 100


class StatsStore:
    """StatsRecorder backed by an optional JSON file.

    With path=None the store lives only in memory.
    """

    def __init__(self, path: Optional[Path | str] = None):
        self._path = Path(path) if path is not None else None
        self._stats: dict[str, UserStats] = {}
        self.load()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def record_game(
        self,
        identity: str,
        score: int,
        is_winner: bool,
        last_word: str = "",
        category: str = "",
    ) -> None:
        """Fold one game's result into the identity's stats and persist."""
        stats = self._stats.setdefault(identity, UserStats())
        stats.games_played += 1
        stats.total_score += score
        if is_winner:
            stats.wins += 1
        if score > stats.best_score:
            stats.best_score = score
        if last_word:
            stats.words_used.append(last_word)
        if category:
            stats.categories[category] = stats.categories.get(category, 0) + 1
        logger.debug("Recorded game for %s: score=%d win=%s", identity, score, is_winner)
        self.save()

    def get(self, identity: str) -> UserStats:
        """Return a copy of the identity's stats (defaults if unknown)."""
        stats = self._stats.get(identity)
        return stats.model_copy(deep=True) if stats else UserStats()

    def all(self) -> dict[str, UserStats]:
        return {identity: stats.model_copy(deep=True) for identity, stats in self._stats.items()}

    def delete(self, identity: str) -> bool:
        """Remove an identity's stats. Returns True if it existed."""
        if self._stats.pop(identity, None) is None:
            return False
        self.save()
        return True

    def load(self) -> None:
        """Load stats from disk. A missing or corrupt file leaves the store empty."""
        self._stats = {}
        if self._path is None or not self._path.exists():
            return
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            for identity, data in raw.items():
                self._stats[identity] = UserStats.model_validate(data)
        except (OSError, ValueError, AttributeError, ValidationError) as e:
            logger.warning("Ignoring unreadable stats file %s: %s", self._path, e)
            self._stats = {}

    def save(self) -> None:
        if self._path is None:
            return
        data = {identity: stats.model_dump() for identity, stats in self._stats.items()}
        try:
            self._path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to save stats to %s: %s", self._path, e)
