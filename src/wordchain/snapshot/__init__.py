"""Snapshot package - save/load support for games."""

from .codec import (
    GameSnapshot,
    HumanPlayerSnapshot,
    ComputerPlayerSnapshot,
    PlayerSnapshot,
    SnapshotError,
    to_snapshot,
    from_snapshot,
    player_to_snapshot,
    player_from_snapshot,
)
from .file_store import DEFAULT_SAVE_FILE, StoreResult, save_snapshot, load_snapshot

__all__ = [
    "GameSnapshot",
    "HumanPlayerSnapshot",
    "ComputerPlayerSnapshot",
    "PlayerSnapshot",
    "SnapshotError",
    "to_snapshot",
    "from_snapshot",
    "player_to_snapshot",
    "player_from_snapshot",
    "DEFAULT_SAVE_FILE",
    "StoreResult",
    "save_snapshot",
    "load_snapshot",
]
