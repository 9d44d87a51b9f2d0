"""Save and load snapshots as JSON files.

Failures are returned as StoreResult values; nothing here raises for I/O or
decoding problems, so a failed load never touches the caller's game.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from .codec import GameSnapshot

logger = logging.getLogger(__name__)

DEFAULT_SAVE_FILE = "game_save.json"


class StoreResult(BaseModel):
    """Outcome of a save or load."""

    success: bool
    message: str = ""
    snapshot: Optional[GameSnapshot] = None


def save_snapshot(path: Path | str, snapshot: GameSnapshot) -> StoreResult:
    """Write the snapshot as indented UTF-8 JSON."""
    path = Path(path)
    try:
        path.write_text(
            json.dumps(snapshot.to_dict(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
    except OSError as e:
        logger.warning("Failed to save snapshot to %s: %s", path, e)
        return StoreResult(success=False, message=str(e))
    logger.info("Saved snapshot to %s", path)
    return StoreResult(success=True, message=f"Saved: {path}", snapshot=snapshot)


def load_snapshot(path: Path | str) -> StoreResult:
    """Read and validate a snapshot file.

    Returns:
        StoreResult with the decoded snapshot on success.
    """
    path = Path(path)
    if not path.exists():
        return StoreResult(success=False, message=f"File not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Failed to read snapshot %s: %s", path, e)
        return StoreResult(success=False, message=f"Unreadable file {path}: {e}")

    try:
        snapshot = GameSnapshot.model_validate(raw)
    except ValidationError as e:
        logger.warning("Invalid snapshot %s: %s", path, e)
        return StoreResult(success=False, message=f"Invalid snapshot in {path}")

    return StoreResult(success=True, message=f"Loaded: {path}", snapshot=snapshot)
