"""
Persistence for the pending queue.

The queue lives in ``pending.json`` next to the config file and is written
atomically via a temp file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from mindcontext.core.config.loader import get_home_dir
from mindcontext.core.sync.models import PendingQueue

logger = logging.getLogger(__name__)

PENDING_FILENAME = "pending.json"


def get_pending_path() -> Path:
    """Path of the pending queue file."""
    return get_home_dir() / PENDING_FILENAME


def load_pending_queue(path: Path | None = None) -> PendingQueue:
    """
    Load the pending queue.

    A missing or unreadable file yields an empty queue.
    """
    path = path or get_pending_path()
    if not path.exists():
        return PendingQueue()

    try:
        return PendingQueue.model_validate_json(path.read_text(encoding="utf-8"))
    except (ValidationError, ValueError) as e:
        logger.warning("Failed to load pending queue: %s", e)
        return PendingQueue()


def save_pending_queue(queue: PendingQueue, path: Path | None = None) -> Path:
    """Write the pending queue atomically."""
    path = path or get_pending_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    temp_path = path.with_suffix(".tmp")
    try:
        temp_path.write_text(queue.model_dump_json(indent=2), encoding="utf-8")
        temp_path.replace(path)
    except OSError:
        if temp_path.exists():
            temp_path.unlink()
        raise
    return path
