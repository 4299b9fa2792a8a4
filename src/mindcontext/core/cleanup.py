"""
Removal of old update files from the dashboard repository.

Age is judged by file modification time. Only ``*.json`` files inside each
registered project's updates directory are considered.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from mindcontext.core.config.loader import get_project_updates_dir

logger = logging.getLogger(__name__)

DEFAULT_OLDER_THAN_DAYS = 30
SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class CleanupResult:
    """Results of a cleanup operation."""

    # Files actually removed
    deleted: int = 0

    # Files that would be removed (dry run)
    would_delete: int = 0

    # "<project>/<filename>" for every matched file
    files: list[str] = field(default_factory=list)

    def summary(self, dry_run: bool = False) -> str:
        """Generate a human-readable summary of the cleanup."""
        if dry_run:
            return f"{self.would_delete} file(s) would be deleted."
        return f"Cleaned up {self.deleted} file(s)."


def cleanup_updates(
    repo_dir: Path,
    project_names: list[str],
    older_than_days: int = DEFAULT_OLDER_THAN_DAYS,
    dry_run: bool = False,
    now: float | None = None,
) -> CleanupResult:
    """
    Delete update files older than a cutoff.

    Args:
        repo_dir: Local dashboard repository
        project_names: Registered projects to clean
        older_than_days: Files last modified before this many days ago are removed
        dry_run: Only report what would be removed
        now: Reference time as a POSIX timestamp (defaults to now)

    Returns:
        CleanupResult with counts and the matched files
    """
    cutoff = (now if now is not None else time.time()) - older_than_days * SECONDS_PER_DAY
    result = CleanupResult()

    for project in project_names:
        updates_dir = get_project_updates_dir(project, repo_dir)
        if not updates_dir.is_dir():
            continue

        for path in sorted(updates_dir.glob("*.json")):
            if path.stat().st_mtime >= cutoff:
                continue

            result.files.append(f"{project}/{path.name}")
            if dry_run:
                result.would_delete += 1
            else:
                path.unlink()
                result.deleted += 1
                logger.debug("Deleted %s", path)

    return result
