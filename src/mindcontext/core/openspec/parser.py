"""
Openspec checklist parser and progress selector.

Scans a project for the openspec layout::

    openspec/
      project.md              # marker file
      changes/
        add-feature/
          tasks.md            # checklist
        archive/              # completed proposals, ignored
          old-feature/

Each immediate subdirectory of ``changes/`` (except ``archive``) is a change
proposal. Its ``tasks.md`` is scanned line by line: ``- [x]`` / ``- [X]``
count as complete, ``- [ ]`` as incomplete, everything else is ignored.

The scan is read-only. A missing layout is not an error (the project simply
reports manual progress), but I/O failures while reading are propagated to
the caller unchanged.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from mindcontext.core.openspec.models import (
    ChangeProposal,
    ChangeStatus,
    OpenSpecResult,
    ProgressSnapshot,
    ProgressSource,
)

logger = logging.getLogger(__name__)

OPENSPEC_DIR = "openspec"
MARKER_FILE = "project.md"
CHANGES_DIR = "changes"
ARCHIVE_DIR = "archive"
TASKS_FILE = "tasks.md"

CHECKED_PATTERN = re.compile(r"^- \[[xX]\]")
UNCHECKED_PATTERN = re.compile(r"^- \[ \]")


def has_openspec(project_path: Path) -> bool:
    """
    Check whether a project uses the openspec layout.

    Args:
        project_path: Project root directory

    Returns:
        True if both openspec/project.md and openspec/changes/ exist
    """
    openspec_dir = Path(project_path) / OPENSPEC_DIR
    return (openspec_dir / MARKER_FILE).is_file() and (openspec_dir / CHANGES_DIR).is_dir()


def count_tasks(content: str) -> tuple[int, int]:
    """
    Count checklist items in a tasks document.

    Args:
        content: Raw checklist text

    Returns:
        Tuple of (complete, total). complete never exceeds total.

    Example:
        >>> count_tasks("- [x] Task 1\\n- [ ] Task 2\\n")
        (1, 2)
    """
    complete = 0
    total = 0

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if CHECKED_PATTERN.match(line):
            complete += 1
            total += 1
        elif UNCHECKED_PATTERN.match(line):
            total += 1

    return complete, total


def parse_change(change_dir: Path) -> ChangeProposal:
    """
    Build a ChangeProposal from a proposal folder.

    A folder without tasks.md still counts as a proposal, with zero tasks.

    Raises:
        OSError: If tasks.md exists but cannot be read
    """
    tasks_file = change_dir / TASKS_FILE
    if not tasks_file.is_file():
        return ChangeProposal(id=change_dir.name)

    complete, total = count_tasks(tasks_file.read_text(encoding="utf-8"))
    return ChangeProposal(id=change_dir.name, tasks_total=total, tasks_complete=complete)


def select_active_change(changes: list[ChangeProposal]) -> ChangeProposal | None:
    """
    Pick the change currently being worked on.

    Returns the first proposal that is in progress. When none is in
    progress the selection is empty; not-started and done proposals are
    never promoted to active.

    Args:
        changes: Proposals in the order produced by parse_openspec()

    Returns:
        The active proposal, or None
    """
    for change in changes:
        if change.status == ChangeStatus.IN_PROGRESS:
            return change
    return None


def parse_openspec(project_path: Path) -> OpenSpecResult:
    """
    Scan a project for openspec change proposals.

    Proposals are returned sorted by id so the active selection does not
    depend on filesystem listing order.

    Args:
        project_path: Project root directory

    Returns:
        OpenSpecResult; found=False when the layout is absent

    Raises:
        OSError: If the changes directory or a checklist cannot be read
    """
    project_path = Path(project_path)
    if not has_openspec(project_path):
        logger.debug("No openspec layout in %s", project_path)
        return OpenSpecResult(found=False)

    changes_dir = project_path / OPENSPEC_DIR / CHANGES_DIR
    change_dirs = sorted(
        (entry for entry in changes_dir.iterdir() if entry.is_dir() and entry.name != ARCHIVE_DIR),
        key=lambda entry: entry.name,
    )

    changes = [parse_change(change_dir) for change_dir in change_dirs]
    active = select_active_change(changes)

    logger.debug(
        "Parsed %d openspec change(s) in %s, active: %s",
        len(changes),
        project_path,
        active.id if active else None,
    )
    return OpenSpecResult(found=True, changes=changes, active_change=active)


def get_progress(project_path: Path) -> ProgressSnapshot:
    """
    Get the current progress snapshot for a project.

    Args:
        project_path: Project root directory

    Returns:
        Snapshot of the active change; source is FROM_CHECKLIST whenever the
        openspec layout exists (zero counts if nothing is active) and MANUAL
        otherwise.
    """
    result = parse_openspec(project_path)
    if not result.found:
        return ProgressSnapshot(source=ProgressSource.MANUAL)

    active = result.active_change
    if active is None:
        return ProgressSnapshot(source=ProgressSource.FROM_CHECKLIST)

    return ProgressSnapshot(
        source=ProgressSource.FROM_CHECKLIST,
        change=active.id,
        tasks_done=active.tasks_complete,
        tasks_total=active.tasks_total,
    )
