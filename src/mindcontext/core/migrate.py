"""
Migration from older progress-tracking layouts.

Two sources are recognised inside a project:

- ``.claude/focus.json``: a single "current focus" document, converted into
  one update record.
- ``.project/``: a free-form notes directory. It is only reported; moving
  its files is left to the user.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from mindcontext.core.config.models import MachineInfo
from mindcontext.core.openspec.models import ProgressSnapshot, ProgressSource
from mindcontext.core.updates.models import ContextStatus, UpdateContext, UpdateRecord

logger = logging.getLogger(__name__)

PROJECT_DIR = ".project"
FOCUS_FILE = Path(".claude") / "focus.json"
MIGRATED_CHANGE = "migrated-from-focus"


class MigrationError(Exception):
    """Raised when a migration source cannot be converted."""


class MigrationSources(BaseModel):
    """What was found in a project."""

    has_project_dir: bool = False
    has_focus_json: bool = False
    project_files: list[str] = Field(default_factory=list)
    focus_json_path: Path | None = None

    @property
    def found(self) -> bool:
        return self.has_project_dir or self.has_focus_json


def detect_migration_sources(project_path: Path) -> MigrationSources:
    """
    Look for migration sources in a project.

    Args:
        project_path: Project root directory

    Returns:
        MigrationSources; project_files are relative to ``.project/``
    """
    project_path = Path(project_path)
    project_dir = project_path / PROJECT_DIR
    focus_path = project_path / FOCUS_FILE

    has_project_dir = project_dir.is_dir()
    has_focus_json = focus_path.is_file()

    project_files: list[str] = []
    if has_project_dir:
        project_files = sorted(
            str(path.relative_to(project_dir)) for path in project_dir.rglob("*") if path.is_file()
        )

    return MigrationSources(
        has_project_dir=has_project_dir,
        has_focus_json=has_focus_json,
        project_files=project_files,
        focus_json_path=focus_path if has_focus_json else None,
    )


def convert_focus_to_update(
    focus: dict[str, Any],
    project: str,
    machine: MachineInfo,
) -> UpdateRecord:
    """
    Convert a focus.json document into an update record.

    Recognised keys: ``timestamp``, ``current_focus``, ``session_summary``
    and ``next_session_tasks``. Missing keys fall back to empty values and a
    missing timestamp to now.

    Raises:
        MigrationError: If the document has values of the wrong shape
    """
    try:
        return UpdateRecord(
            timestamp=focus.get("timestamp") or datetime.now(timezone.utc),
            machine=machine.name,
            machine_id=machine.id,
            project=project,
            progress=ProgressSnapshot(
                source=ProgressSource.MIGRATION,
                change=MIGRATED_CHANGE,
            ),
            context=UpdateContext(
                current_task=focus.get("current_focus") or None,
                status=ContextStatus.MIGRATED,
                notes=[focus["session_summary"]] if focus.get("session_summary") else [],
                next=focus.get("next_session_tasks") or [],
            ),
        )
    except ValidationError as e:
        raise MigrationError(f"Invalid focus.json: {e}") from e


def load_focus(path: Path) -> dict[str, Any]:
    """
    Read a focus.json file.

    Raises:
        MigrationError: If the file is not a JSON object
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MigrationError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise MigrationError(f"Expected a JSON object in {path}")
    return data
