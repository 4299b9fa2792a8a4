"""
Update record storage layer.

Records live in the dashboard repository, one JSON file per update::

    <repo>/projects/<project>/updates/2026-01-15T12-34-56_laptop_abc12345.json

Writing never touches existing files. Reading a collection skips files that
fail to parse so that one corrupt record does not hide the rest.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from mindcontext.core.config.loader import get_project_updates_dir
from mindcontext.core.config.models import MachineInfo
from mindcontext.core.machine import generate_update_filename
from mindcontext.core.openspec.models import ProgressSnapshot
from mindcontext.core.updates.models import UpdateContext, UpdateRecord, UpdateRecordError

logger = logging.getLogger(__name__)


def create_record(
    project: str,
    progress: ProgressSnapshot,
    context: UpdateContext,
    machine: MachineInfo,
    recent_commits: list[str] | None = None,
    timestamp: datetime | None = None,
) -> UpdateRecord:
    """
    Build a new update record stamped with the current time.

    Args:
        project: Project name
        progress: Progress snapshot to record
        context: Session notes
        machine: Identity of this machine
        recent_commits: Optional commit subjects from the project
        timestamp: Override the creation time (defaults to now, UTC)

    Returns:
        A frozen UpdateRecord
    """
    return UpdateRecord(
        timestamp=timestamp or datetime.now(timezone.utc),
        machine=machine.name,
        machine_id=machine.id,
        project=project,
        progress=progress,
        context=context,
        recent_commits=recent_commits,
    )


def read_record(path: Path) -> UpdateRecord:
    """
    Read a single update record file.

    Raises:
        UpdateRecordError: If the file cannot be read or is not a valid update record
    """
    try:
        return UpdateRecord.model_validate_json(path.read_text(encoding="utf-8"))
    except (ValidationError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise UpdateRecordError(f"Invalid update record {path.name}: {e}", str(path)) from e
    except OSError as e:
        raise UpdateRecordError(f"Unreadable update record {path.name}: {e}", str(path)) from e


class UpdateStore:
    """
    Reads and writes update records in the dashboard repository.

    Example:
        >>> store = UpdateStore(get_repo_dir())
        >>> path = store.write(record)
        >>> store.latest("my-project")
    """

    def __init__(self, repo_dir: Path):
        """
        Initialize store with a dashboard repository directory.

        Args:
            repo_dir: Root of the local dashboard repository clone
        """
        self.repo_dir = Path(repo_dir)

    def updates_dir(self, project: str) -> Path:
        """Directory holding the update files for a project."""
        return get_project_updates_dir(project, self.repo_dir)

    def ensure_project_dir(self, project: str) -> Path:
        """Create the updates directory for a project if needed."""
        updates_dir = self.updates_dir(project)
        updates_dir.mkdir(parents=True, exist_ok=True)
        return updates_dir

    def list_projects(self) -> list[str]:
        """Names of all projects with a directory in the repository."""
        projects_dir = self.repo_dir / "projects"
        if not projects_dir.is_dir():
            return []
        return sorted(entry.name for entry in projects_dir.iterdir() if entry.is_dir())

    def list_update_files(self, project: str) -> list[Path]:
        """All update files for a project, sorted by filename."""
        updates_dir = self.updates_dir(project)
        if not updates_dir.is_dir():
            return []
        return sorted(updates_dir.glob("*.json"))

    def write(self, record: UpdateRecord) -> Path:
        """
        Persist an update record as a new file.

        If a file with the generated name already exists (two updates from
        the same machine within one second) a numeric suffix is added.

        Args:
            record: Record to write

        Returns:
            Path of the written file
        """
        updates_dir = self.ensure_project_dir(record.project)
        machine = MachineInfo(name=record.machine, id=record.machine_id)
        filename = generate_update_filename(machine, record.timestamp)

        path = updates_dir / filename
        counter = 2
        while path.exists():
            path = updates_dir / f"{Path(filename).stem}-{counter}.json"
            counter += 1

        path.write_text(record.model_dump_json(indent=2, exclude_none=True), encoding="utf-8")
        logger.debug("Wrote update record %s", path)
        return path

    def read_all(self, project: str) -> list[UpdateRecord]:
        """
        Read every update record for a project.

        Malformed files are skipped.

        Returns:
            Records sorted by timestamp, newest first
        """
        records: list[UpdateRecord] = []
        for path in self.list_update_files(project):
            try:
                records.append(read_record(path))
            except UpdateRecordError as e:
                logger.debug("Skipping %s", e)
                continue

        records.sort(key=lambda r: r.timestamp, reverse=True)
        return records

    def latest(self, project: str) -> UpdateRecord | None:
        """The most recent update for a project, if any."""
        records = self.read_all(project)
        return records[0] if records else None

    def recent(self, project: str, limit: int = 10) -> list[UpdateRecord]:
        """The newest ``limit`` updates for a project."""
        return self.read_all(project)[:limit]

    def latest_by_machine(self, project: str) -> dict[str, UpdateRecord]:
        """
        The most recent update from each machine.

        Returns:
            Mapping of machine_id to that machine's newest record
        """
        by_machine: dict[str, UpdateRecord] = {}
        for record in self.read_all(project):
            if record.machine_id not in by_machine:
                by_machine[record.machine_id] = record
        return by_machine
