"""
Data models for update records.

An update record is one immutable, timestamped snapshot of a project's
progress plus free-form notes, written once per sync as its own JSON file.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mindcontext.core.openspec.models import ProgressSnapshot

RECORD_VERSION = "1.0"


class ContextStatus(str, Enum):
    """What the developer was doing when the update was recorded."""

    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    REVIEW = "review"
    MIGRATED = "migrated"


class UpdateContext(BaseModel):
    """Free-form session notes attached to an update."""

    model_config = ConfigDict(frozen=True)

    current_task: str | None = Field(default=None, description="What is being worked on")
    status: ContextStatus = Field(default=ContextStatus.IDLE)
    notes: list[str] = Field(default_factory=list, description="What was done")
    next: list[str] = Field(default_factory=list, description="What comes next")


class UpdateRecord(BaseModel):
    """
    One persisted progress update.

    Records are never modified after creation; the filename (timestamp plus
    machine identity) keeps them unique across machines.

    Example:
        >>> record.model_dump_json(indent=2, exclude_none=True)
    """

    model_config = ConfigDict(frozen=True)

    version: str = Field(default=RECORD_VERSION, description="Record format version")
    timestamp: datetime = Field(description="When the update was created (ISO 8601)")
    machine: str = Field(description="Name of the machine that wrote the update")
    machine_id: str = Field(description="Stable short id of that machine")
    project: str = Field(description="Project the update belongs to")
    progress: ProgressSnapshot
    context: UpdateContext = Field(default_factory=UpdateContext)
    recent_commits: list[str] | None = Field(
        default=None,
        description="Subjects of the project's latest commits, newest first",
    )

    @field_validator("timestamp")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Naive timestamps are taken as UTC so records stay comparable."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class UpdateRecordError(Exception):
    """Raised when an update record file cannot be parsed."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
