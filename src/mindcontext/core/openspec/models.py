"""
Data models for openspec progress detection.

A change proposal is a folder under ``openspec/changes/`` holding a
``tasks.md`` checklist. Proposals are derived from the checklist text on
every read and never persisted; the ProgressSnapshot distilled from them is
what ends up in update records.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class ChangeStatus(str, Enum):
    """Status of a change proposal, derived from its checklist counts."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class ProgressSource(str, Enum):
    """Where the progress numbers of a snapshot came from."""

    FROM_CHECKLIST = "openspec"
    MANUAL = "manual"
    MIGRATION = "migration"


def derive_status(tasks_complete: int, tasks_total: int) -> ChangeStatus:
    """
    Classify a proposal from its checklist counts.

    A proposal with no checklist items is not started.

    Args:
        tasks_complete: Number of checked items
        tasks_total: Number of checklist items

    Returns:
        The derived ChangeStatus
    """
    if tasks_total > 0 and tasks_complete == tasks_total:
        return ChangeStatus.DONE
    if 0 < tasks_complete < tasks_total:
        return ChangeStatus.IN_PROGRESS
    return ChangeStatus.NOT_STARTED


class ChangeProposal(BaseModel):
    """
    One unit of planned work (a folder under openspec/changes/).

    Example:
        >>> proposal = ChangeProposal(id="add-auth", tasks_total=4, tasks_complete=2)
        >>> proposal.status
        <ChangeStatus.IN_PROGRESS: 'in_progress'>
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Folder name of the proposal")
    tasks_total: int = Field(default=0, ge=0, description="Number of checklist items")
    tasks_complete: int = Field(default=0, ge=0, description="Number of checked items")

    @model_validator(mode="after")
    def check_counts(self) -> ChangeProposal:
        if self.tasks_complete > self.tasks_total:
            raise ValueError(
                f"tasks_complete ({self.tasks_complete}) exceeds "
                f"tasks_total ({self.tasks_total})"
            )
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> ChangeStatus:
        """Status derived from the checklist counts."""
        return derive_status(self.tasks_complete, self.tasks_total)


class OpenSpecResult(BaseModel):
    """Result of scanning a project for openspec change proposals."""

    found: bool = Field(description="Whether the project uses the openspec layout")
    changes: list[ChangeProposal] = Field(default_factory=list)
    active_change: ChangeProposal | None = Field(
        default=None,
        description="The proposal currently in progress, if any",
    )


class ProgressSnapshot(BaseModel):
    """
    Progress of a project at one point in time.

    Copied from the active change proposal, or zeros when there is none.
    """

    model_config = ConfigDict(frozen=True)

    source: ProgressSource = Field(description="Where the numbers came from")
    change: str | None = Field(default=None, description="Id of the active proposal")
    tasks_done: int = Field(default=0, ge=0)
    tasks_total: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_counts(self) -> ProgressSnapshot:
        if self.tasks_done > self.tasks_total:
            raise ValueError(
                f"tasks_done ({self.tasks_done}) exceeds tasks_total ({self.tasks_total})"
            )
        return self

    @property
    def percentage(self) -> int:
        """Completion percentage, rounded; 0 when there are no tasks."""
        if self.tasks_total == 0:
            return 0
        return round(self.tasks_done / self.tasks_total * 100)
