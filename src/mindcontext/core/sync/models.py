"""
Data models for the sync coordinator.

Defines Pydantic models for git results, sync outcomes and the offline
pending queue.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SyncStatus(str, Enum):
    """Terminal state of one sync attempt."""

    SYNCED = "synced"
    PENDING = "pending"
    NO_CHANGES = "no_changes"
    COMMIT_FAILED = "commit_failed"


class GitResult(BaseModel):
    """
    Outcome of a single git operation.

    Backend operations return this instead of raising so callers can
    decide which failures are fatal.
    """

    success: bool
    message: str = ""
    nothing_to_commit: bool = Field(
        default=False,
        description="Commit found a clean working tree (not a failure)",
    )


class SyncResult(BaseModel):
    """
    Result of a sync attempt.

    Example:
        >>> result = coordinator.sync("chore(progress): sync laptop", queue)
        >>> if result.status == SyncStatus.PENDING:
        ...     print(result.message)
    """

    status: SyncStatus
    committed: bool = Field(default=False, description="A new local commit was made")
    pushed: bool = Field(default=False, description="The remote now has the commit")
    message: str = ""
    queue_flushed: bool = Field(
        default=False,
        description="Previously pending commits were pushed during this sync",
    )

    @property
    def success(self) -> bool:
        """Whether the sync completed without a fatal error."""
        return self.status != SyncStatus.COMMIT_FAILED


class PendingQueue(BaseModel):
    """
    Commit messages committed locally but not yet pushed.

    The queue is flushed as a whole: a successful push carries every
    earlier local commit, so entries are never removed individually.
    """

    messages: list[str] = Field(default_factory=list)

    def add(self, message: str) -> None:
        """Append a commit message."""
        self.messages.append(message)

    def clear(self) -> None:
        """Drop every entry."""
        self.messages = []

    def is_empty(self) -> bool:
        return not self.messages

    def __len__(self) -> int:
        return len(self.messages)
