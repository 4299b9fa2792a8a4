"""
Sync coordinator.

Drives one sync attempt against a version-control backend::

    START -> flush queue -> COMMIT -> (nothing to commit: NO_CHANGES)
          -> PUSH -> SYNCED | PENDING

A push failure is never fatal: the local commit stays and the message is
queued so the next successful push carries it. A commit failure ends the
attempt and its message is returned unchanged.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from mindcontext.core.sync.models import GitResult, PendingQueue, SyncResult, SyncStatus

logger = logging.getLogger(__name__)

PENDING_MESSAGE = "Committed locally. Push pending (offline)"
NO_CHANGES_MESSAGE = "No changes to sync"
SYNCED_MESSAGE = "Synced"


@runtime_checkable
class SyncBackend(Protocol):
    """Operations the coordinator needs from a version-control backend."""

    def commit_all(self, message: str) -> GitResult:
        """Stage and commit every change in the working tree."""
        ...

    def push(self) -> GitResult:
        """Push local commits to the remote."""
        ...


class SyncCoordinator:
    """
    Commits and pushes the dashboard repository with offline queuing.

    Example:
        >>> coordinator = SyncCoordinator(GitBackend(repo_dir))
        >>> queue = load_pending_queue()
        >>> result = coordinator.sync("chore(progress): sync laptop", queue)
        >>> save_pending_queue(queue)
    """

    def __init__(self, backend: SyncBackend) -> None:
        self.backend = backend

    def flush(self, queue: PendingQueue) -> bool:
        """
        Push commits that were made while offline.

        The queue is cleared on success and left untouched on failure.

        Returns:
            True if the queue is empty afterwards
        """
        if queue.is_empty():
            return True

        result = self.backend.push()
        if not result.success:
            logger.info("Pending queue still offline (%d entries)", len(queue))
            return False

        logger.info("Flushed %d pending commit(s)", len(queue))
        queue.clear()
        return True

    def sync(self, message: str, queue: PendingQueue) -> SyncResult:
        """
        Run one sync attempt.

        Args:
            message: Commit message for the current changes
            queue: Pending queue, updated in place

        Returns:
            SyncResult with the terminal state of the attempt
        """
        queue_flushed = False
        if not queue.is_empty():
            queue_flushed = self.flush(queue)

        commit = self.backend.commit_all(message)
        if commit.nothing_to_commit:
            return SyncResult(
                status=SyncStatus.NO_CHANGES,
                message=NO_CHANGES_MESSAGE,
                queue_flushed=queue_flushed,
            )
        if not commit.success:
            return SyncResult(
                status=SyncStatus.COMMIT_FAILED,
                message=commit.message,
                queue_flushed=queue_flushed,
            )

        push = self.backend.push()
        if not push.success:
            queue.add(message)
            return SyncResult(
                status=SyncStatus.PENDING,
                committed=True,
                message=PENDING_MESSAGE,
                queue_flushed=queue_flushed,
            )

        # The push carried every earlier local commit too.
        queue.clear()
        return SyncResult(
            status=SyncStatus.SYNCED,
            committed=True,
            pushed=True,
            message=SYNCED_MESSAGE,
            queue_flushed=queue_flushed,
        )
