"""
Git-backed synchronization of the dashboard repository.

Example:
    >>> from mindcontext.core.sync import GitBackend, SyncCoordinator, load_pending_queue
    >>> queue = load_pending_queue()
    >>> result = SyncCoordinator(GitBackend(repo_dir)).sync("sync laptop", queue)
    >>> save_pending_queue(queue)
"""

from mindcontext.core.sync.backend import GitBackend, GitError
from mindcontext.core.sync.coordinator import SyncBackend, SyncCoordinator
from mindcontext.core.sync.models import GitResult, PendingQueue, SyncResult, SyncStatus
from mindcontext.core.sync.queue import get_pending_path, load_pending_queue, save_pending_queue

__all__ = [
    "GitBackend",
    "GitError",
    "GitResult",
    "PendingQueue",
    "SyncBackend",
    "SyncCoordinator",
    "SyncResult",
    "SyncStatus",
    "get_pending_path",
    "load_pending_queue",
    "save_pending_queue",
]
