"""
Openspec progress detection.

Example:
    >>> from mindcontext.core.openspec import get_progress
    >>> snapshot = get_progress(Path("."))
    >>> print(f"{snapshot.tasks_done}/{snapshot.tasks_total}")
"""

from mindcontext.core.openspec.models import (
    ChangeProposal,
    ChangeStatus,
    OpenSpecResult,
    ProgressSnapshot,
    ProgressSource,
    derive_status,
)
from mindcontext.core.openspec.parser import (
    count_tasks,
    get_progress,
    has_openspec,
    parse_change,
    parse_openspec,
    select_active_change,
)

__all__ = [
    "ChangeProposal",
    "ChangeStatus",
    "OpenSpecResult",
    "ProgressSnapshot",
    "ProgressSource",
    "count_tasks",
    "derive_status",
    "get_progress",
    "has_openspec",
    "parse_change",
    "parse_openspec",
    "select_active_change",
]
