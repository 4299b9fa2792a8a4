"""Utility modules for mindcontext."""

from .git import get_recent_commits
from .logging import EventLogger, EventType, LogEntry

__all__ = [
    "EventLogger",
    "EventType",
    "LogEntry",
    "get_recent_commits",
]
