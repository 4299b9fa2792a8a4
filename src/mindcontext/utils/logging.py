"""
Structured JSONL event log for mindcontext.

Sync activity is appended to ~/.mindcontext/logs/events.jsonl, one JSON
object per line:

{
  "timestamp": "2026-01-15T12:34:56.789Z",
  "event_type": "sync_completed",
  "data": { ... event-specific data ... }
}
"""

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mindcontext.core.config.loader import get_home_dir

LOG_DIRNAME = "logs"
LOG_FILENAME = "events.jsonl"


class EventType(str, Enum):
    """Types of events that can be logged."""

    UPDATE_CREATED = "update_created"
    SYNC_COMPLETED = "sync_completed"
    PUSH_PENDING = "push_pending"
    QUEUE_FLUSHED = "queue_flushed"
    COMMIT_FAILED = "commit_failed"
    PULL_COMPLETED = "pull_completed"
    ERROR = "error"


class LogEntry(BaseModel):
    """A single structured log entry in JSONL format."""

    model_config = ConfigDict(use_enum_values=True)

    timestamp: datetime = Field(..., description="When the event occurred (ISO 8601 format)")
    event_type: EventType = Field(..., description="Type of event")
    data: dict[str, Any] = Field(default_factory=dict, description="Event-specific data")


class EventLogger:
    """
    Append-only JSONL logger for sync events.

    Each line is valid JSON that can be queried with jq.

    Example:
        logger = EventLogger.default()
        logger.log_event(EventType.SYNC_COMPLETED, {"project": "api", "status": "synced"})
    """

    def __init__(self, log_file: Path):
        """
        Initialize logger with a log file path.

        Args:
            log_file: Path to the JSONL log file (created on first write)
        """
        self.log_file = Path(log_file)

    @staticmethod
    def default() -> "EventLogger":
        """Logger writing to <home>/logs/events.jsonl."""
        return EventLogger(get_home_dir() / LOG_DIRNAME / LOG_FILENAME)

    def log_event(self, event_type: EventType, data: dict[str, Any] | None = None) -> None:
        """
        Append an event to the log file.

        Write failures print a warning and never raise, so logging cannot
        abort a command.

        Args:
            event_type: Type of event (from EventType enum)
            data: Event-specific data (optional, defaults to {})
        """
        if data is None:
            data = {}

        try:
            entry = LogEntry(timestamp=datetime.now(timezone.utc), event_type=event_type, data=data)
            log_line = entry.model_dump_json(exclude_none=True) + "\n"

            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(log_line)

        except OSError as e:
            print(f"Warning: Failed to write to log file {self.log_file}: {e}", flush=True)

    def log_update_created(self, project: str, path: Path) -> None:
        """Log a newly written update record."""
        self.log_event(EventType.UPDATE_CREATED, {"project": project, "file": path.name})

    def log_sync(self, project: str, status: str, message: str, queue_length: int) -> None:
        """
        Log the outcome of a sync attempt.

        Args:
            project: Project that was synced
            status: Terminal sync status value
            message: Human-readable outcome
            queue_length: Pending queue length after the attempt
        """
        if status == "pending":
            event_type = EventType.PUSH_PENDING
        elif status == "commit_failed":
            event_type = EventType.COMMIT_FAILED
        else:
            event_type = EventType.SYNC_COMPLETED

        self.log_event(
            event_type,
            {
                "project": project,
                "status": status,
                "message": message,
                "pending": queue_length,
            },
        )

    def log_error(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Log an error with optional context."""
        data: dict[str, Any] = {"error": message}
        if context:
            data.update(context)
        self.log_event(EventType.ERROR, data)
