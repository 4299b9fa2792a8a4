"""
Changelog generation from update records.

Records are filtered to a recent window, grouped by UTC calendar date
(newest date first) and rendered as markdown or JSON.
"""

from __future__ import annotations

import datetime as dt
from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field, TypeAdapter

from mindcontext.core.updates.models import UpdateRecord

DEFAULT_DAYS = 7


class ChangelogUpdate(BaseModel):
    """One update as it appears in the changelog."""

    timestamp: datetime
    machine: str
    change: str | None = None
    tasks_done: int = 0
    tasks_total: int = 0
    status: str
    notes: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: UpdateRecord) -> ChangelogUpdate:
        return cls(
            timestamp=record.timestamp,
            machine=record.machine,
            change=record.progress.change,
            tasks_done=record.progress.tasks_done,
            tasks_total=record.progress.tasks_total,
            status=record.context.status.value,
            notes=list(record.context.notes),
        )


class ChangelogEntry(BaseModel):
    """All updates from one calendar day."""

    date: dt.date
    updates: list[ChangelogUpdate] = Field(default_factory=list)


_ENTRIES_ADAPTER = TypeAdapter(list[ChangelogEntry])


def filter_recent(
    records: list[UpdateRecord],
    days: int = DEFAULT_DAYS,
    now: datetime | None = None,
) -> list[UpdateRecord]:
    """
    Keep records created within the last ``days`` days.

    Args:
        records: Records to filter
        days: Size of the window
        now: Reference time (defaults to now, UTC)
    """
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(days=days)
    return [r for r in records if r.timestamp >= cutoff]


def group_by_date(records: list[UpdateRecord]) -> list[ChangelogEntry]:
    """
    Group records by UTC date.

    Returns:
        One entry per date, newest date first. Within a date, records keep
        the order they were given in.
    """
    by_date: dict[dt.date, list[ChangelogUpdate]] = {}
    for record in records:
        day = record.timestamp.astimezone(timezone.utc).date()
        by_date.setdefault(day, []).append(ChangelogUpdate.from_record(record))

    return [
        ChangelogEntry(date=day, updates=updates)
        for day, updates in sorted(by_date.items(), key=lambda item: item[0], reverse=True)
    ]


def render_markdown(project: str, days: int, entries: list[ChangelogEntry]) -> str:
    """
    Render a changelog as markdown.

    Example output::

        # Changelog: api

        Last 7 days

        ## Thu, Jan 15, 2026

        - **14:02** [laptop] add-auth (3/5)
          - Wired up the token endpoint
    """
    lines = [f"# Changelog: {project}", "", f"Last {days} days", ""]

    for entry in entries:
        lines.append(f"## {entry.date.strftime('%a, %b %d, %Y')}")
        lines.append("")

        for update in entry.updates:
            time = update.timestamp.astimezone(timezone.utc).strftime("%H:%M")
            progress = f" ({update.tasks_done}/{update.tasks_total})" if update.tasks_total > 0 else ""
            lines.append(f"- **{time}** [{update.machine}] {update.change or 'Manual update'}{progress}")
            for note in update.notes:
                lines.append(f"  - {note}")

        lines.append("")

    return "\n".join(lines)


def render_json(entries: list[ChangelogEntry]) -> str:
    """Render a changelog as a JSON array."""
    return _ENTRIES_ADAPTER.dump_json(entries, indent=2).decode("utf-8")
