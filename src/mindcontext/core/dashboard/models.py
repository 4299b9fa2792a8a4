"""
Response models for the dashboard API.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from mindcontext.core.openspec.models import ProgressSnapshot
from mindcontext.core.updates.models import ContextStatus, UpdateRecord


class ProjectSummary(BaseModel):
    """One project as listed on the dashboard."""

    name: str
    category: str = "default"
    connected: bool = Field(default=False, description="Registered in this machine's config")
    progress: ProgressSnapshot | None = None
    latest: UpdateRecord | None = None
    update_count: int = 0


class MachineSummary(BaseModel):
    """Latest activity of one machine on a project."""

    machine: str
    machine_id: str
    timestamp: datetime
    status: ContextStatus
    current_task: str | None = None
