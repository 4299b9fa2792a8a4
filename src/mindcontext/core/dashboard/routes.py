"""
Project API routes for the dashboard.

- GET /api/projects - All projects with their latest update
- GET /api/projects/{name}/updates - Recent updates for one project
- GET /api/projects/{name}/machines - Latest update per machine
"""

from fastapi import APIRouter, HTTPException, Query, Request, status

from mindcontext.core.config.models import MindContextConfig
from mindcontext.core.dashboard.models import MachineSummary, ProjectSummary
from mindcontext.core.updates.models import UpdateRecord
from mindcontext.core.updates.store import UpdateStore

router = APIRouter()


def _store(request: Request) -> UpdateStore:
    return request.app.state.store


def _config(request: Request) -> MindContextConfig:
    return request.app.state.config


def _known_projects(request: Request) -> list[str]:
    names = set(_store(request).list_projects())
    names.update(_config(request).projects)
    return sorted(names)


def _require_project(request: Request, name: str) -> None:
    if name not in _known_projects(request):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project not found: {name}",
        )


@router.get("/projects", response_model=list[ProjectSummary])
async def list_projects(request: Request) -> list[ProjectSummary]:
    """
    List every project known to the dashboard.

    A project is known if it is registered in the config or has a
    directory in the dashboard repository (updates pushed by other
    machines).
    """
    store = _store(request)
    config = _config(request)

    summaries = []
    for name in _known_projects(request):
        records = store.read_all(name)
        latest = records[0] if records else None
        project = config.get_project(name)
        summaries.append(
            ProjectSummary(
                name=name,
                category=project.category if project else "default",
                connected=project is not None,
                progress=latest.progress if latest else None,
                latest=latest,
                update_count=len(records),
            )
        )
    return summaries


@router.get("/projects/{name}/updates", response_model=list[UpdateRecord])
async def get_project_updates(
    request: Request,
    name: str,
    limit: int = Query(default=10, ge=1, le=500, description="Maximum updates to return"),
) -> list[UpdateRecord]:
    """
    Get the most recent updates for a project, newest first.

    Raises:
        HTTPException: 404 if the project is unknown
    """
    _require_project(request, name)
    return _store(request).recent(name, limit=limit)


@router.get("/projects/{name}/machines", response_model=list[MachineSummary])
async def get_project_machines(request: Request, name: str) -> list[MachineSummary]:
    """
    Get the latest update from each machine working on a project.

    Raises:
        HTTPException: 404 if the project is unknown
    """
    _require_project(request, name)
    latest = _store(request).latest_by_machine(name)
    return [
        MachineSummary(
            machine=record.machine,
            machine_id=record.machine_id,
            timestamp=record.timestamp,
            status=record.context.status,
            current_task=record.context.current_task,
        )
        for record in sorted(latest.values(), key=lambda r: r.timestamp, reverse=True)
    ]
