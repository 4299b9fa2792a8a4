"""
mindcontext CLI - Sync and push commands.

`sync` writes a progress update for the current project and commits/pushes
the dashboard repository; `push` retries commits left pending while
offline.
"""

import logging

import typer
from rich.console import Console

from mindcontext.cli.common import get_backend, require_config, require_project, require_repo
from mindcontext.cli.errors import ExitCode, print_error
from mindcontext.core.config import get_repo_dir
from mindcontext.core.openspec import ProgressSnapshot, ProgressSource, get_progress
from mindcontext.core.sync import (
    SyncCoordinator,
    SyncStatus,
    load_pending_queue,
    save_pending_queue,
)
from mindcontext.core.updates import ContextStatus, UpdateContext, UpdateStore, create_record
from mindcontext.utils.git import get_recent_commits
from mindcontext.utils.logging import EventLogger, EventType

console = Console()
logger = logging.getLogger(__name__)

COMMIT_MESSAGE_TEMPLATE = "chore(progress): sync {machine}"


def build_context(
    progress: ProgressSnapshot,
    status: ContextStatus | None = None,
    notes: list[str] | None = None,
    next_steps: list[str] | None = None,
) -> UpdateContext:
    """
    Build the session context for an update.

    Without an explicit status, any completed task means in progress.
    """
    if status is None:
        status = ContextStatus.IN_PROGRESS if progress.tasks_done > 0 else ContextStatus.IDLE

    return UpdateContext(
        current_task=f"Working on {progress.change}" if progress.change else None,
        status=status,
        notes=notes or [],
        next=next_steps or [],
    )


def sync(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show the update that would be created without writing it",
    ),
    note: list[str] | None = typer.Option(
        None,
        "--note",
        "-n",
        help="What was done (repeatable)",
    ),
    next_step: list[str] | None = typer.Option(
        None,
        "--next",
        help="What comes next (repeatable)",
    ),
    status: ContextStatus | None = typer.Option(
        None,
        "--status",
        "-s",
        help="Session status (defaults to in_progress once any task is done)",
        case_sensitive=False,
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
) -> None:
    """
    Record progress for the current project and sync it.

    Reads openspec checklist progress, writes an update file to the
    dashboard repository, commits it and pushes. When offline the commit
    is kept locally and pushed on the next sync or `mctx push`.

    Examples:
        mctx sync
        mctx sync --note "Finished auth flow" --next "Write tests"
        mctx sync --status blocked --dry-run
    """
    config = require_config(quiet)
    project_name, _project, project_path = require_project(config, quiet)

    try:
        progress = get_progress(project_path)
    except OSError as e:
        if not quiet:
            print_error("Failed to read project progress", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    context = build_context(progress, status, note, next_step)

    if not quiet:
        console.print(f'Syncing "{project_name}"...')
        if progress.source == ProgressSource.FROM_CHECKLIST and progress.change:
            console.print(f"  Change: {progress.change}")
            console.print(f"  Progress: {progress.tasks_done}/{progress.tasks_total}")

    recent_commits = get_recent_commits(project_path, limit=5)
    record = create_record(project_name, progress, context, config.machine, recent_commits)

    if dry_run:
        if not quiet:
            console.print("\n[yellow]Dry run[/yellow] - would create update file:")
            typer.echo(record.model_dump_json(indent=2, exclude_none=True))
        return

    backend = get_backend(config)
    require_repo(backend, quiet)

    events = EventLogger.default()
    store = UpdateStore(get_repo_dir())
    path = store.write(record)
    events.log_update_created(project_name, path)
    if not quiet:
        console.print(f"  Created: {path}")

    queue = load_pending_queue()
    message = COMMIT_MESSAGE_TEMPLATE.format(machine=config.machine.name)
    result = SyncCoordinator(backend).sync(message, queue)
    save_pending_queue(queue)

    events.log_sync(project_name, result.status.value, result.message, len(queue))
    if result.queue_flushed:
        events.log_event(EventType.QUEUE_FLUSHED, {"project": project_name})

    if result.status == SyncStatus.COMMIT_FAILED:
        if not quiet:
            print_error("Commit failed", reason=result.message)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if quiet:
        return

    if result.status == SyncStatus.SYNCED:
        console.print("[green]✓[/green] Synced successfully")
    elif result.status == SyncStatus.PENDING:
        console.print("[green]✓[/green] Committed locally (push pending)")
        console.print('  Run "mctx push" when online to push changes.')
    else:
        console.print(f"  {result.message}")


def push(
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
) -> None:
    """
    Push commits that were made while offline.

    Examples:
        mctx push
    """
    config = require_config(quiet)
    backend = get_backend(config)
    require_repo(backend, quiet)

    queue = load_pending_queue()
    pending = len(queue)

    if pending:
        pushed = SyncCoordinator(backend).flush(queue)
        save_pending_queue(queue)
    else:
        pushed = backend.push().success

    if not pushed:
        if not quiet:
            reasons = []
            if not backend.is_online():
                reasons.append(f"Remote \"{backend.remote}\" is unreachable (offline)")
            if pending:
                reasons.append(f"{pending} commit(s) still pending")
            print_error(
                "Push failed",
                reason="; ".join(reasons) or None,
                solution="Check your network connection and run: mctx push",
            )
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if pending:
        EventLogger.default().log_event(EventType.QUEUE_FLUSHED, {"pending": pending})

    if not quiet:
        if pending:
            console.print(f"[green]✓[/green] Pushed {pending} pending commit(s)")
        else:
            console.print("[green]✓[/green] Pushed to remote")
