"""
mindcontext CLI - Progress command.

Shows checklist progress for the current project (or every connected
project) and can open the hosted dashboard.
"""

import webbrowser
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from mindcontext.cli.common import require_config, resolve_project
from mindcontext.cli.errors import ExitCode, print_error
from mindcontext.core.config import MindContextConfig, get_repo_dir
from mindcontext.core.openspec import ProgressSnapshot, ProgressSource, get_progress
from mindcontext.core.updates import UpdateStore

console = Console()

RECENT_ACTIVITY_LIMIT = 5


def progress_bar(percentage: int, width: int = 20) -> str:
    """
    Render a text progress bar.

    Example:
        >>> progress_bar(50, width=10)
        '█████░░░░░'
    """
    filled = round(percentage / 100 * width)
    filled = max(0, min(width, filled))
    return "█" * filled + "░" * (width - filled)


def _read_progress(path: Path) -> ProgressSnapshot:
    try:
        return get_progress(path)
    except OSError as e:
        print_error("Failed to read project progress", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _open_web(config: MindContextConfig, quiet: bool) -> None:
    if not config.dashboard_url:
        if not quiet:
            print_error(
                "No dashboard URL configured",
                solution="mctx config --dashboard-url <url>",
            )
        raise typer.Exit(ExitCode.USER_ERROR)

    if not quiet:
        console.print(f"Opening: {config.dashboard_url}")
    if not webbrowser.open(config.dashboard_url) and not quiet:
        console.print(f"Please open: {config.dashboard_url}")


def _show_all(config: MindContextConfig) -> None:
    console.print("[bold]MindContext Progress[/bold]\n")
    console.print("Projects:")

    for name, project in config.projects.items():
        snapshot = _read_progress(Path(project.path))
        console.print(f"  {escape(name)}")
        console.print(f"    {progress_bar(snapshot.percentage)} {snapshot.percentage}%")
        if snapshot.change:
            console.print(f"    Current: {escape(snapshot.change)}")

    if not config.projects:
        console.print("  (No projects connected)")
        console.print()
        console.print('Run "mctx connect" in a project directory to connect it.')

    if config.dashboard_url:
        console.print()
        console.print(f"Dashboard: {config.dashboard_url}")
        console.print('Run "mctx progress --web" to open in browser.')


def progress(
    web: bool = typer.Option(
        False,
        "--web",
        "-w",
        help="Open the hosted dashboard in a browser",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
) -> None:
    """
    Show progress for the current project.

    Outside a connected project, lists every connected project.

    Examples:
        mctx progress
        mctx progress --web
    """
    config = require_config(quiet)

    if web:
        _open_web(config, quiet)
        return

    if quiet:
        return

    project_name, project_path = resolve_project(config)
    if config.get_project(project_name) is None:
        _show_all(config)
        return

    snapshot = _read_progress(project_path)
    console.print(f"[bold]{escape(project_name)}[/bold]\n")

    if snapshot.source == ProgressSource.FROM_CHECKLIST and snapshot.change:
        console.print(f"Change: {escape(snapshot.change)}")
        console.print(f"Progress: {snapshot.tasks_done}/{snapshot.tasks_total}")
        console.print(f"{progress_bar(snapshot.percentage, width=30)} {snapshot.percentage}%")
    else:
        console.print("No active OpenSpec change.")

    recent = UpdateStore(get_repo_dir()).recent(project_name, limit=RECENT_ACTIVITY_LIMIT)
    if recent:
        console.print("\nRecent Activity:")
        for record in recent:
            local = record.timestamp.astimezone()
            console.print(f"  {local:%Y-%m-%d %H:%M:%S} - {escape(record.machine)}")
            if record.context.notes:
                console.print(f"    Notes: {escape(', '.join(record.context.notes))}")
