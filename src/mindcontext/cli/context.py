"""
mindcontext CLI - Context command.

Prints the current project's progress, the latest update and what other
machines are doing. `--json` output is meant for editor and agent
integrations.
"""

import json
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from mindcontext.cli.common import require_config, resolve_project
from mindcontext.cli.errors import ExitCode, print_error
from mindcontext.core.config import MindContextConfig, get_repo_dir
from mindcontext.core.openspec import ProgressSnapshot, get_progress
from mindcontext.core.updates import UpdateRecord, UpdateStore

console = Console()


def build_context_payload(
    config: MindContextConfig,
    project_name: str,
    progress: ProgressSnapshot,
    records: list[UpdateRecord],
) -> dict[str, Any]:
    """
    Assemble the context document for a project.

    Args:
        config: Loaded configuration
        project_name: Current project
        progress: Progress read from the working tree
        records: Project update records, newest first

    Returns:
        JSON-serializable dict with project, connected, progress,
        lastUpdate and team keys
    """
    latest = records[0] if records else None

    team: list[dict[str, Any]] = []
    seen: set[str] = {config.machine.id}
    for record in records:
        if record.machine_id in seen:
            continue
        seen.add(record.machine_id)
        team.append({
            "machine": record.machine,
            "timestamp": record.timestamp.isoformat(),
            "status": record.context.status.value,
        })

    return {
        "project": project_name,
        "connected": config.get_project(project_name) is not None,
        "progress": {
            "source": progress.source.value,
            "change": progress.change,
            "tasks_done": progress.tasks_done,
            "tasks_total": progress.tasks_total,
            "percentage": progress.percentage,
        },
        "lastUpdate": {
            "timestamp": latest.timestamp.isoformat(),
            "machine": latest.machine,
            "status": latest.context.status.value,
            "notes": list(latest.context.notes),
            "next": list(latest.context.next),
        }
        if latest
        else None,
        "team": team,
    }


def context(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output context as JSON",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
) -> None:
    """
    Show the current project's context.

    Examples:
        mctx context
        mctx context --json
    """
    config = require_config(quiet)
    project_name, project_path = resolve_project(config)

    try:
        progress = get_progress(project_path)
    except OSError as e:
        if not quiet:
            print_error("Failed to read project progress", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    records: list[UpdateRecord] = []
    if config.get_project(project_name) is not None:
        records = UpdateStore(get_repo_dir()).read_all(project_name)

    payload = build_context_payload(config, project_name, progress, records)

    if json_output:
        typer.echo(json.dumps(payload, indent=2))
        return

    if quiet:
        return

    console.print(f"[bold]{escape(project_name)}[/bold]")
    if not payload["connected"]:
        console.print("[dim]Not connected. Run: mctx connect[/dim]")

    if progress.change:
        console.print(
            f"Progress: {escape(progress.change)} "
            f"{progress.tasks_done}/{progress.tasks_total} ({progress.percentage}%)"
        )
    else:
        console.print(f"Progress: no active change ({progress.source.value})")

    last = payload["lastUpdate"]
    if last:
        console.print(
            f"\nLast update: {last['timestamp']} by {last['machine']} [{last['status']}]",
            markup=False,
        )
        for item in last["notes"]:
            console.print(f"  - {item}", markup=False)
        if last["next"]:
            console.print("Next:")
            for item in last["next"]:
                console.print(f"  - {item}", markup=False)

    if payload["team"]:
        console.print("\nTeam:")
        for member in payload["team"]:
            console.print(
                f"  {member['machine']}: {member['status']} ({member['timestamp']})",
                markup=False,
            )
