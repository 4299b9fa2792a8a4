"""
mindcontext CLI - Config command.

View and update the global configuration.
"""

import json

import typer
from rich.console import Console

from mindcontext.cli.common import require_config
from mindcontext.cli.errors import ExitCode, print_error
from mindcontext.core.config import save_config

console = Console()


def config(
    get: str | None = typer.Option(
        None,
        "--get",
        help="Print a single config value (e.g. dashboard_url, machine)",
    ),
    dashboard_repo: str | None = typer.Option(
        None,
        "--dashboard-repo",
        help="Set the dashboard repository URL",
    ),
    dashboard_url: str | None = typer.Option(
        None,
        "--dashboard-url",
        help="Set the dashboard web URL",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
) -> None:
    """
    View or update mindcontext configuration.

    Examples:
        mctx config
        mctx config --get dashboard_url
        mctx config --dashboard-repo git@github.com:me/progress.git
        mctx config --dashboard-url https://me.github.io/progress
    """
    current = require_config(quiet)

    if get is not None:
        data = current.model_dump(mode="json")
        if get not in data:
            if not quiet:
                print_error(f"Unknown config key: {get}", reason=f"Known keys: {', '.join(data)}")
            raise typer.Exit(ExitCode.USER_ERROR)

        if not quiet:
            value = data[get]
            if isinstance(value, (dict, list)):
                typer.echo(json.dumps(value, indent=2))
            else:
                typer.echo(value)
        return

    updated = False
    if dashboard_repo is not None:
        current.dashboard_repo = dashboard_repo
        updated = True
    if dashboard_url is not None:
        current.dashboard_url = dashboard_url
        updated = True

    if updated:
        save_config(current)
        if not quiet:
            console.print("[green]✓[/green] Config updated")
        return

    if quiet:
        return

    console.print("[bold]Mindcontext Configuration:[/bold]\n")
    console.print(f"  Dashboard Repo: {current.dashboard_repo or '(not set)'}")
    console.print(f"  Dashboard URL:  {current.dashboard_url or '(not set)'}")
    console.print(f"  Machine:        {current.machine.name} ({current.machine.id})")
    console.print(f"  Projects:       {len(current.projects)} registered")
