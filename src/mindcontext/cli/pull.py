"""
mindcontext CLI - Pull command.
"""

import typer
from rich.console import Console

from mindcontext.cli.common import get_backend, require_config, require_repo
from mindcontext.cli.errors import ExitCode, print_error
from mindcontext.utils.logging import EventLogger, EventType

console = Console()


def pull(
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
) -> None:
    """
    Pull the latest updates from other machines.

    Examples:
        mctx pull
    """
    config = require_config(quiet)
    backend = get_backend(config)
    require_repo(backend, quiet)

    if not quiet:
        console.print("Pulling latest updates...")

    result = backend.pull()
    if not result.success:
        EventLogger.default().log_error(result.message, {"operation": "pull"})
        if not quiet:
            print_error("Failed to pull", reason=result.message)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    EventLogger.default().log_event(EventType.PULL_COMPLETED, {"remote": backend.remote})
    if not quiet:
        console.print("[green]✓[/green] Updated")
