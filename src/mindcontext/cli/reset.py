"""
mindcontext CLI - Reset command.

Removes the mindcontext home directory so it can be set up again.
"""

import shutil

import typer
from rich.console import Console

from mindcontext.cli.errors import ExitCode, print_error
from mindcontext.core.config import get_home_dir

console = Console()


def reset(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Actually remove everything",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be removed",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
) -> None:
    """
    Remove ~/.mindcontext/ and start fresh.

    Examples:
        mctx reset --dry-run
        mctx reset --force
    """
    home = get_home_dir()

    if not home.exists():
        if not quiet:
            console.print("Nothing to remove. Mindcontext directory does not exist.")
        return

    if dry_run:
        if not quiet:
            console.print(f"Would remove: {home}")
            console.print("\nThis will delete:")
            console.print("  - config.json (global configuration)")
            console.print("  - repo/ (dashboard repository clone)")
            console.print("  - pending.json and logs/ (pending pushes, event log)")
            console.print("\nRun with --force to actually remove.")
        return

    if not force:
        if not quiet:
            print_error(
                "Reset requires --force flag to confirm",
                reason=f"This will remove: {home}",
                solution="mctx reset --force  # or preview with: mctx reset --dry-run",
            )
        raise typer.Exit(ExitCode.USER_ERROR)

    try:
        shutil.rmtree(home)
    except OSError as e:
        if not quiet:
            print_error(f"Failed to remove {home}", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if not quiet:
        console.print(f"[green]✓[/green] Removed {home}")
        console.print('\nRun "mctx init" to set up mindcontext again.')
