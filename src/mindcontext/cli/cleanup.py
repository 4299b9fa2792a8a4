"""
mindcontext CLI - Cleanup command.

Removes old update files from the local dashboard repository clone.
"""

import typer
from rich.console import Console

from mindcontext.cli.common import require_config
from mindcontext.core.cleanup import DEFAULT_OLDER_THAN_DAYS, cleanup_updates
from mindcontext.core.config import get_repo_dir

console = Console()


def cleanup(
    older_than: int = typer.Option(
        DEFAULT_OLDER_THAN_DAYS,
        "--older-than",
        min=0,
        help="Remove update files older than this many days",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be deleted without deleting",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
) -> None:
    """
    Remove old update files.

    Deleted files are removed from the working tree; the next `mctx sync`
    commits the removal.

    Examples:
        mctx cleanup
        mctx cleanup --older-than 7
        mctx cleanup --dry-run
    """
    config = require_config(quiet)

    result = cleanup_updates(
        get_repo_dir(),
        list(config.projects),
        older_than_days=older_than,
        dry_run=dry_run,
    )

    if quiet:
        return

    verb = "Would delete" if dry_run else "Deleted"
    for name in result.files:
        console.print(f"{verb}: {name}", markup=False)

    console.print()
    if dry_run:
        console.print(result.summary(dry_run=True))
    else:
        console.print(f"[green]✓[/green] {result.summary()}")
