"""
mindcontext CLI - Migrate command.

Converts `.claude/focus.json` into an update record and reports `.project/`
files that need to be moved by hand.
"""

import typer
from rich.console import Console

from mindcontext.cli.common import require_config, resolve_project
from mindcontext.cli.errors import ExitCode, print_error
from mindcontext.core.config import get_repo_dir
from mindcontext.core.migrate import (
    MigrationError,
    convert_focus_to_update,
    detect_migration_sources,
    load_focus,
)
from mindcontext.core.updates import UpdateStore

console = Console()


def migrate(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be migrated",
    ),
    skip_focus: bool = typer.Option(
        False,
        "--skip-focus",
        help="Do not migrate .claude/focus.json",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
) -> None:
    """
    Migrate older progress files into mindcontext.

    Examples:
        mctx migrate --dry-run
        mctx migrate
    """
    config = require_config(quiet)
    project_name, project_path = resolve_project(config)
    sources = detect_migration_sources(project_path)

    if not sources.found:
        if not quiet:
            console.print("Nothing to migrate.")
            console.print("  - No .project/ directory found")
            console.print("  - No .claude/focus.json found")
        return

    if not quiet:
        console.print("Migration sources detected:\n")
        if sources.has_project_dir:
            console.print("  .project/ directory:")
            for name in sources.project_files:
                console.print(f"    - {name}", markup=False)
        if sources.has_focus_json:
            console.print("  .claude/focus.json: Found")
        console.print()

    if dry_run:
        if not quiet:
            console.print("Dry-run mode - no changes made.")
            if sources.has_focus_json and not skip_focus:
                console.print("\nWould migrate focus.json to update file.")
            if sources.has_project_dir:
                console.print("\n.project/ files would need manual migration.")
        return

    migrated = False
    if sources.has_focus_json and not skip_focus and sources.focus_json_path is not None:
        if not quiet:
            console.print("Migrating focus.json...")
        try:
            focus = load_focus(sources.focus_json_path)
            record = convert_focus_to_update(focus, project_name, config.machine)
        except (MigrationError, OSError) as e:
            if not quiet:
                print_error("Failed to migrate focus.json", reason=str(e))
            raise typer.Exit(ExitCode.GENERAL_ERROR)

        path = UpdateStore(get_repo_dir()).write(record)
        migrated = True
        if not quiet:
            console.print(f"  [green]✓[/green] Created update file: {path.name}")

    if sources.has_project_dir and not quiet:
        console.print("\n.project/ migration is not automated.")
        console.print("Files remain in .project/ - manual migration recommended.")

    if migrated and not quiet:
        console.print("\n[green]✓[/green] Migration complete.")
