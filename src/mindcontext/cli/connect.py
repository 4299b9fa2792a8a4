"""
mindcontext CLI - Connect command.

Registers the current directory as a tracked project.
"""

from pathlib import Path

import typer
from rich.console import Console

from mindcontext.cli.common import require_config
from mindcontext.core.config import get_repo_dir, save_config
from mindcontext.core.config.models import ProjectConfig
from mindcontext.core.openspec import has_openspec
from mindcontext.core.updates import UpdateStore

console = Console()


def connect(
    name: str | None = typer.Argument(
        None,
        help="Project name (defaults to the directory name)",
    ),
    category: str = typer.Option(
        "default",
        "--category",
        "-c",
        help="Category used to group projects on the dashboard",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
) -> None:
    """
    Connect the current project to mindcontext.

    Detects the openspec layout and creates the project's folder in the
    dashboard repository.

    Examples:
        mctx connect
        mctx connect my-api --category work
    """
    config = require_config(quiet)

    project_path = Path.cwd().resolve()
    project_name = name or project_path.name

    existing = config.get_project(project_name)
    if existing is not None:
        if not quiet:
            console.print(f'Project "{project_name}" is already connected.')
            console.print(f"  Path: {existing.path}")
            console.print(f"  Category: {existing.category}")
            console.print(f"  OpenSpec: {'Yes' if existing.openspec else 'No'}")
        return

    openspec = has_openspec(project_path)
    config.projects[project_name] = ProjectConfig(
        path=str(project_path),
        openspec=openspec,
        category=category,
    )
    save_config(config)

    UpdateStore(get_repo_dir()).ensure_project_dir(project_name)

    if not quiet:
        console.print(f'[green]✓[/green] Connected "{project_name}"')
        console.print(f"  Path: {project_path}")
        console.print(f"  Category: {category}")
        console.print(f"  OpenSpec: {'Detected' if openspec else 'Not found'}")
        console.print()
        console.print('Next: Run "mctx sync" to create your first update.')
