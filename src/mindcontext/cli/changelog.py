"""
mindcontext CLI - Changelog command.
"""

from enum import Enum

import typer
from rich.console import Console

from mindcontext.cli.common import require_config, require_project
from mindcontext.core.changelog import (
    DEFAULT_DAYS,
    filter_recent,
    group_by_date,
    render_json,
    render_markdown,
)
from mindcontext.core.config import get_repo_dir
from mindcontext.core.updates import UpdateStore

console = Console()


class ChangelogFormat(str, Enum):
    """Output formats for the changelog."""

    MD = "md"
    JSON = "json"


def changelog(
    days: int = typer.Option(
        DEFAULT_DAYS,
        "--days",
        "-d",
        min=1,
        help="Number of days to include",
    ),
    output_format: ChangelogFormat = typer.Option(
        ChangelogFormat.MD,
        "--format",
        "-f",
        help="Output format",
        case_sensitive=False,
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
) -> None:
    """
    Generate a changelog from recent updates.

    Examples:
        mctx changelog
        mctx changelog --days 30 --format json
    """
    config = require_config(quiet)
    project_name, _project, _path = require_project(config, quiet)

    records = filter_recent(UpdateStore(get_repo_dir()).read_all(project_name), days)
    if not records:
        if not quiet:
            console.print(f"No updates in the last {days} days.")
        return

    entries = group_by_date(records)
    if output_format == ChangelogFormat.JSON:
        typer.echo(render_json(entries))
    else:
        typer.echo(render_markdown(project_name, days, entries))
