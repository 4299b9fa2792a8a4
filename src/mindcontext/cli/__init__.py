"""
MindContext CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging

import typer
from rich.console import Console

from mindcontext import __version__
from mindcontext.cli import (
    changelog,
    cleanup,
    config,
    connect,
    context,
    dashboard,
    init_cmd,
    migrate,
    progress,
    pull,
    reset,
    sync,
)
from mindcontext.core.config.env import load_layered_env

# Help panel names for command grouping
PANEL_KEY = "Key Commands"
PANEL_VIEW = "See Progress"
PANEL_MANAGE = "Manage Your Installation"

# Create the main Typer app
app = typer.Typer(
    name="mctx",
    help="Git-based project progress tracker",
    no_args_is_help=True,
    add_completion=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    MindContext - sync "what I did / what's next" across machines.

    Progress snapshots are written as JSON files to a git-backed dashboard
    repository and pushed, so every machine (and the web dashboard) sees
    the latest state of every project.

    Quick Start:
        1. mctx init                 # Clone your dashboard repo
        2. cd my-project && mctx connect
        3. mctx sync                 # Record progress and push

    Documentation:
        mctx --help                  # This message
        mctx <command> --help        # Help for specific command
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()

    if debug:
        logging.basicConfig(level=logging.DEBUG)

    # Store debug flag in context for subcommands
    ctx.obj = {"debug": debug}


# =============================================================================
# Key Commands
# =============================================================================

app.command(name="init", rich_help_panel=PANEL_KEY)(init_cmd.main)
app.command(name="connect", rich_help_panel=PANEL_KEY)(connect.connect)
app.command(name="sync", rich_help_panel=PANEL_KEY)(sync.sync)
app.command(name="push", rich_help_panel=PANEL_KEY)(sync.push)
app.command(name="pull", rich_help_panel=PANEL_KEY)(pull.pull)


# =============================================================================
# See Progress
# =============================================================================

app.command(name="context", rich_help_panel=PANEL_VIEW)(context.context)
app.command(name="progress", rich_help_panel=PANEL_VIEW)(progress.progress)
app.command(name="changelog", rich_help_panel=PANEL_VIEW)(changelog.changelog)
app.command(name="dashboard", rich_help_panel=PANEL_VIEW)(dashboard.dashboard)


# =============================================================================
# Manage Your Installation
# =============================================================================

app.command(name="config", rich_help_panel=PANEL_MANAGE)(config.config)
app.command(name="cleanup", rich_help_panel=PANEL_MANAGE)(cleanup.cleanup)
app.command(name="migrate", rich_help_panel=PANEL_MANAGE)(migrate.migrate)
app.command(name="reset", rich_help_panel=PANEL_MANAGE)(reset.reset)


@app.command(rich_help_panel=PANEL_MANAGE)
def version() -> None:
    """Show mindcontext version and exit."""
    console.print(f"mindcontext version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    cli_main()
