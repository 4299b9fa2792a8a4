"""
Standardized error handling and exit codes for the mindcontext CLI.

This module provides consistent error messaging with actionable guidance
and standardized exit codes across all CLI commands.
"""

from enum import IntEnum

from rich.console import Console

console = Console()


class ExitCode(IntEnum):
    """Standard exit codes for mindcontext CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Generic error (git failure, unreadable files)."""

    USER_ERROR = 2
    """User configuration or input error (actionable by user)."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Project 'api' is not connected",
        ...     solution="mctx connect",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def print_not_initialized_error() -> None:
    """Print error when ~/.mindcontext has not been set up."""
    print_error(
        "MindContext is not initialized",
        reason="No config.json found in the mindcontext home directory",
        solution="mctx init",
    )


def print_not_connected_error(project_name: str) -> None:
    """Print error when the current directory is not a connected project."""
    print_error(
        f'Project "{project_name}" is not connected',
        solution="mctx connect",
    )


def print_config_error(message: str) -> None:
    """Print error when the config file cannot be loaded."""
    print_error(
        "Failed to read config",
        reason=message,
        solution="mctx reset --force && mctx init  # to start fresh",
    )


def print_no_dashboard_error() -> None:
    """Print error when a command needs a dashboard repository."""
    print_error(
        "No dashboard repository configured",
        reason="Updates are stored in a local clone of the dashboard repository",
        solution="mctx config --dashboard-repo <url>  # then: mctx init",
    )
