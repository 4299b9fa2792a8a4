"""
Helpers shared by CLI commands: loading config and resolving the current
project.
"""

from pathlib import Path

import typer

from mindcontext.cli.errors import (
    ExitCode,
    print_config_error,
    print_no_dashboard_error,
    print_not_connected_error,
    print_not_initialized_error,
)
from mindcontext.core.config import (
    ConfigError,
    MindContextConfig,
    get_repo_dir,
    is_initialized,
    load_config,
    resolve_sync_config,
)
from mindcontext.core.config.models import ProjectConfig
from mindcontext.core.sync import GitBackend


def require_config(quiet: bool = False) -> MindContextConfig:
    """
    Load the config or exit.

    Raises:
        typer.Exit: USER_ERROR if not initialized or the config is invalid
    """
    if not is_initialized():
        if not quiet:
            print_not_initialized_error()
        raise typer.Exit(ExitCode.USER_ERROR)

    try:
        return load_config()
    except ConfigError as e:
        if not quiet:
            print_config_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)


def resolve_project(config: MindContextConfig, cwd: Path | None = None) -> tuple[str, Path]:
    """
    Identify the project for a directory.

    A directory registered under another name (``mctx connect NAME``) maps to
    that name; otherwise the directory's basename is used.

    Returns:
        Tuple of (project name, project path)
    """
    project_path = (cwd or Path.cwd()).resolve()
    name = config.find_project_by_path(str(project_path))
    return name or project_path.name, project_path


def require_project(
    config: MindContextConfig, quiet: bool = False, cwd: Path | None = None
) -> tuple[str, ProjectConfig, Path]:
    """
    Resolve the current project and make sure it is connected.

    Raises:
        typer.Exit: USER_ERROR if the project is not connected
    """
    name, project_path = resolve_project(config, cwd)
    project = config.get_project(name)
    if project is None:
        if not quiet:
            print_not_connected_error(name)
        raise typer.Exit(ExitCode.USER_ERROR)
    return name, project, project_path


def get_backend(config: MindContextConfig) -> GitBackend:
    """Git backend for the dashboard repository clone, honouring env overrides."""
    sync = resolve_sync_config(config)
    return GitBackend(
        get_repo_dir(),
        remote=sync.remote,
        branch=sync.branch,
        push_timeout=sync.push_timeout,
        pull_timeout=sync.pull_timeout,
    )


def require_repo(backend: GitBackend, quiet: bool = False) -> None:
    """
    Make sure the dashboard repository has been cloned.

    Raises:
        typer.Exit: USER_ERROR if there is no local clone
    """
    if not backend.is_repo():
        if not quiet:
            print_no_dashboard_error()
        raise typer.Exit(ExitCode.USER_ERROR)
