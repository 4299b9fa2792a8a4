"""
Configuration loading and persistence.

The configuration lives in a single JSON file under the mindcontext home
directory (``~/.mindcontext/config.json`` by default). Commands load it once,
pass the resulting model into each operation and save it once at the end.

Precedence:
    config file < env vars

Env overrides only apply to the sync settings in use (resolve_sync_config);
the model returned by load_config always mirrors the file, so saving it
never persists a temporary override.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .models import MindContextConfig, SyncConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"
REPO_DIRNAME = "repo"


class ConfigError(Exception):
    """Raised when the configuration is missing or cannot be parsed."""


def get_home_dir() -> Path:
    """
    Get the mindcontext home directory.

    Returns:
        Path from MINDCONTEXT_HOME, or ~/.mindcontext
    """
    if home := os.environ.get("MINDCONTEXT_HOME"):
        return Path(home)
    return Path.home() / ".mindcontext"


def get_config_path() -> Path:
    """Path to the config file."""
    return get_home_dir() / CONFIG_FILENAME


def get_repo_dir() -> Path:
    """Path to the local clone of the dashboard repository."""
    return get_home_dir() / REPO_DIRNAME


def get_project_updates_dir(project_name: str, repo_dir: Path | None = None) -> Path:
    """
    Get the directory holding update records for a project.

    Args:
        project_name: Connected project name
        repo_dir: Dashboard repository (defaults to get_repo_dir())

    Returns:
        Path to <repo>/projects/<project_name>/updates
    """
    if repo_dir is None:
        repo_dir = get_repo_dir()
    return repo_dir / "projects" / project_name / "updates"


def is_initialized() -> bool:
    """Check whether `mctx init` has been run."""
    return get_config_path().exists()


def create_default_config() -> MindContextConfig:
    """
    Create a fresh configuration for this machine.

    Returns:
        MindContextConfig with no dashboard and no projects
    """
    from mindcontext.core.machine import get_machine_info

    return MindContextConfig(machine=get_machine_info())


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        MINDCONTEXT_REMOTE - overrides sync.remote
        MINDCONTEXT_BRANCH - overrides sync.branch
        MINDCONTEXT_PUSH_TIMEOUT - overrides sync.push_timeout

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()
    sync = dict(result.get("sync") or {})

    if remote := os.environ.get("MINDCONTEXT_REMOTE"):
        sync["remote"] = remote

    if branch := os.environ.get("MINDCONTEXT_BRANCH"):
        sync["branch"] = branch

    if timeout_str := os.environ.get("MINDCONTEXT_PUSH_TIMEOUT"):
        try:
            timeout = int(timeout_str)
            if timeout < 1:
                logger.warning(
                    "MINDCONTEXT_PUSH_TIMEOUT must be >= 1, got %d, ignoring", timeout
                )
            else:
                sync["push_timeout"] = timeout
        except ValueError:
            logger.warning("Invalid MINDCONTEXT_PUSH_TIMEOUT value '%s', ignoring", timeout_str)

    if sync:
        result["sync"] = sync
    return result


def load_config(path: Path | None = None) -> MindContextConfig:
    """
    Load and validate the configuration file.

    Args:
        path: Config file to read (defaults to get_config_path())

    Returns:
        Validated MindContextConfig, exactly as stored (no env overrides)

    Raises:
        ConfigError: If the file is missing, not valid JSON or fails validation
    """
    if path is None:
        path = get_config_path()

    if not path.exists():
        raise ConfigError(f"Config not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to parse config at {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config at {path} is not a JSON object")

    # Older configs predate machine info; fill it in rather than failing
    if "machine" not in data:
        from mindcontext.core.machine import get_machine_info

        data["machine"] = get_machine_info().model_dump()

    try:
        return MindContextConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config at {path}: {e}") from e


def resolve_sync_config(config: MindContextConfig) -> SyncConfig:
    """
    Sync settings with environment overrides applied.

    The config itself is not modified.

    Example:
        >>> os.environ["MINDCONTEXT_REMOTE"] = "backup"
        >>> resolve_sync_config(config).remote
        'backup'
    """
    data = apply_env_overrides({"sync": config.sync.model_dump()})
    return SyncConfig(**data["sync"])


def save_config(config: MindContextConfig, path: Path | None = None) -> Path:
    """
    Write the configuration atomically.

    Args:
        config: Configuration to persist
        path: Destination (defaults to get_config_path())

    Returns:
        Path the config was written to
    """
    if path is None:
        path = get_config_path()

    path.parent.mkdir(parents=True, exist_ok=True)

    temp_path = path.with_suffix(".tmp")
    try:
        temp_path.write_text(config.model_dump_json(indent=2), encoding="utf-8")
        temp_path.replace(path)
    except OSError:
        if temp_path.exists():
            temp_path.unlink()
        raise

    logger.debug("Saved config to %s", path)
    return path
