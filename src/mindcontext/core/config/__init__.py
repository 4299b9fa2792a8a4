"""
Configuration models and loading.

This module provides Pydantic models for the mindcontext configuration and
functions to locate, load and save it.
"""

from .loader import (
    ConfigError,
    create_default_config,
    get_config_path,
    get_home_dir,
    get_project_updates_dir,
    get_repo_dir,
    is_initialized,
    load_config,
    resolve_sync_config,
    save_config,
)
from .models import MachineInfo, MindContextConfig, ProjectConfig, SyncConfig

__all__ = [
    # Models
    "MachineInfo",
    "MindContextConfig",
    "ProjectConfig",
    "SyncConfig",
    # Loader functions
    "ConfigError",
    "create_default_config",
    "get_config_path",
    "get_home_dir",
    "get_project_updates_dir",
    "get_repo_dir",
    "is_initialized",
    "load_config",
    "resolve_sync_config",
    "save_config",
]
