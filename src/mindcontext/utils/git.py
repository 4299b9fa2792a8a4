"""
Git utilities for mindcontext.

Reads commit information from tracked projects (not the dashboard
repository, which is handled by mindcontext.core.sync).
"""

from __future__ import annotations

import subprocess
from pathlib import Path


def get_recent_commits(project_path: Path, limit: int = 5) -> list[str]:
    """Get the subjects of a project's most recent commits.

    Args:
        project_path: Project root directory
        limit: Maximum number of commits

    Returns:
        Commit subjects, newest first. Empty if the directory is not a git
        repository, has no commits, or git is not installed.

    Example:
        >>> get_recent_commits(Path("."), limit=3)
        ['Fix parser edge case', 'Add changelog command', 'Initial commit']
    """
    try:
        result = subprocess.run(
            ["git", "log", f"-{limit}", "--format=%s"],
            cwd=project_path,
            capture_output=True,
            text=True,
            check=True,
            timeout=10,
        )
    except subprocess.CalledProcessError:
        return []
    except subprocess.TimeoutExpired:
        return []
    except (FileNotFoundError, NotADirectoryError):
        # Git not installed or project path missing
        return []

    return [line for line in result.stdout.strip().split("\n") if line]
