"""
Local web dashboard.

Example:
    >>> from mindcontext.core.dashboard import create_app
    >>> app = create_app(config, get_repo_dir())
"""

from mindcontext.core.dashboard.app import ErrorCode, create_app

__all__ = ["ErrorCode", "create_app"]
