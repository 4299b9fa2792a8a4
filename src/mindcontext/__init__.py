"""
MindContext - Git-based project progress tracker

A CLI tool that syncs per-project progress snapshots through a git repository.
"""

__version__ = "0.2.0"

# Re-export core models for convenience
from mindcontext.core.config.models import MindContextConfig
from mindcontext.core.openspec.models import ChangeStatus, ProgressSnapshot, ProgressSource
from mindcontext.core.updates.models import UpdateRecord

__all__ = [
    "ChangeStatus",
    "MindContextConfig",
    "ProgressSnapshot",
    "ProgressSource",
    "UpdateRecord",
    "__version__",
]
