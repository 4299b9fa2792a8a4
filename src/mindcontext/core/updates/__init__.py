"""
Update record models and storage.

Example:
    >>> from mindcontext.core.updates import UpdateStore, create_record
    >>> store = UpdateStore(repo_dir)
    >>> store.write(create_record("my-project", progress, context, machine))
"""

from mindcontext.core.updates.models import (
    ContextStatus,
    UpdateContext,
    UpdateRecord,
    UpdateRecordError,
)
from mindcontext.core.updates.store import UpdateStore, create_record, read_record

__all__ = [
    "ContextStatus",
    "UpdateContext",
    "UpdateRecord",
    "UpdateRecordError",
    "UpdateStore",
    "create_record",
    "read_record",
]
