"""
Machine identity and update filename generation.

Update files are named ``<timestamp>_<machine-name>_<machine-id>.json`` so
that several machines can write into the same repository without any
coordination: names sort chronologically and never collide across machines.
"""

from __future__ import annotations

import getpass
import hashlib
import platform
import re
import socket
from datetime import datetime, timezone

from mindcontext.core.config.models import MachineInfo

FILENAME_TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"


def _sanitize_name(raw: str) -> str:
    """Lowercase a hostname and reduce it to letters, digits and dashes."""
    name = raw.split(".")[0].lower()
    name = re.sub(r"[^a-z0-9-]+", "-", name).strip("-")
    name = re.sub(r"-{2,}", "-", name)
    return name or "unknown"


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        # No passwd entry (containers, CI)
        return "unknown"


def get_machine_info() -> MachineInfo:
    """
    Get the identity of the current machine.

    The id is derived from hostname, user and platform, so it is stable
    across calls and processes on the same machine.

    Returns:
        MachineInfo with a sanitized name and an 8-character hex id

    Example:
        >>> info = get_machine_info()
        >>> len(info.id)
        8
    """
    hostname = socket.gethostname()
    fingerprint = "|".join([hostname, _current_user(), platform.system(), platform.machine()])
    machine_id = hashlib.sha256(fingerprint.encode()).hexdigest()[:8]
    return MachineInfo(name=_sanitize_name(hostname), id=machine_id)


def format_timestamp(dt: datetime | None = None) -> str:
    """
    Format a timestamp for use in filenames.

    Colons are replaced with dashes (``2026-01-15T12-34-56``) so the result
    is filesystem safe on every platform and still sorts lexicographically.

    Args:
        dt: Timestamp to format (defaults to now). Naive values are taken as UTC.

    Returns:
        Timestamp string in UTC
    """
    if dt is None:
        dt = datetime.now(timezone.utc)
    elif dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(FILENAME_TIMESTAMP_FORMAT)


def generate_update_filename(machine: MachineInfo, dt: datetime | None = None) -> str:
    """
    Generate the filename for a new update record.

    Args:
        machine: Identity of the writing machine
        dt: Timestamp of the update (defaults to now)

    Returns:
        Filename like ``2026-01-15T12-34-56_laptop_abc12345.json``
    """
    return f"{format_timestamp(dt)}_{machine.name}_{machine.id}.json"
