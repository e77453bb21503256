"""Utility functions for repostore."""

import re
from datetime import datetime, timezone

_DATA_SIZE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([KMGT]?B?)\s*$", re.IGNORECASE)

_UNITS = {
    "": 1,
    "B": 1,
    "K": 1024,
    "KB": 1024,
    "M": 1024 ** 2,
    "MB": 1024 ** 2,
    "G": 1024 ** 3,
    "GB": 1024 ** 3,
    "T": 1024 ** 4,
    "TB": 1024 ** 4,
}


def humanize_size(size: float) -> str:
    """Convert bytes to human-readable format."""
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024.:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def parse_data_size(value: str) -> int:
    """Parse a data size such as ``"10GB"`` or ``"512 mb"`` into bytes.

    Units are 1024-based. A bare number is taken as bytes.

    Raises:
        ValueError: If the value is not a recognizable data size
    """
    match = _DATA_SIZE.match(value)
    if not match:
        raise ValueError(f"Invalid data size: {value!r}")

    number, unit = match.groups()
    return int(float(number) * _UNITS[unit.upper()])


def format_timestamp(dt: datetime) -> str:
    """Format a timestamp for display, e.g. ``2025-08-26 02:51:17``."""
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
