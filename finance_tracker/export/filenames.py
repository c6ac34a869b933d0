"""
Export filename generation.

Two schemes:
- TIMESTAMPED (canonical): {prefix}_{YYYYMMDD_HHMMSS}.{ext}, UTC, second precision
- DATED (legacy): {prefix}-{YYYY-MM-DD}.{ext}

Two calls within the same UTC second (or day, for DATED) yield the same name.
That window is acceptable for single-request downloads.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from finance_tracker.transform.normalizers import parse_instant, utc_now


class FilenameScheme(str, Enum):
    """Export filename scheme."""

    TIMESTAMPED = "timestamped"
    DATED = "dated"


def generate_export_filename(
    prefix: str, extension: str, now: Optional[datetime] = None
) -> str:
    """
    Generate a timestamped export filename.

    Args:
        prefix: Filename prefix (e.g., "transactions")
        extension: Format extension without dot (e.g., "csv")
        now: Instant to stamp (default: current UTC time)

    Returns:
        Filename like "transactions_20240115_103000.csv"
    """
    stamp = parse_instant(now or utc_now()).strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{stamp}.{extension}"


def generate_dated_filename(
    prefix: str, extension: str, now: Optional[datetime] = None
) -> str:
    """
    Generate a date-stamped export filename (legacy form).

    Returns:
        Filename like "transactions-2024-01-15.csv"
    """
    day = parse_instant(now or utc_now()).strftime("%Y-%m-%d")
    return f"{prefix}-{day}.{extension}"


def generate_filename(
    scheme: FilenameScheme,
    prefix: str,
    extension: str,
    now: Optional[datetime] = None,
) -> str:
    """Generate a filename with the given scheme."""
    if scheme == FilenameScheme.DATED:
        return generate_dated_filename(prefix, extension, now)
    return generate_export_filename(prefix, extension, now)
