"""
Transform module for money and time normalization.
"""
from finance_tracker.transform.normalizers import (
    normalize_amount,
    parse_instant,
    format_instant,
    format_day,
    utc_now,
    NormalizeError,
)

__all__ = [
    "normalize_amount",
    "parse_instant",
    "format_instant",
    "format_day",
    "utc_now",
    "NormalizeError",
]
