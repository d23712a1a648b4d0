"""
DateTime Utilities for NetOps

All timestamps are stored and returned in UTC.

Usage:
    from netops_core.utils.datetime import utc_now, format_iso

    now = utc_now()
    timestamp_str = format_iso(now)
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """
    Get the current UTC time as a timezone-aware datetime.

    Returns:
        datetime: Current UTC time with tzinfo=timezone.utc
    """
    return datetime.now(timezone.utc)


def to_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Convert a datetime to UTC.

    If the datetime is naive (no timezone), it's assumed to be UTC. SQLite hands
    timestamps back naive, PostgreSQL hands them back aware.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Format a datetime as an ISO 8601 UTC string with microsecond precision
    (e.g. "2024-01-15T10:30:00.123456Z"), the precision the column stores.

    Returns None if input is None.
    """
    if dt is None:
        return None

    return to_utc(dt).isoformat(timespec="microseconds").replace("+00:00", "Z")
