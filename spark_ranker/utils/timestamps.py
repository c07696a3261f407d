"""Timestamp utilities for UTC handling and event start resolution.

This module provides utilities for working with timestamps in UTC:
- Getting current UTC time
- Parsing ISO 8601 date/datetime strings
- Converting timezone-naive to timezone-aware UTC
- Resolving an event's start from its date and optional time of day
"""

from datetime import date, datetime, time, timezone
from typing import Optional, Union


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Current UTC time with timezone info
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware and in UTC.

    If the datetime is timezone-naive, it's treated as UTC.
    If the datetime has a different timezone, it's converted to UTC.

    Args:
        dt: Datetime to convert (can be None)

    Returns:
        Timezone-aware datetime in UTC, or None if input is None

    Example:
        >>> naive = datetime(2025, 11, 4, 12, 0, 0)
        >>> ensure_utc(naive).tzinfo == timezone.utc
        True
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def parse_iso_datetime(iso_string: str, keep_offset: bool = False) -> Optional[datetime]:
    """Parse an ISO 8601 datetime or date string to a timezone-aware datetime.

    Supports:
    - 2025-11-04T12:00:00Z
    - 2025-11-04T12:00:00+02:00
    - 2025-11-04T12:00:00
    - 2025-11-04

    Args:
        iso_string: ISO 8601 formatted string
        keep_offset: Keep the string's own UTC offset instead of converting
            to UTC (naive values are still read as UTC)

    Returns:
        Timezone-aware datetime, or None if parsing fails
    """
    if not iso_string or not iso_string.strip():
        return None

    cleaned = iso_string.strip()
    # fromisoformat() on older interpreters rejects the 'Z' suffix
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(cleaned)
    except ValueError:
        try:
            parsed = datetime.strptime(cleaned, "%Y-%m-%d")
        except ValueError:
            return None

    return ensure_aware(parsed) if keep_offset else ensure_utc(parsed)


def ensure_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """Tag a naive datetime as UTC; leave aware datetimes in their own offset."""
    if dt is None or dt.tzinfo is not None:
        return dt
    return dt.replace(tzinfo=timezone.utc)


def resolve_event_start(
    event_date: Optional[Union[date, datetime]],
    event_time: Optional[time] = None,
) -> Optional[datetime]:
    """Resolve when an event starts, in UTC.

    A plain date starts at midnight unless a time of day is given. When a
    time of day is given it replaces the clock part of the date in the
    date's own offset, and only then is the result converted to UTC
    (naive values are read as UTC).

    Args:
        event_date: Calendar date or datetime of the event
        event_time: Optional time of day the event starts

    Returns:
        Timezone-aware UTC start, or None for an undated event
    """
    if event_date is None:
        return None

    if isinstance(event_date, datetime):
        start = event_date
    else:
        start = datetime.combine(event_date, time.min)

    if event_time is not None:
        start = start.replace(
            hour=event_time.hour,
            minute=event_time.minute,
            second=event_time.second,
            microsecond=event_time.microsecond,
        )

    return ensure_utc(start)


def hours_between(start: datetime, end: datetime) -> float:
    """Return the signed number of hours from ``start`` to ``end``."""
    return (ensure_utc(end) - ensure_utc(start)).total_seconds() / 3600.0


def format_timestamp(dt: datetime) -> str:
    """Format a datetime as ISO 8601 string in UTC with a 'Z' suffix.

    Example:
        >>> format_timestamp(datetime(2025, 11, 4, 12, 0, 0, tzinfo=timezone.utc))
        '2025-11-04T12:00:00Z'
    """
    dt_utc = ensure_utc(dt)
    if dt_utc is None:
        return ""
    return dt_utc.strftime("%Y-%m-%dT%H:%M:%SZ")
