"""Utility functions for time handling."""

from .timestamps import (
    ensure_aware,
    ensure_utc,
    format_timestamp,
    hours_between,
    parse_iso_datetime,
    resolve_event_start,
    utc_now,
)

__all__ = [
    "utc_now",
    "ensure_utc",
    "ensure_aware",
    "parse_iso_datetime",
    "resolve_event_start",
    "hours_between",
    "format_timestamp",
]
