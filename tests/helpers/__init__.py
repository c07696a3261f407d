"""Test helper utilities for Spark Ranker tests."""

from .factories import (
    BASE_LAT,
    BASE_LON,
    LONG_BIO,
    NOW,
    make_candidate,
    make_event,
    make_requester,
    north_of,
)

__all__ = [
    "NOW",
    "BASE_LAT",
    "BASE_LON",
    "LONG_BIO",
    "north_of",
    "make_requester",
    "make_candidate",
    "make_event",
]
