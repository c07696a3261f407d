"""Keyword normalization for loosely typed list fields.

Profile keywords and event tags arrive from storage in one of three physical
encodings of the same "list of strings": an actual list, a JSON-encoded array,
or comma-separated text. Everything downstream works on the canonical list
produced here.
"""

import json
from typing import Any, List


def normalize_keywords(value: Any) -> List[str]:
    """Convert a keywords/tags value into a canonical list of strings.

    Args:
        value: None, a list/tuple, a JSON array string, or comma-separated text

    Returns:
        List of trimmed, non-empty strings in their original order. Unsupported
        types and malformed input degrade to an empty or partial list.

    Example:
        >>> normalize_keywords(" hiking , coffee ,, travel")
        ['hiking', 'coffee', 'travel']
        >>> normalize_keywords('["a","b"]')
        ['a', 'b']
        >>> normalize_keywords(None)
        []
    """
    if value is None:
        return []

    if isinstance(value, (list, tuple)):
        return _from_sequence(value)

    if isinstance(value, str):
        return _from_text(value)

    return []


def _from_sequence(items) -> List[str]:
    """Drop falsy entries and stringify the rest."""
    return [str(item) for item in items if item]


def _from_text(text: str) -> List[str]:
    """Parse a JSON array or comma-separated string."""
    trimmed = text.strip()
    if not trimmed:
        return []

    if _looks_like_json(trimmed):
        try:
            parsed = json.loads(trimmed)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            return _from_sequence(parsed)

    return [segment.strip() for segment in trimmed.split(",") if segment.strip()]


def _looks_like_json(text: str) -> bool:
    return (text.startswith("[") and text.endswith("]")) or (
        text.startswith("{") and text.endswith("}")
    )
