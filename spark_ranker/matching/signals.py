"""Similarity signals used by the profile and event rankers.

Pure functions with no state:
- keyword_similarity: Jaccard overlap between two keyword lists
- shared_keywords: which of the requester's keywords the other side shares
- haversine_distance_km: great-circle distance between two coordinates
- is_gender_compatible: mutual gender/preference compatibility
"""

import math
from typing import Any, List, Optional

from spark_ranker.normalization import normalize_keywords

EARTH_RADIUS_KM = 6371.0

# Preference codes that name a gender differently from the gender field
_PREFERENCE_TARGETS = {"W": "F"}

ANY_GENDER = "B"


def keyword_similarity(keywords_a: Any, keywords_b: Any) -> float:
    """Jaccard similarity between two keyword collections.

    Both sides are normalized and compared case-insensitively as sets.

    Args:
        keywords_a: Keywords in any form accepted by normalize_keywords
        keywords_b: Keywords in any form accepted by normalize_keywords

    Returns:
        |A ∩ B| / |A ∪ B| in [0, 1]; 0 when either side is empty
    """
    set_a = {keyword.lower() for keyword in normalize_keywords(keywords_a)}
    set_b = {keyword.lower() for keyword in normalize_keywords(keywords_b)}

    if not set_a or not set_b:
        return 0.0

    return len(set_a & set_b) / len(set_a | set_b)


def shared_keywords(requester_keywords: Any, other_keywords: Any, limit: int) -> List[str]:
    """Requester keywords also present on the other side.

    Keeps the requester's casing and order; duplicates (case-insensitive) are
    reported once.

    Args:
        requester_keywords: Requester keywords in any accepted form
        other_keywords: Candidate keywords or event tags in any accepted form
        limit: Maximum number of keywords to return

    Returns:
        Up to ``limit`` shared keywords
    """
    other = {keyword.lower() for keyword in normalize_keywords(other_keywords)}
    shared: List[str] = []
    seen = set()
    for keyword in normalize_keywords(requester_keywords):
        lowered = keyword.lower()
        if lowered in other and lowered not in seen:
            seen.add(lowered)
            shared.append(keyword)
    return shared[:limit]


def haversine_distance_km(
    lat1: Optional[float],
    lon1: Optional[float],
    lat2: Optional[float],
    lon2: Optional[float],
) -> Optional[float]:
    """Great-circle distance between two points in kilometers.

    Args:
        lat1, lon1: First point in decimal degrees
        lat2, lon2: Second point in decimal degrees

    Returns:
        Distance in km, or None if any coordinate is missing
    """
    if lat1 is None or lon1 is None or lat2 is None or lon2 is None:
        return None

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    # Rounding can push near-antipodal points just past 1
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def target_gender(preference: Optional[str]) -> Optional[str]:
    """Gender code a preference asks for (W -> F; M, B, O unchanged)."""
    if preference is None:
        return None
    code = _code(preference)
    return _PREFERENCE_TARGETS.get(code, code)


def is_gender_compatible(
    gender_a: Optional[str],
    preference_a: Optional[str],
    gender_b: Optional[str],
    preference_b: Optional[str],
) -> bool:
    """Whether two profiles are mutually compatible.

    Each side must either accept any gender (B) or prefer the other side's
    gender. Swapping the two parties never changes the result.
    """
    return _accepts(preference_a, gender_b) and _accepts(preference_b, gender_a)


def _accepts(preference: Optional[str], gender: Optional[str]) -> bool:
    wanted = target_gender(preference)
    if wanted == ANY_GENDER:
        return True
    return wanted is not None and gender is not None and wanted == _code(gender)


def _code(value: str) -> str:
    # str-valued enums compare equal to their code but format differently
    return getattr(value, "value", value)
