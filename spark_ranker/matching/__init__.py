"""Candidate ranking engine.

This module provides:
- ScoredResult: a candidate with its score, reasons, and keyword similarity
- ProfileRanker / rank_profiles: rank candidate profiles for a requester
- EventRanker / rank_events: rank upcoming events for a requester
- Similarity signals (Jaccard keywords, Haversine distance, gender compatibility)
- Helpers for turning shortlists into assistant payloads and validating replies
"""

from .events import EventRanker, rank_events
from .models import ScoredResult, sort_by_score
from .profiles import ProfileRanker, rank_profiles
from .signals import (
    haversine_distance_km,
    is_gender_compatible,
    keyword_similarity,
    shared_keywords,
    target_gender,
)
from .utils import (
    RecommendationCheck,
    build_event_payload,
    build_profile_payload,
    filter_recommendations,
)

__all__ = [
    "ScoredResult",
    "sort_by_score",
    "ProfileRanker",
    "rank_profiles",
    "EventRanker",
    "rank_events",
    "keyword_similarity",
    "shared_keywords",
    "haversine_distance_km",
    "is_gender_compatible",
    "target_gender",
    "build_profile_payload",
    "build_event_payload",
    "filter_recommendations",
    "RecommendationCheck",
]
