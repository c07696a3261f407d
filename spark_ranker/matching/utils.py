"""Utility functions for preparing ranked shortlists for downstream consumers.

The conversational assistant receives the shortlist as flat dicts and may
only refer back to candidates it was given; filter_recommendations enforces
that on its replies.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from spark_ranker.logging import get_logger
from spark_ranker.utils.timestamps import format_timestamp, resolve_event_start

from .models import ScoredResult

logger = get_logger(__name__, component="ranking")


def build_profile_payload(result: ScoredResult, today: Optional[date] = None) -> Dict[str, Any]:
    """Build the prompt payload for a ranked profile.

    Args:
        result: ScoredResult wrapping a CandidateProfile
        today: Reference date for the age field (age is None without it)

    Returns:
        Dict with keys:
        - id: Candidate profile identifier
        - name: Display name (or None)
        - age: Age in years on ``today`` (or None)
        - gender: Gender code (or None)
        - bio: Biography, with a placeholder when empty
        - keywords: Canonical keyword list
        - location: Location label (or None)
        - match_reason: Reasons joined by ", "
        - score: Score as a rounded percentage
    """
    profile = result.candidate
    return {
        "id": profile.id,
        "name": profile.display_name,
        "age": profile.age_on(today) if today else None,
        "gender": profile.gender.value if profile.gender else None,
        "bio": profile.bio or "No bio available",
        "keywords": list(profile.keywords),
        "location": profile.location,
        "match_reason": result.summary,
        "score": result.percent,
    }


def build_event_payload(result: ScoredResult) -> Dict[str, Any]:
    """Build the prompt payload for a ranked event.

    Args:
        result: ScoredResult wrapping a CandidateEvent

    Returns:
        Dict with the event's display fields plus match_reason, score, and
        is_spark (whether the event is a Quick Spark)
    """
    event = result.candidate
    starts_at = resolve_event_start(event.event_date, event.event_time)
    return {
        "id": event.id,
        "name": event.name,
        "description": event.description or "No description provided",
        "location": event.location,
        "starts_at": format_timestamp(starts_at) if starts_at else None,
        "duration": event.duration,
        "is_spark": event.is_quick_spark,
        "tags": list(event.tags),
        "creator": event.creator_name,
        "participant_count": event.participant_count,
        "max_participants": event.max_participants,
        "match_reason": result.summary,
        "score": result.percent,
    }


@dataclass
class RecommendationCheck:
    """Outcome of checking assistant-recommended ids against a shortlist.

    Attributes:
        valid_ids: Recommended ids present in the shortlist, in recommended order
        invalid_ids: Recommended ids the assistant was never given
    """

    valid_ids: List[Any] = field(default_factory=list)
    invalid_ids: List[Any] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        """True if the assistant only referenced shortlisted candidates."""
        return not self.invalid_ids


def filter_recommendations(
    recommended_ids: Iterable[Any], shortlist: Iterable[ScoredResult]
) -> RecommendationCheck:
    """Split recommended ids into shortlisted and unknown ones.

    Args:
        recommended_ids: Candidate ids named in the assistant's reply
        shortlist: The ranked results the assistant was given

    Returns:
        RecommendationCheck with valid and invalid ids
    """
    allowed = {result.candidate_id for result in shortlist}
    check = RecommendationCheck()
    for candidate_id in recommended_ids:
        if candidate_id in allowed:
            check.valid_ids.append(candidate_id)
        else:
            check.invalid_ids.append(candidate_id)

    if check.invalid_ids:
        logger.warning(
            f"Assistant referenced {len(check.invalid_ids)} id(s) outside the shortlist",
            extra={
                "event": "ranking.recommendations.invalid",
                "invalid_ids": check.invalid_ids,
                "allowed_ids": sorted(allowed, key=str),
            },
        )

    return check
