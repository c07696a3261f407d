"""Profile ranking: scores candidate profiles against a requesting profile.

Each candidate's score is built additively from keyword overlap, mutual
gender compatibility, proximity, and profile completeness. Incompatible
preferences apply a multiplicative penalty to whatever has been accumulated
so far, so the order in which terms are applied matters.
"""

import logging
from typing import Iterable, List, Optional

from spark_ranker.config.models import ProfileRankingOptions
from spark_ranker.domain.models import CandidateProfile, RequesterProfile
from spark_ranker.logging import get_logger

from .models import ScoredResult, sort_by_score
from .signals import (
    haversine_distance_km,
    is_gender_compatible,
    keyword_similarity,
    shared_keywords,
)

logger = get_logger(__name__, component="ranking")

KEYWORD_WEIGHT = 0.5
SHARED_INTERESTS_THRESHOLD = 0.3
SHARED_INTERESTS_SHOWN = 3
COMPATIBILITY_BONUS = 0.3
INCOMPATIBILITY_PENALTY = 0.3
PROXIMITY_WEIGHT = 0.2
PROXIMITY_RANGE_KM = 100.0
NEARBY_KM = 10.0
WITHIN_KM = 50.0
COMPLETE_BIO_LENGTH = 50
COMPLETE_KEYWORD_COUNT = 3
COMPLETENESS_BONUS = 0.05


def _km(distance: float) -> int:
    """Round a distance half-up to whole kilometers for display."""
    return int(distance + 0.5)


def proximity_score(distance_km: float) -> float:
    """Weighted proximity term: full weight at 0 km, nothing from 100 km on."""
    return max(0.0, 1.0 - distance_km / PROXIMITY_RANGE_KM) * PROXIMITY_WEIGHT


class ProfileRanker:
    """Scores, filters, and orders candidate profiles for a requester.

    Responsibilities:
    - Compute the per-candidate heuristic score and its reasons
    - Hard-exclude candidates beyond the distance cutoff
    - Drop candidates below the keyword similarity threshold
    - Sort by descending score (ties by candidate id) and truncate to limit
    """

    def __init__(
        self,
        options: Optional[ProfileRankingOptions] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize ProfileRanker.

        Args:
            options: Ranking options (defaults to ProfileRankingOptions())
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.options = options or ProfileRankingOptions()
        self.logger = logger_instance or logger

    def score(self, requester: RequesterProfile, candidate: CandidateProfile) -> ScoredResult:
        """Score a single candidate against the requester.

        Args:
            requester: Profile of the requesting user
            candidate: Candidate profile to score

        Returns:
            ScoredResult; score is 0 when the candidate is beyond max_distance_km
        """
        reasons: List[str] = []

        # Keyword overlap
        keyword_score = keyword_similarity(requester.keywords, candidate.keywords)
        score = keyword_score * KEYWORD_WEIGHT
        if keyword_score > SHARED_INTERESTS_THRESHOLD:
            shared = shared_keywords(
                requester.keywords, candidate.keywords, limit=SHARED_INTERESTS_SHOWN
            )
            reasons.append(f"Shares interests: {', '.join(shared)}")

        # Mutual gender compatibility
        compatible = is_gender_compatible(
            requester.gender,
            requester.gender_preference,
            candidate.gender,
            candidate.gender_preference,
        )
        if compatible:
            score += COMPATIBILITY_BONUS
            reasons.append("Compatible preferences")
        else:
            score *= INCOMPATIBILITY_PENALTY

        # Proximity, only when both sides have coordinates
        if requester.has_coordinates and candidate.has_coordinates:
            distance = haversine_distance_km(
                requester.latitude, requester.longitude, candidate.latitude, candidate.longitude
            )
            score += proximity_score(distance)
            if distance < NEARBY_KM:
                reasons.append(f"Nearby ({_km(distance)}km)")
            elif distance < WITHIN_KM:
                reasons.append(f"Within {_km(distance)}km")

            max_distance = self.options.max_distance_km
            if max_distance is not None and distance > max_distance:
                reasons.append(f"Too far ({_km(distance)}km)")
                return ScoredResult(
                    candidate=candidate, score=0.0, reasons=reasons, keyword_score=keyword_score
                )

        # Completeness bonus
        if (
            len(candidate.bio) > COMPLETE_BIO_LENGTH
            and len(candidate.keywords) >= COMPLETE_KEYWORD_COUNT
        ):
            score += COMPLETENESS_BONUS
            reasons.append("Complete profile")

        return ScoredResult(
            candidate=candidate, score=score, reasons=reasons, keyword_score=keyword_score
        )

    def rank(
        self, requester: RequesterProfile, candidates: Iterable[CandidateProfile]
    ) -> List[ScoredResult]:
        """Rank a candidate pool and return the top results.

        Args:
            requester: Profile of the requesting user
            candidates: Candidate pool (already excludes decided-upon profiles)

        Returns:
            At most options.limit results, ordered by descending score
        """
        scored = [self.score(requester, candidate) for candidate in candidates]

        kept = [
            result
            for result in scored
            if result.keyword_score >= self.options.min_keyword_score and result.score > 0
        ]
        top = sort_by_score(kept)[: self.options.limit]

        self.logger.info(
            f"Ranked {len(scored)} profiles, returning {len(top)}",
            extra={
                "event": "ranking.profiles.completed",
                "requester_id": requester.id,
                "candidate_count": len(scored),
                "kept_count": len(kept),
                "returned_count": len(top),
                "top_score": round(top[0].score, 4) if top else None,
            },
        )
        if top:
            self.logger.debug(
                f"Top profile {top[0].candidate_id}: {top[0].summary}",
                extra={"event": "ranking.profiles.top", "candidate_id": top[0].candidate_id},
            )

        return top


def rank_profiles(
    requester: RequesterProfile,
    candidates: Iterable[CandidateProfile],
    options: Optional[ProfileRankingOptions] = None,
) -> List[ScoredResult]:
    """Rank candidate profiles for a requester with the given options."""
    return ProfileRanker(options).rank(requester, candidates)
