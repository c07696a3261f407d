"""Event ranking: scores upcoming events against a requesting profile.

Terms, in order: tag relevance, time urgency, the Quick Spark bonus for short
events, location label match, and availability. A full event halves the
score accumulated so far. Weights add up to more than 1; scores are compared
only relative to each other.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from spark_ranker.config.models import EventRankingOptions
from spark_ranker.domain.models import CandidateEvent, RequesterProfile
from spark_ranker.logging import get_logger
from spark_ranker.utils.timestamps import ensure_utc, hours_between, resolve_event_start, utc_now

from .models import ScoredResult, sort_by_score
from .signals import keyword_similarity, shared_keywords

logger = get_logger(__name__, component="ranking")

TAG_WEIGHT = 0.4
MATCHING_TAGS_THRESHOLD = 0.2
MATCHING_TAGS_SHOWN = 2

# (max hours until start, bonus, reason); later than the last bucket earns FAR_FUTURE_BONUS
URGENCY_BUCKETS = (
    (24.0, 0.3, "Happening today!"),
    (72.0, 0.25, "This week"),
    (168.0, 0.15, "Next 7 days"),
)
FAR_FUTURE_BONUS = 0.05

QUICK_SPARK_MAX_MINUTES = 30
QUICK_SPARK_BONUS = 0.2
LOCATION_BONUS = 0.15
OPEN_EVENT_BONUS = 0.1
FEW_SPOTS_THRESHOLD = 5
FEW_SPOTS_BONUS = 0.05
FULL_EVENT_PENALTY = 0.5

MIN_EVENT_SCORE = 0.1

PASSED_REASON = "Event has passed"


def urgency_bonus(hours_until: float):
    """Return (bonus, reason) for an event starting ``hours_until`` from now."""
    for max_hours, bonus, reason in URGENCY_BUCKETS:
        if hours_until <= max_hours:
            return bonus, reason
    return FAR_FUTURE_BONUS, None


def locations_overlap(first: Optional[str], second: Optional[str]) -> bool:
    """Whether either location label contains the other, ignoring case."""
    if not first or not second:
        return False
    a, b = first.lower(), second.lower()
    return a in b or b in a


class EventRanker:
    """Scores, filters, and orders candidate events for a requester.

    Responsibilities:
    - Exclude events that already started (or carry no date)
    - Compute the per-event heuristic score and its reasons
    - Drop events scoring at or below the relevance floor
    - Sort by descending score (ties by event id) and truncate to limit
    """

    def __init__(
        self,
        options: Optional[EventRankingOptions] = None,
        now: Optional[datetime] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize EventRanker.

        Args:
            options: Ranking options (defaults to EventRankingOptions())
            now: Reference time for urgency (defaults to utc_now() per rank call)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.options = options or EventRankingOptions()
        self.now = ensure_utc(now) if now is not None else None
        self.logger = logger_instance or logger

    def score(
        self,
        requester: RequesterProfile,
        event: CandidateEvent,
        now: Optional[datetime] = None,
    ) -> ScoredResult:
        """Score a single event against the requester.

        Args:
            requester: Profile of the requesting user
            event: Candidate event to score
            now: Reference time (defaults to the ranker's now, then utc_now())

        Returns:
            ScoredResult; score is 0 for past or undated events
        """
        now = ensure_utc(now) if now is not None else (self.now or utc_now())
        reasons: List[str] = []

        # Tag relevance
        keyword_score = keyword_similarity(requester.keywords, event.tags)
        score = keyword_score * TAG_WEIGHT
        if keyword_score > MATCHING_TAGS_THRESHOLD:
            matching = shared_keywords(requester.keywords, event.tags, limit=MATCHING_TAGS_SHOWN)
            reasons.append(f"Matches interests: {', '.join(matching)}")

        # Time urgency; past events are out regardless of other terms
        starts_at = resolve_event_start(event.event_date, event.event_time)
        if starts_at is None or starts_at < now:
            return ScoredResult(
                candidate=event, score=0.0, reasons=[PASSED_REASON], keyword_score=keyword_score
            )

        bonus, reason = urgency_bonus(hours_between(now, starts_at))
        score += bonus
        if reason:
            reasons.append(reason)

        # Quick Spark
        if event.is_quick_spark and self.options.prioritize_quick_sparks:
            score += QUICK_SPARK_BONUS
            reasons.append("Quick Spark")

        # Location label match
        if locations_overlap(event.location, requester.location):
            score += LOCATION_BONUS
            reasons.append(f"Near you ({event.location})")

        # Availability
        spots_left = event.spots_left
        if spots_left is None:
            score += OPEN_EVENT_BONUS
        elif spots_left > FEW_SPOTS_THRESHOLD:
            score += OPEN_EVENT_BONUS
        elif spots_left > 0:
            score += FEW_SPOTS_BONUS
            reasons.append(f"{spots_left} spot{'s' if spots_left != 1 else ''} left")
        else:
            score *= FULL_EVENT_PENALTY
            reasons.append("Event full")

        return ScoredResult(
            candidate=event, score=score, reasons=reasons, keyword_score=keyword_score
        )

    def rank(
        self,
        requester: RequesterProfile,
        events: Iterable[CandidateEvent],
        now: Optional[datetime] = None,
    ) -> List[ScoredResult]:
        """Rank an event pool and return the top results.

        Args:
            requester: Profile of the requesting user
            events: Candidate pool of upcoming events
            now: Reference time shared by every event in this call

        Returns:
            At most options.limit results, ordered by descending score
        """
        now = ensure_utc(now) if now is not None else (self.now or utc_now())
        scored = [self.score(requester, event, now=now) for event in events]

        kept = [result for result in scored if result.score > MIN_EVENT_SCORE]
        top = sort_by_score(kept)[: self.options.limit]

        passed = sum(1 for result in scored if result.reasons == [PASSED_REASON])
        self.logger.info(
            f"Ranked {len(scored)} events, returning {len(top)}",
            extra={
                "event": "ranking.events.completed",
                "requester_id": requester.id,
                "candidate_count": len(scored),
                "passed_count": passed,
                "kept_count": len(kept),
                "returned_count": len(top),
                "top_score": round(top[0].score, 4) if top else None,
            },
        )
        if top:
            self.logger.debug(
                f"Top event {top[0].candidate_id}: {top[0].summary}",
                extra={"event": "ranking.events.top", "candidate_id": top[0].candidate_id},
            )

        return top


def rank_events(
    requester: RequesterProfile,
    events: Iterable[CandidateEvent],
    options: Optional[EventRankingOptions] = None,
    now: Optional[datetime] = None,
) -> List[ScoredResult]:
    """Rank candidate events for a requester with the given options."""
    return EventRanker(options).rank(requester, events, now=now)
