"""Orchestration between candidate retrieval and the rankers.

get_optimized_matches / get_optimized_events rank a pool the caller already
fetched. RankingService does the fetching too, through an injected
CandidateSource, and applies configured defaults. Neither keeps state between
calls, so one instance can serve concurrent requests.
"""

from datetime import datetime
from typing import AbstractSet, Iterable, List, Optional

from spark_ranker.config.models import EventRankingOptions, ProfileRankingOptions, RankerConfig
from spark_ranker.domain.models import (
    CandidateEvent,
    CandidateProfile,
    Identifier,
    LocationMode,
    RequesterProfile,
)
from spark_ranker.logging import get_logger
from spark_ranker.logging.context import log_context
from spark_ranker.matching.events import EventRanker
from spark_ranker.matching.models import ScoredResult
from spark_ranker.matching.profiles import ProfileRanker
from spark_ranker.utils.timestamps import ensure_utc, utc_now

from .sources import CandidateSource, is_requester

logger = get_logger(__name__, component="pipeline")


def get_optimized_matches(
    requester: RequesterProfile,
    excluded_ids: AbstractSet[Identifier],
    candidates: Iterable[CandidateProfile],
    options: Optional[ProfileRankingOptions] = None,
) -> List[ScoredResult]:
    """Rank a fetched profile pool and return the top matches.

    Candidates in ``excluded_ids`` and the requester's own profile are dropped
    even if the caller let them through.

    Args:
        requester: Profile of the requesting user
        excluded_ids: Profile ids the requester already liked, disliked, or matched
        candidates: Pool fetched by the storage collaborator
        options: Profile ranking options (defaults to ProfileRankingOptions())

    Returns:
        At most options.limit ranked profiles
    """
    options = options or ProfileRankingOptions()
    excluded = set(excluded_ids or ())
    pool = [
        candidate
        for candidate in candidates
        if candidate.id not in excluded and not is_requester(candidate, requester)
    ]
    return ProfileRanker(options).rank(requester, pool)[: options.limit]


def get_optimized_events(
    requester: RequesterProfile,
    candidates: Iterable[CandidateEvent],
    options: Optional[EventRankingOptions] = None,
    now: Optional[datetime] = None,
) -> List[ScoredResult]:
    """Rank a fetched event pool and return the top events.

    Args:
        requester: Profile of the requesting user
        candidates: Upcoming events fetched by the storage collaborator
        options: Event ranking options (defaults to EventRankingOptions())
        now: Reference time for urgency (defaults to utc_now())

    Returns:
        At most options.limit ranked events
    """
    options = options or EventRankingOptions()
    return EventRanker(options).rank(requester, candidates, now=now)[: options.limit]


class RankingService:
    """Fetches candidate pools through a CandidateSource and ranks them.

    Responsibilities:
    - Fetch bounded pools using the configured pool sizes
    - Fill in configured default options
    - Apply the local-mode distance radius when the caller set none
    - Scope log records to the requester
    """

    def __init__(self, source: CandidateSource, config: Optional[RankerConfig] = None):
        """
        Initialize the ranking service.

        Args:
            source: Storage collaborator supplying candidate pools
            config: Ranker configuration (defaults to RankerConfig())
        """
        self.source = source
        self.config = config or RankerConfig()

    def profile_options_for(
        self,
        requester: RequesterProfile,
        options: Optional[ProfileRankingOptions] = None,
    ) -> ProfileRankingOptions:
        """Resolve the options used to rank profiles for a requester.

        A requester in local mode gets the configured local radius unless the
        options explicitly set max_distance_km (None included).
        """
        options = options or self.config.profiles
        if (
            requester.location_mode == LocationMode.LOCAL
            and "max_distance_km" not in options.model_fields_set
        ):
            options = options.model_copy(
                update={"max_distance_km": self.config.pools.local_radius_km}
            )
        return options

    def matches_for(
        self,
        requester: RequesterProfile,
        excluded_ids: AbstractSet[Identifier] = frozenset(),
        options: Optional[ProfileRankingOptions] = None,
    ) -> List[ScoredResult]:
        """Fetch and rank profile candidates for a requester."""
        options = self.profile_options_for(requester, options)
        with log_context(requester_id=requester.id, ranking="profiles"):
            candidates = self.source.fetch_profile_candidates(
                requester, excluded_ids, self.config.pools.profile_pool_size
            )
            logger.debug(
                f"Fetched {len(candidates)} profile candidates",
                extra={
                    "event": "pipeline.profiles.fetched",
                    "candidate_count": len(candidates),
                    "excluded_count": len(excluded_ids),
                    "max_distance_km": options.max_distance_km,
                },
            )
            return get_optimized_matches(requester, excluded_ids, candidates, options)

    def events_for(
        self,
        requester: RequesterProfile,
        options: Optional[EventRankingOptions] = None,
        now: Optional[datetime] = None,
    ) -> List[ScoredResult]:
        """Fetch and rank upcoming events for a requester."""
        options = options or self.config.events
        now = ensure_utc(now) if now is not None else utc_now()
        with log_context(requester_id=requester.id, ranking="events"):
            candidates = self.source.fetch_event_candidates(
                requester, now, self.config.pools.event_pool_size
            )
            logger.debug(
                f"Fetched {len(candidates)} event candidates",
                extra={"event": "pipeline.events.fetched", "candidate_count": len(candidates)},
            )
            return get_optimized_events(requester, candidates, options, now=now)
