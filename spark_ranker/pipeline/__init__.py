"""Ranking orchestration: candidate sources, exclusions, and entry points."""

from .exclusions import collect_excluded_ids
from .orchestrators import RankingService, get_optimized_events, get_optimized_matches
from .snapshot import RankingSnapshot, load_snapshot
from .sources import CandidateSource, InMemoryCandidateSource

__all__ = [
    "get_optimized_matches",
    "get_optimized_events",
    "RankingService",
    "CandidateSource",
    "InMemoryCandidateSource",
    "collect_excluded_ids",
    "RankingSnapshot",
    "load_snapshot",
]
