"""Data models for the ranking engine.

This module defines the transient wrapper produced for every scored
candidate during a single ranking call, and the ordering applied to a list
of them.
"""

from dataclasses import dataclass, field
from typing import Generic, List, Tuple, TypeVar, Union

from spark_ranker.domain.models import CandidateEvent, CandidateProfile, Identifier

T = TypeVar("T", CandidateProfile, CandidateEvent)


@dataclass
class ScoredResult(Generic[T]):
    """A candidate together with its heuristic score and explanation.

    Attributes:
        candidate: The scored profile or event (never modified)
        score: Non-negative heuristic score; not a probability and not capped at 1
        reasons: Human-readable explanations, in the order the terms were applied
        keyword_score: Jaccard keyword/tag similarity, used for profile filtering
    """

    candidate: T
    score: float = 0.0
    reasons: List[str] = field(default_factory=list)
    keyword_score: float = 0.0

    @property
    def candidate_id(self) -> Identifier:
        """Convenience accessor for the candidate identifier."""
        return self.candidate.id

    @property
    def percent(self) -> int:
        """Score expressed as a rounded percentage for display."""
        return int(round(self.score * 100))

    @property
    def summary(self) -> str:
        """Reasons joined into a single display line."""
        return ", ".join(self.reasons)


def _tie_break_key(identifier: Identifier) -> Tuple[int, Union[int, str]]:
    # Numeric ids order before opaque string ids
    if isinstance(identifier, int):
        return (0, identifier)
    return (1, str(identifier))


def sort_by_score(results: List[ScoredResult]) -> List[ScoredResult]:
    """Order results by descending score, then by candidate id ascending."""
    return sorted(results, key=lambda r: (-r.score, _tie_break_key(r.candidate_id)))
