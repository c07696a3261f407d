"""Derive the exclusion set from a requester's prior match decisions."""

from typing import Iterable, Set

from spark_ranker.domain.models import DecisionStatus, Identifier, MatchDecision

# Pair statuses that exclude the other profile whoever made the decision
_FINAL_STATUSES = {DecisionStatus.DISLIKED, DecisionStatus.MATCHED}


def collect_excluded_ids(decisions: Iterable[MatchDecision], profile_id: Identifier) -> Set[Identifier]:
    """Profiles the requester has already acted on.

    The other party of a decision is excluded when the requester liked them,
    or when the pair is disliked or matched. A like received from the other
    side does not exclude them.

    Args:
        decisions: Match records involving the requester
        profile_id: The requester's profile id

    Returns:
        Set of other-party profile ids
    """
    excluded: Set[Identifier] = set()
    for decision in decisions:
        if decision.user1_id == profile_id:
            liked, other = decision.user1_liked, decision.user2_id
        elif decision.user2_id == profile_id:
            liked, other = decision.user2_liked, decision.user1_id
        else:
            continue

        if liked or decision.status in _FINAL_STATUSES:
            excluded.add(other)
    return excluded
