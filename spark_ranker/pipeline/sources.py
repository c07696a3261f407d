"""Candidate sources: the storage collaborator the orchestrators fetch pools from.

The engine never queries storage itself. A CandidateSource hands it a bounded
pool that already honours the caller contract (no excluded ids, not the
requester, upcoming events only). InMemoryCandidateSource implements that
contract over plain lists and backs the CLI and the tests.
"""

from datetime import datetime
from typing import AbstractSet, Iterable, List, Protocol

from spark_ranker.domain.models import (
    CandidateEvent,
    CandidateProfile,
    EventStatus,
    GenderPreference,
    Identifier,
    RequesterProfile,
)
from spark_ranker.matching.signals import target_gender
from spark_ranker.utils.timestamps import resolve_event_start


class CandidateSource(Protocol):
    """Data-access interface supplying candidate pools."""

    def fetch_profile_candidates(
        self,
        requester: RequesterProfile,
        excluded_ids: AbstractSet[Identifier],
        limit: int,
    ) -> List[CandidateProfile]:
        """Return at most ``limit`` candidate profiles for the requester."""
        ...

    def fetch_event_candidates(
        self,
        requester: RequesterProfile,
        now: datetime,
        limit: int,
    ) -> List[CandidateEvent]:
        """Return at most ``limit`` upcoming events."""
        ...


def is_requester(candidate: CandidateProfile, requester: RequesterProfile) -> bool:
    """Whether a candidate profile belongs to the requester."""
    if candidate.id == requester.id:
        return True
    return requester.user_id is not None and candidate.user_id == requester.user_id


def matches_declared_preference(candidate: CandidateProfile, requester: RequesterProfile) -> bool:
    """Loose one-sided pre-filter on the requester's declared preference."""
    if requester.gender_preference == GenderPreference.BOTH:
        return True
    wanted = target_gender(requester.gender_preference)
    return candidate.gender is not None and candidate.gender.value == wanted


class InMemoryCandidateSource:
    """CandidateSource over in-memory profile and event lists."""

    def __init__(
        self,
        profiles: Iterable[CandidateProfile] = (),
        events: Iterable[CandidateEvent] = (),
    ):
        self.profiles = list(profiles)
        self.events = list(events)

    def fetch_profile_candidates(
        self,
        requester: RequesterProfile,
        excluded_ids: AbstractSet[Identifier],
        limit: int,
    ) -> List[CandidateProfile]:
        pool = [
            profile
            for profile in self.profiles
            if profile.id not in excluded_ids
            and not profile.is_hidden
            and not is_requester(profile, requester)
            and matches_declared_preference(profile, requester)
        ]
        return pool[:limit]

    def fetch_event_candidates(
        self,
        requester: RequesterProfile,
        now: datetime,
        limit: int,
    ) -> List[CandidateEvent]:
        pool = []
        for event in self.events:
            if event.status != EventStatus.UPCOMING:
                continue
            starts_at = resolve_event_start(event.event_date, event.event_time)
            if starts_at is None or starts_at < now:
                continue
            pool.append(event)
        return pool[:limit]
