"""Domain models for the Spark ranking engine."""

from .models import (
    CandidateEvent,
    CandidateProfile,
    DecisionStatus,
    EventStatus,
    Gender,
    GenderPreference,
    Identifier,
    LocationMode,
    MatchDecision,
    RequesterProfile,
)

__all__ = [
    "RequesterProfile",
    "CandidateProfile",
    "CandidateEvent",
    "MatchDecision",
    "Identifier",
    "Gender",
    "GenderPreference",
    "LocationMode",
    "EventStatus",
    "DecisionStatus",
]
