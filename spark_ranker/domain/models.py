"""Core domain models for profiles, events, and prior match decisions.

This module defines the read-only snapshots the ranking engine works on:
- RequesterProfile: the profile of the user asking for suggestions
- CandidateProfile: a potential match supplied by the storage layer
- CandidateEvent: an upcoming event supplied by the storage layer
- MatchDecision: a prior like/dislike/match between two profiles

Snapshots are frozen pydantic models. Loosely typed storage fields (keywords
and tags stored as JSON text or CSV, camelCase column names, decimal strings
for coordinates) are normalized here, at ingestion, so ranking code only ever
sees canonical values.
"""

from datetime import date, datetime, time
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from spark_ranker.normalization import normalize_keywords
from spark_ranker.utils.timestamps import ensure_aware, parse_iso_datetime

Identifier = Union[int, str]


class Gender(str, Enum):
    """Declared gender of a profile."""

    MALE = "M"
    FEMALE = "F"
    OTHER = "O"


class GenderPreference(str, Enum):
    """Which gender a profile wants to be matched with."""

    MEN = "M"
    WOMEN = "W"
    BOTH = "B"
    OTHER = "O"


class LocationMode(str, Enum):
    """Whether a user wants nearby matches only or matches anywhere."""

    LOCAL = "local"
    GLOBAL = "global"


class EventStatus(str, Enum):
    """Lifecycle status of an event."""

    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DecisionStatus(str, Enum):
    """Status of a pairwise match record."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    LIKED = "liked"
    DISLIKED = "disliked"
    MATCHED = "matched"
    UNMATCHED = "unmatched"


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


class ProfileSnapshot(BaseModel):
    """Fields shared by requester and candidate profiles."""

    id: Identifier = Field(..., description="Profile identifier")
    user_id: Optional[Identifier] = Field(
        None,
        validation_alias=AliasChoices("user_id", "userId"),
        description="Owning user account identifier",
    )
    bio: str = Field("", description="Free-text biography")
    gender: Optional[Gender] = Field(None, description="Declared gender (M, F, O)")
    gender_preference: GenderPreference = Field(
        GenderPreference.BOTH,
        validation_alias=AliasChoices("gender_preference", "genderPreference"),
        description="Preferred gender of matches (M, W, B)",
    )
    keywords: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("keywords", "keyWords"),
        description="Interest keywords",
    )
    location: Optional[str] = Field(None, description="Free-text location label")
    latitude: Optional[float] = Field(None, ge=-90, le=90, description="Decimal degrees")
    longitude: Optional[float] = Field(None, ge=-180, le=180, description="Decimal degrees")
    location_mode: LocationMode = Field(
        LocationMode.GLOBAL,
        validation_alias=AliasChoices("location_mode", "locationMode"),
        description="local = nearby matches only, global = anywhere",
    )
    birth_date: Optional[date] = Field(
        None, validation_alias=AliasChoices("birth_date", "birthDate")
    )

    model_config = {"frozen": True}

    @field_validator("keywords", mode="before")
    @classmethod
    def normalize_keyword_field(cls, v: Any) -> List[str]:
        """Accept a list, JSON array text, or comma-separated text."""
        return normalize_keywords(v)

    @field_validator("bio", mode="before")
    @classmethod
    def default_bio(cls, v: Any) -> Any:
        """Treat a missing bio as empty text."""
        return "" if v is None else v

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v: Any) -> Any:
        """Upper-case gender codes and map blanks to None."""
        v = _blank_to_none(v)
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("gender_preference", mode="before")
    @classmethod
    def normalize_gender_preference(cls, v: Any) -> Any:
        """Upper-case preference codes; F is read as W, blanks as B."""
        v = _blank_to_none(v)
        if v is None:
            return GenderPreference.BOTH
        if isinstance(v, str):
            v = v.strip().upper()
            if v == "F":
                return GenderPreference.WOMEN
        return v

    @field_validator("location", mode="before")
    @classmethod
    def strip_location(cls, v: Any) -> Any:
        """Strip whitespace from location label."""
        v = _blank_to_none(v)
        return v.strip() if isinstance(v, str) else v

    @field_validator("latitude", "longitude", "birth_date", mode="before")
    @classmethod
    def blank_is_missing(cls, v: Any) -> Any:
        """Storage returns empty strings for unset optional columns."""
        return _blank_to_none(v)

    @property
    def has_coordinates(self) -> bool:
        """Whether both latitude and longitude are known."""
        return self.latitude is not None and self.longitude is not None

    def age_on(self, today: date) -> Optional[int]:
        """Age in whole years on ``today``, or None without a birth date."""
        if self.birth_date is None:
            return None
        age = today.year - self.birth_date.year
        if (today.month, today.day) < (self.birth_date.month, self.birth_date.day):
            age -= 1
        return age


class RequesterProfile(ProfileSnapshot):
    """Profile of the user requesting ranked suggestions."""

    model_config = {"json_schema_extra": {"example": {
        "id": 12,
        "userId": 40,
        "bio": "Weekend hiker and coffee snob.",
        "gender": "F",
        "genderPreference": "M",
        "keyWords": '["hiking", "coffee"]',
        "location": "Brooklyn",
        "latitude": "40.6782",
        "longitude": "-73.9442",
        "locationMode": "local",
    }}}


class CandidateProfile(ProfileSnapshot):
    """A potential match, as supplied by the storage layer."""

    display_name: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("display_name", "displayName", "name"),
        description="Name shown to the requester",
    )
    is_hidden: bool = Field(
        False, validation_alias=AliasChoices("is_hidden", "isHidden")
    )


class CandidateEvent(BaseModel):
    """An event that may be suggested to the requester."""

    id: Identifier = Field(..., description="Event identifier")
    name: str = Field("", description="Event title")
    description: Optional[str] = Field(None, description="Event description")
    event_date: Optional[Union[datetime, date]] = Field(
        None,
        validation_alias=AliasChoices("event_date", "eventDate"),
        description="Date (or full start datetime) of the event",
    )
    event_time: Optional[time] = Field(
        None,
        validation_alias=AliasChoices("event_time", "eventTime"),
        description="Time of day the event starts",
    )
    duration: Optional[int] = Field(None, ge=0, description="Duration in minutes")
    tags: List[str] = Field(default_factory=list, description="Event tags")
    location: Optional[str] = Field(None, description="Free-text location label")
    max_participants: Optional[int] = Field(
        None,
        ge=0,
        validation_alias=AliasChoices("max_participants", "maxParticipants"),
        description="Participant cap (None = unlimited)",
    )
    participant_count: int = Field(
        0,
        ge=0,
        validation_alias=AliasChoices(
            "participant_count", "participantCount", "currentParticipants"
        ),
        description="Number of people already attending",
    )
    creator_id: Optional[Identifier] = Field(
        None, validation_alias=AliasChoices("creator_id", "creatorId")
    )
    creator_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("creator_name", "creatorName")
    )
    status: EventStatus = Field(EventStatus.UPCOMING)

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def count_attached_participants(cls, data: Any) -> Any:
        """Derive participant_count from an attached participants list."""
        if isinstance(data, dict) and isinstance(data.get("participants"), list):
            data = dict(data)
            data["participant_count"] = len(data.pop("participants"))
            for alias in ("participantCount", "currentParticipants"):
                data.pop(alias, None)
        return data

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> List[str]:
        """Accept a list, JSON array text, or comma-separated text."""
        return normalize_keywords(v)

    @field_validator("event_date", mode="before")
    @classmethod
    def parse_event_date(cls, v: Any) -> Any:
        """Parse ISO strings, keeping the offset the date was given with."""
        v = _blank_to_none(v)
        if isinstance(v, str):
            parsed = parse_iso_datetime(v, keep_offset=True)
            if parsed is None:
                raise ValueError(f"Unparseable event date: {v!r}")
            return parsed
        if isinstance(v, datetime):
            return ensure_aware(v)
        return v

    @field_validator("event_time", "duration", "max_participants", mode="before")
    @classmethod
    def blank_is_missing(cls, v: Any) -> Any:
        """Storage returns empty strings for unset optional columns."""
        return _blank_to_none(v)

    @field_validator("location", mode="before")
    @classmethod
    def strip_location(cls, v: Any) -> Any:
        """Strip whitespace from location label."""
        v = _blank_to_none(v)
        return v.strip() if isinstance(v, str) else v

    @property
    def is_quick_spark(self) -> bool:
        """Short events (30 minutes or less) are Quick Sparks."""
        return bool(self.duration) and self.duration <= 30

    @property
    def spots_left(self) -> Optional[int]:
        """Remaining capacity, or None for unlimited events (no cap or a cap of 0)."""
        if not self.max_participants:
            return None
        return self.max_participants - self.participant_count


class MatchDecision(BaseModel):
    """A pairwise record of likes, dislikes, and matches between two profiles."""

    user1_id: Identifier = Field(..., validation_alias=AliasChoices("user1_id", "user1Id"))
    user2_id: Identifier = Field(..., validation_alias=AliasChoices("user2_id", "user2Id"))
    status: DecisionStatus = Field(DecisionStatus.PENDING)
    user1_liked: bool = Field(
        False, validation_alias=AliasChoices("user1_liked", "user1Liked")
    )
    user2_liked: bool = Field(
        False, validation_alias=AliasChoices("user2_liked", "user2Liked")
    )

    model_config = {"frozen": True}
