"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class ProfileRankingOptions(BaseModel):
    """Options for ranking candidate profiles against a requester."""

    limit: int = Field(5, ge=0, description="Maximum number of results to return")
    max_distance_km: Optional[float] = Field(
        None,
        gt=0,
        validation_alias=AliasChoices("max_distance_km", "maxDistanceKm", "maxDistance"),
        description="Hard distance cutoff in km (None = no limit)",
    )
    min_keyword_score: float = Field(
        0.1,
        ge=0.0,
        le=1.0,
        validation_alias=AliasChoices("min_keyword_score", "minKeywordScore"),
        description="Minimum keyword similarity a candidate needs to be kept",
    )

    model_config = {"frozen": True}


class EventRankingOptions(BaseModel):
    """Options for ranking candidate events against a requester."""

    limit: int = Field(5, ge=0, description="Maximum number of results to return")
    max_distance_km: float = Field(
        50.0,
        gt=0,
        validation_alias=AliasChoices("max_distance_km", "maxDistanceKm", "maxDistance"),
        description="Accepted for symmetry with profiles; events match on location labels",
    )
    prioritize_quick_sparks: bool = Field(
        True,
        validation_alias=AliasChoices("prioritize_quick_sparks", "prioritizeQuickSparks"),
        description="Give short (<= 30 minute) events a bonus",
    )

    model_config = {"frozen": True}


class PoolConfig(BaseModel):
    """Sizes of the candidate pools fetched before ranking."""

    profile_pool_size: int = Field(
        50, ge=1, le=1000, description="Profiles fetched per ranking call"
    )
    event_pool_size: int = Field(30, ge=1, le=1000, description="Events fetched per ranking call")
    local_radius_km: float = Field(
        50.0, gt=0, description="Distance cutoff applied to requesters in local mode"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class RankerConfig(BaseModel):
    """Root configuration object for the ranking engine."""

    profiles: ProfileRankingOptions = Field(
        default_factory=ProfileRankingOptions, description="Default profile ranking options"
    )
    events: EventRankingOptions = Field(
        default_factory=EventRankingOptions, description="Default event ranking options"
    )
    pools: PoolConfig = Field(default_factory=PoolConfig, description="Candidate pool sizes")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
