"""Offline ranking input: one requester plus the pools fetched for them."""

import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Set

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from spark_ranker.config.exceptions import ConfigurationError
from spark_ranker.domain.models import (
    CandidateEvent,
    CandidateProfile,
    Identifier,
    MatchDecision,
    RequesterProfile,
)
from spark_ranker.utils.timestamps import ensure_utc, parse_iso_datetime

from .exclusions import collect_excluded_ids


class RankingSnapshot(BaseModel):
    """Everything needed to reproduce a ranking call offline."""

    requester: RequesterProfile
    profiles: List[CandidateProfile] = Field(default_factory=list)
    events: List[CandidateEvent] = Field(default_factory=list)
    excluded_ids: List[Identifier] = Field(
        default_factory=list, validation_alias=AliasChoices("excluded_ids", "excludedIds")
    )
    decisions: List[MatchDecision] = Field(default_factory=list)
    now: Optional[datetime] = Field(None, description="Reference time (defaults to now)")

    @field_validator("now", mode="before")
    @classmethod
    def parse_now(cls, v):
        """Parse ISO strings and normalize to UTC."""
        if isinstance(v, str):
            parsed = parse_iso_datetime(v)
            if parsed is None:
                raise ValueError(f"Unparseable timestamp: {v!r}")
            return parsed
        if isinstance(v, datetime):
            return ensure_utc(v)
        return v

    def exclusion_set(self) -> Set[Identifier]:
        """Explicit exclusions plus those implied by recorded decisions."""
        return set(self.excluded_ids) | collect_excluded_ids(self.decisions, self.requester.id)


def load_snapshot(path: Path) -> RankingSnapshot:
    """
    Load and validate a ranking snapshot from a JSON file.

    Args:
        path: Path to the JSON snapshot

    Returns:
        Validated RankingSnapshot

    Raises:
        ConfigurationError: If the file is missing, not JSON, or fails validation
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"Snapshot file not found: {path}",
            suggestions=[f"Ensure {path} exists", "Pass the snapshot with --input"],
        ) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Snapshot is not valid JSON: {e}",
            source=path,
            suggestions=["Check the snapshot file for syntax errors"],
        ) from e

    try:
        return RankingSnapshot.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(
            "Snapshot validation failed",
            e,
            suggestions=[
                "Snapshots need a 'requester' object",
                "Profiles and events need an 'id'",
            ],
            source=path,
        ) from e
