"""Candidate profile schema."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .fields import (
    LanguageLevel,
    PlacementStatus,
    coerce_flag,
    coerce_non_negative_int,
    coerce_optional_text,
    coerce_rating,
    normalize_tokens,
    parse_language_level,
)


class CandidateProfile(BaseModel):
    """Talent attributes consumed by the match and readiness scorers."""

    candidate_id: str = ""
    skills: list[str] = Field(default_factory=list)
    years_of_experience: int = 0
    language_level: LanguageLevel = LanguageLevel.A0
    track: str | None = None
    availability: bool = False
    assessments_passed: int = 0
    coach_rating: float = 0.0
    bio_present: bool = False
    placement_status: PlacementStatus = PlacementStatus.LEARNING

    model_config = ConfigDict(extra="allow", frozen=True)

    @field_validator("candidate_id", mode="before")
    @classmethod
    def _identifier(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("skills", mode="before")
    @classmethod
    def _skills(cls, value: Any) -> list[str]:
        return normalize_tokens(value)

    @field_validator("years_of_experience", "assessments_passed", mode="before")
    @classmethod
    def _counts(cls, value: Any) -> int:
        return coerce_non_negative_int(value)

    @field_validator("coach_rating", mode="before")
    @classmethod
    def _rating(cls, value: Any) -> float:
        return coerce_rating(value)

    @field_validator("availability", "bio_present", mode="before")
    @classmethod
    def _flags(cls, value: Any) -> bool:
        return coerce_flag(value)

    @field_validator("language_level", mode="before")
    @classmethod
    def _language_level(cls, value: Any) -> LanguageLevel:
        return parse_language_level(value) or LanguageLevel.A0

    @field_validator("track", mode="before")
    @classmethod
    def _track(cls, value: Any) -> str | None:
        return coerce_optional_text(value)

    @field_validator("placement_status", mode="before")
    @classmethod
    def _placement(cls, value: Any) -> PlacementStatus:
        if isinstance(value, PlacementStatus):
            return value
        key = str(value or "").strip().upper()
        return PlacementStatus.__members__.get(key, PlacementStatus.LEARNING)
