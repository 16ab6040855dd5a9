"""Job requirement schema."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .fields import (
    JobStatus,
    LanguageLevel,
    coerce_non_negative_int,
    coerce_optional_text,
    normalize_tokens,
    parse_language_level,
)


class JobRequirement(BaseModel):
    """Requirements of an open role, or an employer's search target profile."""

    job_id: str = ""
    title: str | None = None
    required_skills: list[str] = Field(default_factory=list)
    min_experience: int = 0
    track: str | None = None
    required_language_level: LanguageLevel | None = None
    location: str | None = None
    status: JobStatus = JobStatus.OPEN

    model_config = ConfigDict(extra="allow", frozen=True)

    @field_validator("job_id", mode="before")
    @classmethod
    def _identifier(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("required_skills", mode="before")
    @classmethod
    def _skills(cls, value: Any) -> list[str]:
        return normalize_tokens(value)

    @field_validator("min_experience", mode="before")
    @classmethod
    def _experience(cls, value: Any) -> int:
        return coerce_non_negative_int(value)

    @field_validator("required_language_level", mode="before")
    @classmethod
    def _language_level(cls, value: Any) -> LanguageLevel | None:
        return parse_language_level(value)

    @field_validator("track", "title", "location", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str | None:
        return coerce_optional_text(value)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> JobStatus:
        if isinstance(value, JobStatus):
            return value
        key = str(value or "").strip().upper()
        return JobStatus.__members__.get(key, JobStatus.OPEN)
