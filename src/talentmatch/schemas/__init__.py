"""Pydantic schema definitions for scoring inputs."""

from __future__ import annotations

from .candidate import CandidateProfile
from .fields import JobStatus, LanguageLevel, PlacementStatus, parse_language_level
from .job import JobRequirement

__all__ = [
    "CandidateProfile",
    "JobRequirement",
    "JobStatus",
    "LanguageLevel",
    "PlacementStatus",
    "parse_language_level",
]
