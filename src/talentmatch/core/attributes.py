"""Normalization of candidate and job attributes into comparable primitives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from ..schemas import CandidateProfile, JobRequirement, LanguageLevel


@dataclass(frozen=True, slots=True)
class MatchAttributes:
    """Comparable view of one candidate/job pair."""

    candidate_skills: frozenset[str]
    required_skills: dict[str, str]
    years_of_experience: int
    min_experience: int
    candidate_level: LanguageLevel
    required_level: LanguageLevel | None
    candidate_track: str | None
    job_track: str | None


def skill_key(skill: str) -> str:
    return skill.strip().casefold()


def skill_keys(skills: Iterable[str]) -> frozenset[str]:
    return frozenset(skill_key(skill) for skill in skills if skill and skill.strip())


def track_key(track: str | None) -> str | None:
    if track is None:
        return None
    key = track.strip().casefold()
    return key or None


def sort_skills(skills: Iterable[str]) -> list[str]:
    return sorted(skills, key=lambda skill: (skill.casefold(), skill))


def extract(candidate: CandidateProfile, job: JobRequirement) -> MatchAttributes:
    """Build the comparable attribute view for a pair."""
    required = {skill_key(skill): skill for skill in job.required_skills}
    return MatchAttributes(
        candidate_skills=skill_keys(candidate.skills),
        required_skills=required,
        years_of_experience=candidate.years_of_experience,
        min_experience=job.min_experience,
        candidate_level=candidate.language_level,
        required_level=job.required_language_level,
        candidate_track=track_key(candidate.track),
        job_track=track_key(job.track),
    )


def as_candidate(value: CandidateProfile | Mapping[str, Any] | None) -> CandidateProfile:
    if isinstance(value, CandidateProfile):
        return value
    if value is None:
        return CandidateProfile()
    if isinstance(value, Mapping):
        return CandidateProfile.model_validate(dict(value))
    raise TypeError(f"Expected candidate mapping, got {type(value).__name__}")


def as_job(value: JobRequirement | Mapping[str, Any] | None) -> JobRequirement:
    if isinstance(value, JobRequirement):
        return value
    if value is None:
        return JobRequirement()
    if isinstance(value, Mapping):
        return JobRequirement.model_validate(dict(value))
    raise TypeError(f"Expected job mapping, got {type(value).__name__}")
