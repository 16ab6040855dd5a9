"""Batch scoring, ranking and filtering for dashboard list views.

The view layer hands over plain records and zips the returned
``ScoredRecord`` list back onto its own rows by position. Records that fail
validation never abort a batch: they come back with score 0, the ``ERROR``
label and a diagnostic reason.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Literal, Mapping, Sequence

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator
from rapidfuzz import fuzz

from .core import MatchResult, MatchScorer, ReadinessScorer, ReadinessStatus
from .core.attributes import as_candidate, as_job, track_key
from .schemas import (
    CandidateProfile,
    JobRequirement,
    JobStatus,
    LanguageLevel,
    PlacementStatus,
    parse_language_level,
)

ERROR_LABEL = "ERROR"

SKILL_SYNONYMS: dict[str, tuple[str, ...]] = {
    "sap": ("sap", "erp", "s4hana", "s/4", "hana"),
    "btp": ("btp", "business technology platform", "sap btp", "cloud platform"),
    "fi": ("fi", "finance", "financial accounting"),
    "mm": ("mm", "materials", "material management", "procurement"),
    "sd": ("sd", "sales", "sales distribution"),
    "abap": ("abap", "development", "developer"),
    "german": ("german", "deutsch", "de", "german language"),
    "english": ("english", "en", "business english"),
}

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_SPACES = re.compile(r"\s+")

CandidateInput = CandidateProfile | Mapping[str, Any]
JobInput = JobRequirement | Mapping[str, Any]


class MatchTier(str, Enum):
    STRONG = "STRONG"
    GOOD = "GOOD"
    PARTIAL = "PARTIAL"


@dataclass(slots=True)
class ScoredRecord:
    """Score and badge label for one input record."""

    id: str
    score: int
    label: str
    reason: str = ""


@dataclass(slots=True)
class RankedMatch:
    candidate_id: str
    job_id: str
    result: MatchResult


class TalentSearchCriteria(BaseModel):
    """Employer talent search filters."""

    track: str | None = None
    min_language_level: LanguageLevel | None = None
    min_experience: int = 0
    required_skills: list[str] = Field(default_factory=list)
    min_score: int = 0
    readiness: ReadinessStatus | None = None
    min_readiness: int | None = None
    query: str | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("min_language_level", mode="before")
    @classmethod
    def _level(cls, value: Any) -> LanguageLevel | None:
        return parse_language_level(value)

    @field_validator("readiness", mode="before")
    @classmethod
    def _readiness(cls, value: Any) -> Any:
        # "all" is the dashboard's unfiltered option.
        if value is None or str(value).strip().lower() in {"", "all"}:
            return None
        return str(value).strip().upper()

    def target(self) -> JobRequirement:
        """Target profile the candidates are scored against."""
        return JobRequirement(
            job_id="search",
            required_skills=self.required_skills,
            min_experience=self.min_experience,
            track=self.track,
            required_language_level=self.min_language_level,
        )


class PresentationAdapter:
    """Maps scores into list rows, badges and sort order."""

    # Lower bound of each tier, inclusive.
    DEFAULT_TIERS: dict[str, float] = {
        "strong": 90.0,
        "good": 80.0,
    }

    def __init__(
        self,
        *,
        match_scorer: MatchScorer | None = None,
        readiness_scorer: ReadinessScorer | None = None,
        tiers: Mapping[str, float] | None = None,
        query_similarity: float = 90.0,
    ) -> None:
        self._match = match_scorer or MatchScorer()
        self._readiness = readiness_scorer or ReadinessScorer()
        self._tiers = {**self.DEFAULT_TIERS, **(tiers or {})}
        self._query_similarity = query_similarity
        self._logger = structlog.get_logger(__name__)

    def tier(self, score: float) -> MatchTier:
        if score >= self._tiers["strong"]:
            return MatchTier.STRONG
        if score >= self._tiers["good"]:
            return MatchTier.GOOD
        return MatchTier.PARTIAL

    def score_pairs(
        self,
        pairs: Iterable[tuple[CandidateInput, JobInput]],
        *,
        key: Literal["candidate", "job"] = "candidate",
    ) -> list[ScoredRecord]:
        """Score candidate/job pairs, keeping input order.

        ``key`` selects whose id labels each row: candidates for the employer
        views, jobs for the talent job board.
        """
        records: list[ScoredRecord] = []
        for candidate, job in pairs:
            record_id = _record_id(job if key == "job" else candidate, key)
            try:
                result = self._match.score(candidate, job)
            except (ValueError, TypeError, ArithmeticError) as exc:
                records.append(self._failed(record_id, exc, event="match.score_failed"))
                continue
            records.append(
                ScoredRecord(
                    id=record_id,
                    score=result.score,
                    label=self.tier(result.score).value,
                    reason=result.reason_text,
                )
            )
        return records

    def score_readiness_batch(self, candidates: Iterable[CandidateInput]) -> list[ScoredRecord]:
        records: list[ScoredRecord] = []
        for candidate in candidates:
            record_id = _record_id(candidate, "candidate")
            try:
                result = self._readiness.score(candidate)
            except (ValueError, TypeError, ArithmeticError) as exc:
                records.append(self._failed(record_id, exc, event="readiness.score_failed"))
                continue
            records.append(
                ScoredRecord(id=record_id, score=result.score, label=result.status_label.value)
            )
        return records

    def rank_talents_for_job(
        self,
        talents: Iterable[CandidateInput],
        job: JobInput,
        top_n: int = 10,
    ) -> list[RankedMatch]:
        """Best matching talents for a job; placed talents are skipped."""
        requirement = as_job(job)
        ranked: list[RankedMatch] = []
        for talent in talents:
            profile = self._validated(talent, as_candidate, "candidate")
            if profile is None or profile.placement_status is PlacementStatus.PLACED:
                continue
            ranked.append(
                RankedMatch(
                    candidate_id=profile.candidate_id,
                    job_id=requirement.job_id,
                    result=self._match.score(profile, requirement),
                )
            )
        return _top(ranked, top_n)

    def rank_jobs_for_talent(
        self,
        talent: CandidateInput,
        jobs: Iterable[JobInput],
        top_n: int = 10,
    ) -> list[RankedMatch]:
        """Best matching open jobs for a talent."""
        profile = as_candidate(talent)
        ranked: list[RankedMatch] = []
        for job in jobs:
            requirement = self._validated(job, as_job, "job")
            if requirement is None or requirement.status is not JobStatus.OPEN:
                continue
            ranked.append(
                RankedMatch(
                    candidate_id=profile.candidate_id,
                    job_id=requirement.job_id,
                    result=self._match.score(profile, requirement),
                )
            )
        return _top(ranked, top_n)

    def search_talents(
        self,
        candidates: Iterable[CandidateInput],
        criteria: TalentSearchCriteria | Mapping[str, Any] | None = None,
    ) -> list[ScoredRecord]:
        """Filter candidates for the employer dashboard, best match first."""
        if criteria is None:
            criteria = TalentSearchCriteria()
        elif not isinstance(criteria, TalentSearchCriteria):
            criteria = TalentSearchCriteria.model_validate(dict(criteria))

        target = criteria.target()
        terms = expand_search_terms(criteria.query or "")
        wanted_track = track_key(criteria.track)

        records: list[ScoredRecord] = []
        for candidate in candidates:
            profile = self._validated(candidate, as_candidate, "candidate")
            if profile is None:
                continue
            if wanted_track and track_key(profile.track) != wanted_track:
                continue
            if (
                criteria.min_language_level is not None
                and profile.language_level.rank < criteria.min_language_level.rank
            ):
                continue
            if terms and not self._matches_terms(profile, terms):
                continue

            readiness = self._readiness.score(profile)
            if criteria.readiness is not None and readiness.status_label is not criteria.readiness:
                continue
            if criteria.min_readiness is not None and readiness.score < criteria.min_readiness:
                continue

            result = self._match.score(profile, target)
            if result.score < criteria.min_score:
                continue
            records.append(
                ScoredRecord(
                    id=profile.candidate_id,
                    score=result.score,
                    label=self.tier(result.score).value,
                    reason=result.reason_text,
                )
            )
        return sorted(records, key=lambda record: -record.score)

    def _matches_terms(self, profile: CandidateProfile, terms: Sequence[str]) -> bool:
        haystack = [normalize_search_text(skill) for skill in profile.skills]
        if profile.track:
            haystack.append(normalize_search_text(profile.track))
        return any(
            fuzz.partial_ratio(term, text) >= self._query_similarity
            for term in terms
            for text in haystack
            if text
        )

    def _validated(self, value: Any, coerce: Any, kind: str) -> Any:
        try:
            return coerce(value)
        except (ValueError, TypeError, ArithmeticError) as exc:
            self._logger.warning(
                f"{kind}.invalid_record",
                record_id=_record_id(value, kind),
                error=str(exc),
            )
            return None

    def _failed(self, record_id: str, exc: Exception, *, event: str) -> ScoredRecord:
        self._logger.warning(event, record_id=record_id, error=str(exc))
        return ScoredRecord(
            id=record_id,
            score=0,
            label=ERROR_LABEL,
            reason=f"Could not score record: {_first_line(exc)}",
        )


def normalize_search_text(value: str) -> str:
    lowered = _NON_ALNUM.sub(" ", value.lower())
    return _SPACES.sub(" ", lowered).strip()


def expand_search_terms(query: str) -> list[str]:
    """Expand a free-text query with the SAP skill synonym table."""
    normalized = normalize_search_text(query)
    if not normalized:
        return []

    tokens = normalized.split(" ")
    expanded: dict[str, None] = dict.fromkeys([normalized, *tokens])
    for token in tokens:
        for root, synonyms in SKILL_SYNONYMS.items():
            if token == root or token in synonyms:
                expanded[root] = None
                expanded.update(dict.fromkeys(synonyms))
    return list(expanded)


def _top(ranked: list[RankedMatch], top_n: int) -> list[RankedMatch]:
    ordered = sorted(ranked, key=lambda item: -item.result.score)
    return ordered[: max(top_n, 0)]


def _record_id(value: Any, kind: str) -> str:
    if isinstance(value, CandidateProfile):
        return value.candidate_id
    if isinstance(value, JobRequirement):
        return value.job_id
    if isinstance(value, Mapping):
        primary = "candidate_id" if kind == "candidate" else "job_id"
        for field_name in (primary, "id"):
            if value.get(field_name) is not None:
                return str(value[field_name])
    return ""


def _first_line(exc: Exception) -> str:
    text = str(exc).strip()
    return text.splitlines()[0] if text else type(exc).__name__


_DEFAULT_ADAPTER = PresentationAdapter()


def score_pairs(
    pairs: Iterable[tuple[CandidateInput, JobInput]],
    *,
    key: Literal["candidate", "job"] = "candidate",
) -> list[ScoredRecord]:
    return _DEFAULT_ADAPTER.score_pairs(pairs, key=key)


def score_readiness_batch(candidates: Iterable[CandidateInput]) -> list[ScoredRecord]:
    return _DEFAULT_ADAPTER.score_readiness_batch(candidates)


def rank_talents_for_job(
    talents: Iterable[CandidateInput], job: JobInput, top_n: int = 10
) -> list[RankedMatch]:
    return _DEFAULT_ADAPTER.rank_talents_for_job(talents, job, top_n)


def rank_jobs_for_talent(
    talent: CandidateInput, jobs: Iterable[JobInput], top_n: int = 10
) -> list[RankedMatch]:
    return _DEFAULT_ADAPTER.rank_jobs_for_talent(talent, jobs, top_n)


def search_talents(
    candidates: Iterable[CandidateInput],
    criteria: TalentSearchCriteria | Mapping[str, Any] | None = None,
) -> list[ScoredRecord]:
    return _DEFAULT_ADAPTER.search_talents(candidates, criteria)
