"""Job readiness scoring for a single candidate profile."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from ..schemas import CandidateProfile
from .attributes import as_candidate
from .matching import round_half_up


class ReadinessStatus(str, Enum):
    LEARNING = "LEARNING"
    NEAR_READY = "NEAR_READY"
    JOB_READY = "JOB_READY"


@dataclass
class ReadinessConfig:
    """Saturation points for the count-based signals."""

    skills_for_full_credit: int = 8
    assessments_for_full_credit: int = 4
    max_coach_rating: float = 5.0


@dataclass(slots=True)
class ReadinessResult:
    """Readiness score, its bucket and the points earned per signal."""

    score: int
    status_label: ReadinessStatus
    breakdown: dict[str, float] = field(default_factory=dict)


class ReadinessScorer:
    """Weighted sum of profile completeness signals, bucketed into a status."""

    # skills: skill count, saturating at ``skills_for_full_credit``
    # assessments: passed assessments, saturating at ``assessments_for_full_credit``
    # coach_rating: rating out of 5
    # availability, bio: 0 or 1
    DEFAULT_WEIGHTS: dict[str, float] = {
        "skills": 0.30,
        "assessments": 0.25,
        "coach_rating": 0.20,
        "availability": 0.15,
        "bio": 0.10,
    }

    # Lower bound of each bucket, inclusive.
    DEFAULT_THRESHOLDS: dict[str, float] = {
        "job_ready": 80.0,
        "near_ready": 50.0,
    }

    def __init__(
        self,
        *,
        config: ReadinessConfig | None = None,
        weights: Mapping[str, float] | None = None,
        thresholds: Mapping[str, float] | None = None,
    ) -> None:
        self._config = config or ReadinessConfig()
        self._weights = {**self.DEFAULT_WEIGHTS, **(weights or {})}
        self._thresholds = {**self.DEFAULT_THRESHOLDS, **(thresholds or {})}

    @property
    def weights(self) -> dict[str, float]:
        return dict(self._weights)

    def score(self, candidate: CandidateProfile | Mapping[str, Any] | None) -> ReadinessResult:
        profile = as_candidate(candidate)
        signals = self._signals(profile)
        breakdown = {
            name: round(self._weights.get(name, 0.0) * value * 100, 2)
            for name, value in signals.items()
        }
        weighted = sum(
            signals.get(name, 0.0) * weight for name, weight in self._weights.items()
        )
        score = min(max(round_half_up(weighted * 100), 0), 100)
        return ReadinessResult(
            score=score,
            status_label=self.bucket(score),
            breakdown=breakdown,
        )

    def bucket(self, score: float) -> ReadinessStatus:
        if score >= self._thresholds["job_ready"]:
            return ReadinessStatus.JOB_READY
        if score >= self._thresholds["near_ready"]:
            return ReadinessStatus.NEAR_READY
        return ReadinessStatus.LEARNING

    def _signals(self, profile: CandidateProfile) -> dict[str, float]:
        return {
            "skills": _saturate(len(profile.skills), self._config.skills_for_full_credit),
            "assessments": _saturate(
                profile.assessments_passed, self._config.assessments_for_full_credit
            ),
            "coach_rating": _saturate(profile.coach_rating, self._config.max_coach_rating),
            "availability": 1.0 if profile.availability else 0.0,
            "bio": 1.0 if profile.bio_present else 0.0,
        }


def _saturate(value: float, full_credit_at: float) -> float:
    if full_credit_at <= 0:
        return 1.0
    return min(max(value / full_credit_at, 0.0), 1.0)


_DEFAULT_SCORER = ReadinessScorer()


def score_readiness(candidate: CandidateProfile | Mapping[str, Any] | None) -> ReadinessResult:
    """Score one candidate's readiness with the default weights."""
    return _DEFAULT_SCORER.score(candidate)


def bucket_readiness(score: float) -> ReadinessStatus:
    return _DEFAULT_SCORER.bucket(score)
