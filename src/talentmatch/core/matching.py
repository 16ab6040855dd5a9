"""Candidate/job match scoring."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from ..schemas import CandidateProfile, JobRequirement
from .attributes import as_candidate, as_job, extract
from .evaluators import (
    ExperienceFitEvaluator,
    LanguageFitEvaluator,
    SkillOverlapEvaluator,
    TrackFitEvaluator,
)


@dataclass(slots=True)
class EvaluationResult:
    """Normalized evaluator output."""

    method: str
    scores: dict[str, float]
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class MatchResult:
    """Compatibility of one candidate with one job."""

    score: int
    matching_skills: list[str]
    missing_skills: list[str]
    reason_text: str
    breakdown: dict[str, float] = field(default_factory=dict)


def default_evaluators() -> list[Any]:
    return [
        SkillOverlapEvaluator(),
        ExperienceFitEvaluator(),
        LanguageFitEvaluator(),
        TrackFitEvaluator(),
    ]


class MatchScorer:
    """Weighted sum of skill, experience, language and track fit.

    Each evaluator reports a fit in ``[0, 1]`` under its component name. The
    final score is ``round(100 * sum(weight * fit))`` clamped to ``[0, 100]``.
    Components without a weight are reported in the breakdown but do not
    contribute.
    """

    # Sums to 1.0 so a perfect fit on every component scores 100.
    DEFAULT_WEIGHTS: dict[str, float] = {
        "skills": 0.50,
        "experience": 0.25,
        "language": 0.15,
        "track": 0.10,
    }

    def __init__(
        self,
        evaluators: Iterable[Any] | None = None,
        *,
        weights: Mapping[str, float] | None = None,
    ) -> None:
        self._evaluators = list(evaluators) if evaluators is not None else default_evaluators()
        self._weights = {**self.DEFAULT_WEIGHTS, **(weights or {})}

    @property
    def weights(self) -> dict[str, float]:
        return dict(self._weights)

    def score(
        self,
        candidate: CandidateProfile | Mapping[str, Any] | None,
        job: JobRequirement | Mapping[str, Any] | None,
    ) -> MatchResult:
        profile = as_candidate(candidate)
        requirement = as_job(job)
        attributes = extract(profile, requirement)

        evaluations = [
            self._normalize_evaluation_result(evaluator.evaluate(attributes))
            for evaluator in self._evaluators
        ]
        fits: dict[str, float] = {}
        metadata: dict[str, dict[str, Any]] = {}
        for evaluation in evaluations:
            fits.update(evaluation.scores)
            metadata[evaluation.method] = evaluation.metadata

        skills_meta = metadata.get("skills", {})
        return MatchResult(
            score=self._compute_score(fits),
            matching_skills=list(skills_meta.get("matching_skills", [])),
            missing_skills=list(skills_meta.get("missing_skills", [])),
            reason_text=self._reason(fits, metadata, profile, requirement),
            breakdown=fits,
        )

    @staticmethod
    def _normalize_evaluation_result(payload: dict[str, Any]) -> EvaluationResult:
        method = payload.get("method")
        scores = payload.get("scores") or {}
        metadata = payload.get("metadata") or {}
        if method is None:
            raise ValueError("Evaluator result must include 'method'.")
        if not isinstance(scores, dict):
            raise ValueError("Evaluator result 'scores' must be a mapping.")
        return EvaluationResult(
            method=str(method),
            scores={k: min(max(float(v), 0.0), 1.0) for k, v in scores.items()},
            metadata=dict(metadata),
        )

    def _compute_score(self, fits: dict[str, float]) -> int:
        weighted = sum(
            fits.get(component, 0.0) * weight
            for component, weight in self._weights.items()
        )
        return min(max(round_half_up(weighted * 100), 0), 100)

    def _reason(
        self,
        fits: dict[str, float],
        metadata: dict[str, dict[str, Any]],
        candidate: CandidateProfile,
        job: JobRequirement,
    ) -> str:
        # Iteration follows the weight table so ties resolve the same way every call.
        contributions = [
            (component, weight * fits.get(component, 0.0), weight * (1.0 - fits.get(component, 0.0)))
            for component, weight in self._weights.items()
            if weight > 0 and component in fits
        ]
        if not contributions:
            return "No scoring criteria configured."

        best = max(contributions, key=lambda item: item[1])
        worst = max(contributions, key=lambda item: item[2])

        if best[1] > 0:
            opening = f"Strongest on {_strength_phrase(best[0], metadata, candidate, job)}"
        else:
            opening = "No fit on any criterion"
        if worst[2] <= 0:
            return f"{opening}; no gaps."
        return f"{opening}; largest gap: {_gap_phrase(worst[0], metadata, candidate, job)}."


def round_half_up(value: float) -> int:
    # Float sums of the weights land a hair below .5 (57.49999...); snap first.
    return int(math.floor(round(value, 9) + 0.5))


def _strength_phrase(
    component: str,
    metadata: dict[str, dict[str, Any]],
    candidate: CandidateProfile,
    job: JobRequirement,
) -> str:
    details = metadata.get(component, {})
    if component == "skills":
        required = details.get("required_count", 0)
        if not required:
            return "skills (no specific skills required)"
        return f"skills ({details.get('matched_count', 0)}/{required} required)"
    if component == "experience":
        return (
            f"experience ({candidate.years_of_experience} years, "
            f"{job.min_experience} required)"
        )
    if component == "language":
        required_level = details.get("required_level") or "none"
        return f"German level ({candidate.language_level.value}, {required_level} required)"
    if component == "track":
        return f"track ({candidate.track or job.track or 'open'})"
    return component


def _gap_phrase(
    component: str,
    metadata: dict[str, dict[str, Any]],
    candidate: CandidateProfile,
    job: JobRequirement,
) -> str:
    details = metadata.get(component, {})
    if component == "skills":
        return "missing skills " + ", ".join(details.get("missing_skills", []))
    if component == "experience":
        return (
            f"experience ({candidate.years_of_experience} of "
            f"{job.min_experience} required years)"
        )
    if component == "language":
        return (
            f"German level ({candidate.language_level.value} below required "
            f"{details.get('required_level')})"
        )
    if component == "track":
        return f"track mismatch ({candidate.track} vs {job.track})"
    return component


_DEFAULT_SCORER = MatchScorer()


def score_match(
    candidate: CandidateProfile | Mapping[str, Any] | None,
    job: JobRequirement | Mapping[str, Any] | None,
) -> MatchResult:
    """Score one candidate against one job with the default weights."""
    return _DEFAULT_SCORER.score(candidate, job)
