"""Pure scoring core: no I/O, no clocks, no shared mutable state."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

# NOTE: keep imports explicit for export clarity.
from .attributes import MatchAttributes, extract
from .evaluators import (
    ExperienceFitEvaluator,
    LanguageFitEvaluator,
    SkillOverlapEvaluator,
    TrackFitEvaluator,
)
from .matching import EvaluationResult, MatchResult, MatchScorer, score_match
from .readiness import (
    ReadinessResult,
    ReadinessScorer,
    ReadinessStatus,
    bucket_readiness,
    score_readiness,
)
from .skill_gap import SkillGap, SkillGapAnalyzer
from .stages import RecruitmentStage, is_valid_transition, next_stage


@runtime_checkable
class Evaluator(Protocol):
    """Evaluator contract for one match component."""

    method: str

    def evaluate(self, attributes: MatchAttributes) -> dict[str, Any]:
        """Return ``{"method", "scores", "metadata"}`` with fits in ``[0, 1]``."""


__all__ = [
    "Evaluator",
    "EvaluationResult",
    "ExperienceFitEvaluator",
    "LanguageFitEvaluator",
    "MatchAttributes",
    "MatchResult",
    "MatchScorer",
    "ReadinessResult",
    "ReadinessScorer",
    "ReadinessStatus",
    "RecruitmentStage",
    "SkillGap",
    "SkillGapAnalyzer",
    "SkillOverlapEvaluator",
    "TrackFitEvaluator",
    "bucket_readiness",
    "extract",
    "is_valid_transition",
    "next_stage",
    "score_match",
    "score_readiness",
]
