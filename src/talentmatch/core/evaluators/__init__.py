"""Fit evaluator implementations for the match scorer."""

from .experience import ExperienceConfig, ExperienceFitEvaluator
from .language import LanguageConfig, LanguageFitEvaluator
from .skills import SkillOverlapEvaluator
from .track import TrackFitEvaluator

__all__ = [
    "ExperienceConfig",
    "ExperienceFitEvaluator",
    "LanguageConfig",
    "LanguageFitEvaluator",
    "SkillOverlapEvaluator",
    "TrackFitEvaluator",
]
