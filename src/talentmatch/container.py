"""Dependency injection container for the scoring tools."""

from __future__ import annotations

from dependency_injector import containers, providers

from .adapters import MvpRowAdapter
from .core import (
    ExperienceFitEvaluator,
    LanguageFitEvaluator,
    MatchScorer,
    ReadinessScorer,
    SkillGapAnalyzer,
    SkillOverlapEvaluator,
    TrackFitEvaluator,
)
from .core.evaluators import ExperienceConfig, LanguageConfig
from .core.readiness import ReadinessConfig
from .core.skill_gap import SkillGapConfig
from .pipeline import AdapterRegistry, MatchingPipeline
from .presentation import PresentationAdapter


class ScoringContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    mvp_adapter = providers.Singleton(MvpRowAdapter)

    adapter_registry = providers.Singleton(
        AdapterRegistry,
        adapters=providers.List(mvp_adapter),
    )

    skills_evaluator = providers.Singleton(SkillOverlapEvaluator)
    experience_evaluator = providers.Singleton(ExperienceFitEvaluator)
    language_evaluator = providers.Singleton(LanguageFitEvaluator)
    track_evaluator = providers.Singleton(TrackFitEvaluator)

    evaluators = providers.List(
        skills_evaluator,
        experience_evaluator,
        language_evaluator,
        track_evaluator,
    )

    match_scorer = providers.Singleton(
        MatchScorer,
        evaluators=evaluators,
        weights=config.match_weights,
    )

    readiness_scorer = providers.Singleton(
        ReadinessScorer,
        weights=config.readiness_weights,
        thresholds=config.readiness_thresholds,
    )

    skill_gap_analyzer = providers.Singleton(SkillGapAnalyzer)

    presenter = providers.Singleton(
        PresentationAdapter,
        match_scorer=match_scorer,
        readiness_scorer=readiness_scorer,
        tiers=config.match_tiers,
    )

    pipeline = providers.Factory(
        MatchingPipeline,
        presenter=presenter,
        readiness=readiness_scorer,
        skill_gap=skill_gap_analyzer,
        registry=adapter_registry,
    )


def create_container(*, settings: dict | None = None) -> ScoringContainer:
    """Instantiate container with optional overrides."""

    container = ScoringContainer()

    if not settings:
        return container

    core_settings = settings.get("core", {}) if isinstance(settings, dict) else {}
    if core_settings:
        container.config.override(core_settings)

    evaluator_settings = settings.get("evaluators", {}) if isinstance(settings, dict) else {}

    if "experience" in evaluator_settings:
        experience_config = ExperienceConfig(**evaluator_settings["experience"])
        container.experience_evaluator.override(
            providers.Singleton(ExperienceFitEvaluator, config=experience_config)
        )

    if "language" in evaluator_settings:
        language_config = LanguageConfig(**evaluator_settings["language"])
        container.language_evaluator.override(
            providers.Singleton(LanguageFitEvaluator, config=language_config)
        )

    if "readiness" in evaluator_settings:
        readiness_config = ReadinessConfig(**evaluator_settings["readiness"])
        container.readiness_scorer.override(
            providers.Singleton(
                ReadinessScorer,
                config=readiness_config,
                weights=container.config.readiness_weights,
                thresholds=container.config.readiness_thresholds,
            )
        )

    if "skill_gap" in evaluator_settings:
        gap_settings = dict(evaluator_settings["skill_gap"])
        if "requirements" in gap_settings:
            gap_settings["requirements"] = {
                track: tuple(skills) for track, skills in gap_settings["requirements"].items()
            }
        container.skill_gap_analyzer.override(
            providers.Singleton(SkillGapAnalyzer, config=SkillGapConfig(**gap_settings))
        )

    return container
