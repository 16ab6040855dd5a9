"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError


class CoreConfig(BaseModel):
    match_weights: dict[str, float] | None = None
    readiness_weights: dict[str, float] | None = None
    readiness_thresholds: dict[str, float] | None = None
    match_tiers: dict[str, float] | None = None


class EvaluatorConfig(BaseModel):
    experience: dict[str, Any] | None = None
    language: dict[str, Any] | None = None
    readiness: dict[str, Any] | None = None
    skill_gap: dict[str, Any] | None = None


class AppConfig(BaseModel):
    core: CoreConfig = Field(default_factory=CoreConfig)
    evaluators: EvaluatorConfig = Field(default_factory=EvaluatorConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        core_settings = self.core.model_dump(exclude_none=True)
        if core_settings:
            settings["core"] = core_settings
        evaluator_settings = self.evaluators.model_dump(exclude_none=True)
        if evaluator_settings:
            settings["evaluators"] = evaluator_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
