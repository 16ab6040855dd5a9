"""German language level fit evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..attributes import MatchAttributes


@dataclass
class LanguageConfig:
    """Partial credit granted when the candidate is just below the requirement."""

    partial_credit: float = 0.5
    partial_levels: int = 1


class LanguageFitEvaluator:
    """Compare candidate and required level on the ordered A0..C1 scale."""

    method = "language"

    def __init__(self, *, config: LanguageConfig | None = None) -> None:
        self._config = config or LanguageConfig()

    def evaluate(self, attributes: MatchAttributes) -> dict[str, Any]:
        candidate_level = attributes.candidate_level
        required_level = attributes.required_level

        levels_below = 0
        if required_level is None:
            fit = 1.0
        else:
            levels_below = max(required_level.rank - candidate_level.rank, 0)
            if levels_below == 0:
                fit = 1.0
            elif levels_below <= self._config.partial_levels:
                fit = self._config.partial_credit
            else:
                fit = 0.0

        return {
            "method": self.method,
            "scores": {"language": fit},
            "metadata": {
                "candidate_level": candidate_level.value,
                "required_level": required_level.value if required_level else None,
                "levels_below": levels_below,
            },
        }
