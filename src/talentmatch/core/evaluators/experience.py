"""Years-of-experience fit evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..attributes import MatchAttributes


@dataclass
class ExperienceConfig:
    """Width of the linear ramp below the required minimum."""

    ramp_years: float = 3.0


class ExperienceFitEvaluator:
    """Full credit at or above the minimum, linear ramp down to zero below it."""

    method = "experience"

    def __init__(self, *, config: ExperienceConfig | None = None) -> None:
        self._config = config or ExperienceConfig()

    def evaluate(self, attributes: MatchAttributes) -> dict[str, Any]:
        years = attributes.years_of_experience
        minimum = attributes.min_experience
        shortfall = max(minimum - years, 0)

        if shortfall == 0:
            fit = 1.0
        elif self._config.ramp_years <= 0:
            fit = 0.0
        else:
            fit = max(0.0, 1.0 - shortfall / self._config.ramp_years)

        return {
            "method": self.method,
            "scores": {"experience": fit},
            "metadata": {
                "years_of_experience": years,
                "min_experience": minimum,
                "shortfall_years": shortfall,
                "ramp_years": self._config.ramp_years,
            },
        }
