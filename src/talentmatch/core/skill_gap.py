"""Track skill-gap analysis against the academy's per-track curriculum."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ..schemas import CandidateProfile
from .attributes import as_candidate, skill_key
from .matching import round_half_up

TRACK_REQUIREMENTS: dict[str, tuple[str, ...]] = {
    "ABAP": ("ABAP Objects", "SAP HANA", "OData Services", "CDS Views", "Fiori Fundamentals"),
    "FICO": (
        "Financial Accounting",
        "Management Accounting",
        "Asset Accounting",
        "Taxation",
        "S/4HANA Finance",
    ),
    "MM": (
        "Procurement",
        "Inventory Management",
        "Physical Inventory",
        "Invoice Verification",
        "LSMW/LTMC",
    ),
    "SD": (
        "Sales & Distribution",
        "Shipping & Transportation",
        "Billing",
        "Pricing",
        "Stock Room Management",
    ),
    "SuccessFactors": (
        "Employee Central",
        "Recruiting",
        "Onboarding",
        "Learning Management",
        "Performance & Goals",
    ),
}


# Track codes used by the portal filters that name a curriculum differently.
TRACK_ALIASES: dict[str, str] = {
    "FI": "FICO",
    "CO": "FICO",
    "FI/CO": "FICO",
    "SF": "SuccessFactors",
}


@dataclass
class SkillGapConfig:
    default_track: str = "ABAP"
    requirements: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(TRACK_REQUIREMENTS)
    )
    aliases: dict[str, str] = field(default_factory=lambda: dict(TRACK_ALIASES))


@dataclass(slots=True)
class SkillGap:
    """Curriculum coverage of one candidate for their track."""

    track: str
    requirements: list[str]
    matched: list[str]
    missing: list[str]
    coverage: int


class SkillGapAnalyzer:
    """Compare a candidate's skills with the curriculum of their track.

    A requirement counts as covered when it contains one of the candidate's
    skills or is contained in one, after case folding. Candidates without a
    known track are measured against ``default_track``.
    """

    def __init__(self, *, config: SkillGapConfig | None = None) -> None:
        self._config = config or SkillGapConfig()
        self._tracks = {key.casefold(): key for key in self._config.requirements}
        for alias, target in self._config.aliases.items():
            if target in self._config.requirements:
                self._tracks.setdefault(alias.casefold(), target)

    def tracks(self) -> list[str]:
        return list(self._config.requirements)

    def analyze(self, candidate: CandidateProfile | Mapping[str, Any] | None) -> SkillGap:
        profile = as_candidate(candidate)
        track = self._resolve_track(profile.track)
        requirements = list(self._config.requirements.get(track, ()))
        owned = [skill_key(skill) for skill in profile.skills]

        matched = [
            requirement
            for requirement in requirements
            if any(_covers(skill_key(requirement), skill) for skill in owned)
        ]
        missing = [requirement for requirement in requirements if requirement not in matched]
        coverage = round_half_up(100 * len(matched) / len(requirements)) if requirements else 100

        return SkillGap(
            track=track,
            requirements=requirements,
            matched=matched,
            missing=missing,
            coverage=coverage,
        )

    def _resolve_track(self, track: str | None) -> str:
        if track:
            resolved = self._tracks.get(track.strip().casefold())
            if resolved:
                return resolved
        return self._tracks.get(self._config.default_track.casefold(), self._config.default_track)


def _covers(requirement: str, skill: str) -> bool:
    return bool(skill) and (skill in requirement or requirement in skill)
