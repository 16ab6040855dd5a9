"""Employer recruitment pipeline stages."""

from __future__ import annotations

from enum import Enum


class RecruitmentStage(str, Enum):
    SHORTLISTED = "shortlisted"
    INTERVIEW_REQUESTED = "interview_requested"
    INTERVIEWING = "interviewing"
    OFFERED = "offered"
    HIRED = "hired"
    REJECTED = "rejected"


PIPELINE_TRANSITIONS: dict[RecruitmentStage, tuple[RecruitmentStage, ...]] = {
    RecruitmentStage.SHORTLISTED: (RecruitmentStage.INTERVIEW_REQUESTED, RecruitmentStage.REJECTED),
    RecruitmentStage.INTERVIEW_REQUESTED: (RecruitmentStage.INTERVIEWING, RecruitmentStage.REJECTED),
    RecruitmentStage.INTERVIEWING: (RecruitmentStage.OFFERED, RecruitmentStage.REJECTED),
    RecruitmentStage.OFFERED: (RecruitmentStage.HIRED, RecruitmentStage.REJECTED),
    RecruitmentStage.HIRED: (),
    RecruitmentStage.REJECTED: (),
}


def _stage(value: RecruitmentStage | str | None) -> RecruitmentStage | None:
    # Unset stages count as shortlisted, the state every saved talent starts in.
    if value is None:
        return RecruitmentStage.SHORTLISTED
    if isinstance(value, RecruitmentStage):
        return value
    try:
        return RecruitmentStage(str(value).strip().lower())
    except ValueError:
        return None


def is_valid_transition(
    current: RecruitmentStage | str | None, target: RecruitmentStage | str
) -> bool:
    """Return True when ``target`` directly follows ``current``; unknown stages never do."""
    source = _stage(current)
    destination = _stage(target)
    if source is None or destination is None:
        return False
    return destination in PIPELINE_TRANSITIONS[source]


def is_terminal(stage: RecruitmentStage | str) -> bool:
    resolved = _stage(stage)
    return resolved is not None and not PIPELINE_TRANSITIONS[resolved]


def next_stage(stage: RecruitmentStage | str | None) -> RecruitmentStage | None:
    """Advance one step along the happy path; ``None`` at terminal stages."""
    resolved = _stage(stage)
    if resolved is None:
        return None
    forward = [s for s in PIPELINE_TRANSITIONS[resolved] if s is not RecruitmentStage.REJECTED]
    return forward[0] if forward else None
