from __future__ import annotations

import pytest
from pydantic import ValidationError

from talentmatch.schemas import (
    CandidateProfile,
    JobRequirement,
    JobStatus,
    LanguageLevel,
    PlacementStatus,
    parse_language_level,
)


def test_candidate_profile_defaults():
    profile = CandidateProfile()

    assert profile.candidate_id == ""
    assert profile.skills == []
    assert profile.years_of_experience == 0
    assert profile.language_level is LanguageLevel.A0
    assert profile.track is None
    assert profile.availability is False
    assert profile.assessments_passed == 0
    assert profile.coach_rating == 0.0
    assert profile.bio_present is False
    assert profile.placement_status is PlacementStatus.LEARNING


def test_candidate_profile_normalizes_malformed_fields():
    profile = CandidateProfile(
        candidate_id=42,
        skills=["SAP FI", " sap fi ", "", None, "SAP CO"],
        years_of_experience=-4,
        language_level=None,
        track="  ",
        availability=None,
        assessments_passed="3",
        coach_rating=7.5,
        bio_present="yes",
        placement_status="placed",
    )

    assert profile.candidate_id == "42"
    assert profile.skills == ["SAP FI", "SAP CO"]
    assert profile.years_of_experience == 0
    assert profile.language_level is LanguageLevel.A0
    assert profile.track is None
    assert profile.availability is False
    assert profile.assessments_passed == 3
    assert profile.coach_rating == pytest.approx(5.0)
    assert profile.bio_present is True
    assert profile.placement_status is PlacementStatus.PLACED


def test_candidate_profile_treats_null_collections_and_junk_numbers_as_empty():
    profile = CandidateProfile(skills=None, years_of_experience="n/a", coach_rating=float("nan"))

    assert profile.skills == []
    assert profile.years_of_experience == 0
    assert profile.coach_rating == 0.0


def test_candidate_profile_rejects_unorderable_language_level():
    with pytest.raises(ValidationError):
        CandidateProfile(language_level="fluent-ish")


def test_job_requirement_defaults():
    job = JobRequirement()

    assert job.job_id == ""
    assert job.required_skills == []
    assert job.min_experience == 0
    assert job.track is None
    assert job.required_language_level is None
    assert job.status is JobStatus.OPEN


def test_job_requirement_status_and_level_coercion():
    job = JobRequirement(
        job_id="J-1",
        required_skills=["ABAP", "abap", "CDS Views"],
        min_experience=None,
        required_language_level="German b1",
        status="closed",
    )

    assert job.required_skills == ["ABAP", "CDS Views"]
    assert job.min_experience == 0
    assert job.required_language_level is LanguageLevel.B1
    assert job.status is JobStatus.CLOSED


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("B2", LanguageLevel.B2),
        ("german c1", LanguageLevel.C1),
        ("Deutsch (A2)", LanguageLevel.A2),
        ("C2", LanguageLevel.C1),
        ("Native", LanguageLevel.C1),
        ("", None),
        (None, None),
    ],
)
def test_parse_language_level(raw, expected):
    assert parse_language_level(raw) is expected


def test_language_levels_are_ordered():
    ranks = [level.rank for level in LanguageLevel]

    assert ranks == sorted(ranks)
    assert LanguageLevel.A0.rank < LanguageLevel.B1.rank < LanguageLevel.C1.rank


@pytest.mark.parametrize("raw", ["fluent", "B3", "level 7"])
def test_parse_language_level_rejects_unknown_codes(raw):
    with pytest.raises(ValueError):
        parse_language_level(raw)
