from __future__ import annotations

import json

import pytest

from talentmatch.adapters import MvpRowAdapter, RecordAdapter
from talentmatch.schemas import (
    CandidateProfile,
    JobRequirement,
    JobStatus,
    LanguageLevel,
    PlacementStatus,
)


def test_adapter_satisfies_protocol():
    assert isinstance(MvpRowAdapter(), RecordAdapter)


def test_parse_talent_row_with_nullable_columns():
    row = {
        "id": "t-1",
        "user_id": "u-1",
        "bio": "   ",
        "languages": ["English C1", "German B2"],
        "skills": ["SAP FI", "sap fi", {"skill": "SAP CO"}],
        "years_of_experience": None,
        "sap_track": "FICO",
        "coach_rating": "4.5",
        "availability": True,
        "assessments": [{"passed": True}, {"passed": False}, {"status": "passed"}],
        "placement_status": "JOB_READY",
    }

    profile = CandidateProfile.model_validate(MvpRowAdapter().parse_candidate(row))

    assert profile.candidate_id == "t-1"
    assert profile.skills == ["SAP FI", "SAP CO"]
    assert profile.years_of_experience == 0
    assert profile.language_level is LanguageLevel.B2
    assert profile.track == "FICO"
    assert profile.coach_rating == pytest.approx(4.5)
    assert profile.availability is True
    assert profile.assessments_passed == 2
    assert profile.bio_present is False
    assert profile.placement_status is PlacementStatus.JOB_READY


def test_parse_talent_row_ignores_german_without_level():
    row = {"id": "t-2", "languages": ["Deutsch"], "bio": "SAP consultant"}

    profile = CandidateProfile.model_validate(MvpRowAdapter().parse_candidate(row))

    assert profile.language_level is LanguageLevel.A0
    assert profile.bio_present is True


def test_parse_talent_row_from_wrapped_json_text():
    blob = json.dumps({"provider": "mvp", "payload": {"id": 7, "german_level": "C1", "skills": None}})

    profile = CandidateProfile.model_validate(MvpRowAdapter().parse_candidate(blob))

    assert profile.candidate_id == "7"
    assert profile.language_level is LanguageLevel.C1
    assert profile.skills == []


def test_parse_job_row():
    row = {
        "id": "j-1",
        "title": "SAP FI Consultant",
        "required_skills": ["SAP FI", "SAP CO"],
        "min_experience": 3,
        "german_level": "B2",
        "location": "Berlin",
        "status": "closed",
    }

    job = JobRequirement.model_validate(MvpRowAdapter().parse_job(row))

    assert job.job_id == "j-1"
    assert job.title == "SAP FI Consultant"
    assert job.required_skills == ["SAP FI", "SAP CO"]
    assert job.required_language_level is LanguageLevel.B2
    assert job.status is JobStatus.CLOSED


def test_can_handle_and_invalid_payloads():
    adapter = MvpRowAdapter()

    assert adapter.can_handle({"id": "t-1"}, {})
    assert adapter.can_handle("{}", {"provider": "MVP"})
    assert not adapter.can_handle("{}", {"provider": "other"})
    assert not adapter.can_handle("{not json", {})
    with pytest.raises(ValueError):
        adapter.parse_candidate("{not json")
    with pytest.raises(ValueError):
        adapter.parse_job("[1, 2]")


@pytest.mark.parametrize(("raw", "expected"), [("false", False), ("0", False), ("", False), ("yes", True), (1, True)])
def test_parse_candidate_coerces_string_bio_flag(raw, expected):
    candidate = MvpRowAdapter().parse_candidate({"id": "T-1", "bio_present": raw})

    assert candidate["bio_present"] is expected
