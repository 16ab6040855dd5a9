from __future__ import annotations

import pytest

from talentmatch.core import ReadinessScorer, ReadinessStatus, bucket_readiness, score_readiness
from talentmatch.core.readiness import ReadinessConfig
from talentmatch.schemas import CandidateProfile


def skills(count: int) -> list[str]:
    return [f"Skill {idx}" for idx in range(count)]


def test_complete_profile_is_job_ready():
    candidate = CandidateProfile(
        skills=skills(10),
        assessments_passed=4,
        coach_rating=5,
        bio_present=True,
        availability=True,
    )

    result = score_readiness(candidate)

    assert result.score == 100
    assert result.status_label is ReadinessStatus.JOB_READY


def test_empty_profile_is_learning():
    result = score_readiness(CandidateProfile())

    assert result.score == 0
    assert result.status_label is ReadinessStatus.LEARNING


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (100, ReadinessStatus.JOB_READY),
        (80, ReadinessStatus.JOB_READY),
        (79, ReadinessStatus.NEAR_READY),
        (50, ReadinessStatus.NEAR_READY),
        (49, ReadinessStatus.LEARNING),
        (0, ReadinessStatus.LEARNING),
    ],
)
def test_bucket_boundaries_belong_to_higher_bucket(score, expected):
    assert bucket_readiness(score) is expected


@pytest.mark.parametrize(
    ("profile", "expected_score", "expected_status"),
    [
        (
            {"skills": skills(8), "assessments_passed": 4, "availability": True, "bio_present": True},
            80,
            ReadinessStatus.JOB_READY,
        ),
        (
            {"skills": skills(8), "assessments_passed": 4, "availability": True, "coach_rating": 2.25},
            79,
            ReadinessStatus.NEAR_READY,
        ),
        (
            {"assessments_passed": 4, "availability": True, "bio_present": True},
            50,
            ReadinessStatus.NEAR_READY,
        ),
        (
            {"assessments_passed": 4, "availability": True, "coach_rating": 2.25},
            49,
            ReadinessStatus.LEARNING,
        ),
    ],
)
def test_weighted_profiles_land_on_bucket_edges(profile, expected_score, expected_status):
    result = score_readiness(CandidateProfile(**profile))

    assert result.score == expected_score
    assert result.status_label is expected_status


def test_breakdown_reports_points_per_signal():
    candidate = CandidateProfile(
        skills=skills(4),
        assessments_passed=1,
        coach_rating=2.5,
        bio_present=True,
        availability=False,
    )

    result = score_readiness(candidate)

    assert result.breakdown == {
        "skills": pytest.approx(15.0),
        "assessments": pytest.approx(6.25),
        "coach_rating": pytest.approx(10.0),
        "availability": 0.0,
        "bio": pytest.approx(10.0),
    }
    assert result.score == 41


def test_count_signals_saturate():
    capped = score_readiness(CandidateProfile(skills=skills(30), assessments_passed=12))
    at_cap = score_readiness(CandidateProfile(skills=skills(8), assessments_passed=4))

    assert capped.score == at_cap.score == 55


def test_custom_thresholds_and_config():
    scorer = ReadinessScorer(
        config=ReadinessConfig(skills_for_full_credit=2),
        thresholds={"job_ready": 30},
    )

    result = scorer.score({"skills": ["ABAP", "CDS Views"]})

    assert result.score == 30
    assert result.status_label is ReadinessStatus.JOB_READY


def test_readiness_accepts_plain_mappings_with_junk():
    result = score_readiness({"skills": None, "coach_rating": -3, "assessments_passed": "2"})

    assert result.score == 13
    assert 0 <= result.score <= 100


def test_half_point_totals_round_up():
    # 12.5 + 20 + 15 + 10 sums to 57.49999... in floating point.
    result = score_readiness(
        {"assessments_passed": 2, "coach_rating": 5, "availability": True, "bio_present": True}
    )

    assert result.breakdown == {
        "skills": 0.0,
        "assessments": 12.5,
        "coach_rating": 20.0,
        "availability": 15.0,
        "bio": 10.0,
    }
    assert result.score == 58
    assert result.status_label is ReadinessStatus.NEAR_READY


def test_huge_counts_are_treated_as_missing():
    result = score_readiness({"assessments_passed": 10**400, "coach_rating": 10**400})

    assert result.score == 0
