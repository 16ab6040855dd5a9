from __future__ import annotations

from typing import Any

import pytest

from talentmatch.core import MatchScorer, score_match
from talentmatch.core.matching import round_half_up
from talentmatch.core.evaluators import ExperienceConfig, ExperienceFitEvaluator
from talentmatch.schemas import CandidateProfile, JobRequirement


def build_candidate(**kwargs: Any) -> CandidateProfile:
    defaults: dict[str, Any] = {"candidate_id": "T-001"}
    defaults.update(kwargs)
    return CandidateProfile(**defaults)


def build_job(**kwargs: Any) -> JobRequirement:
    defaults: dict[str, Any] = {"job_id": "J-001"}
    defaults.update(kwargs)
    return JobRequirement(**defaults)


def test_full_fit_scores_at_least_ninety_with_no_missing_skills():
    candidate = build_candidate(
        skills=["SAP FI", "SAP CO"],
        years_of_experience=5,
        language_level="C1",
        track="FI",
    )
    job = build_job(
        required_skills=["SAP FI", "SAP CO"],
        min_experience=3,
        track="FI",
        required_language_level="B2",
    )

    result = score_match(candidate, job)

    assert result.score >= 90
    assert result.score == 100
    assert result.missing_skills == []
    assert result.matching_skills == ["SAP CO", "SAP FI"]
    assert result.reason_text == "Strongest on skills (2/2 required); no gaps."


def test_candidate_without_skills_only_earns_other_components():
    candidate = build_candidate(skills=[])
    job = build_job(required_skills=["SAP MM", "ABAP", "Fiori"])

    result = score_match(candidate, job)

    assert result.matching_skills == []
    assert result.missing_skills == ["ABAP", "Fiori", "SAP MM"]
    assert result.breakdown["skills"] == 0.0
    assert result.breakdown["experience"] == 1.0
    assert result.breakdown["language"] == 1.0
    assert result.breakdown["track"] == 1.0
    assert result.score == 50


def test_empty_required_skills_give_full_skill_fit():
    result = score_match(build_candidate(skills=["ABAP"]), build_job(required_skills=[]))

    assert result.breakdown["skills"] == 1.0
    assert result.matching_skills == []
    assert result.missing_skills == []


def test_skill_comparison_is_case_insensitive_exact_token():
    candidate = build_candidate(skills=["sap fi", "SAP FI Basics"])
    job = build_job(required_skills=["SAP FI", "SAP CO"])

    result = score_match(candidate, job)

    assert result.matching_skills == ["SAP FI"]
    assert result.missing_skills == ["SAP CO"]
    assert result.breakdown["skills"] == pytest.approx(0.5)


def test_reason_names_dominant_strength_and_largest_gap():
    candidate = build_candidate(skills=["SAP FI"], years_of_experience=4)
    job = build_job(required_skills=["SAP FI", "SAP CO"], min_experience=2)

    result = score_match(candidate, job)

    assert result.score == 75
    assert result.reason_text == (
        "Strongest on skills (1/2 required); largest gap: missing skills SAP CO."
    )


def test_no_fit_on_any_component_scores_zero():
    candidate = build_candidate(track="MM", language_level="A0")
    job = build_job(
        required_skills=["ABAP"],
        min_experience=3,
        track="FI",
        required_language_level="B2",
    )

    result = score_match(candidate, job)

    assert result.score == 0
    assert result.reason_text == "No fit on any criterion; largest gap: missing skills ABAP."


@pytest.mark.parametrize(
    ("years", "minimum", "expected"),
    [
        (5, 3, 1.0),
        (3, 3, 1.0),
        (2, 3, 2 / 3),
        (3, 5, 1 / 3),
        (2, 5, 0.0),
        (0, 10, 0.0),
        (0, 0, 1.0),
    ],
)
def test_experience_fit_ramps_down_over_three_years(years, minimum, expected):
    result = score_match(
        build_candidate(years_of_experience=years),
        build_job(min_experience=minimum),
    )

    assert result.breakdown["experience"] == pytest.approx(expected)


@pytest.mark.parametrize(
    ("candidate_level", "required_level", "expected"),
    [
        ("C1", "B2", 1.0),
        ("B2", "B2", 1.0),
        ("B1", "B2", 0.5),
        ("A2", "B2", 0.0),
        ("A0", None, 1.0),
    ],
)
def test_language_fit_on_ordered_scale(candidate_level, required_level, expected):
    result = score_match(
        build_candidate(language_level=candidate_level),
        build_job(required_language_level=required_level),
    )

    assert result.breakdown["language"] == pytest.approx(expected)


@pytest.mark.parametrize(
    ("candidate_track", "job_track", "expected"),
    [
        ("FI", "fi", 1.0),
        (None, "FI", 1.0),
        ("MM", None, 1.0),
        ("MM", "FI", 0.0),
    ],
)
def test_track_fit(candidate_track, job_track, expected):
    result = score_match(
        build_candidate(track=candidate_track),
        build_job(track=job_track),
    )

    assert result.breakdown["track"] == expected


def test_score_is_idempotent():
    candidate = build_candidate(skills=["ABAP", "CDS Views"], years_of_experience=1, track="ABAP")
    job = build_job(required_skills=["ABAP", "OData Services"], min_experience=3, track="ABAP")

    assert score_match(candidate, job) == score_match(candidate, job)


def test_adding_required_skill_never_lowers_score():
    required = ["ABAP", "CDS Views", "OData Services", "SAP HANA"]
    job = build_job(required_skills=required, min_experience=2, required_language_level="B1")
    skills: list[str] = ["Python"]
    previous = score_match(build_candidate(skills=skills, language_level="A2"), job).score

    for skill in required:
        skills = [*skills, skill]
        current = score_match(build_candidate(skills=skills, language_level="A2"), job).score
        assert current >= previous
        previous = current


@pytest.mark.parametrize(
    ("candidate", "job"),
    [
        ({}, {}),
        (None, None),
        ({"skills": None, "years_of_experience": -10}, {"required_skills": None, "min_experience": -2}),
        ({"skills": "ABAP", "coach_rating": "excellent"}, {"required_skills": "ABAP", "min_experience": "3"}),
        ({"years_of_experience": 40}, {"min_experience": 99}),
    ],
)
def test_score_stays_within_bounds_for_malformed_input(candidate, job):
    result = score_match(candidate, job)

    assert 0 <= result.score <= 100


def test_weights_can_be_overridden_per_component():
    scorer = MatchScorer(weights={"skills": 1.0, "experience": 0.0, "language": 0.0, "track": 0.0})
    candidate = build_candidate(skills=["ABAP"])
    job = build_job(required_skills=["ABAP", "SAP HANA"], min_experience=10)

    result = scorer.score(candidate, job)

    assert result.score == 50
    assert scorer.weights["skills"] == 1.0


def test_partial_weight_override_keeps_other_defaults():
    scorer = MatchScorer(weights={"skills": 0.6})

    assert scorer.weights == {"skills": 0.6, "experience": 0.25, "language": 0.15, "track": 0.10}


def test_custom_evaluator_config_is_respected():
    scorer = MatchScorer(
        evaluators=[ExperienceFitEvaluator(config=ExperienceConfig(ramp_years=6))],
        weights={"skills": 0.0, "experience": 1.0, "language": 0.0, "track": 0.0},
    )

    result = scorer.score(build_candidate(years_of_experience=2), build_job(min_experience=5))

    assert result.breakdown == {"experience": pytest.approx(0.5)}
    assert result.score == 50


@pytest.mark.parametrize(
    ("value", "expected"),
    [(57.49999999999999, 58), (78.5, 79), (87.4, 87), (0.0, 0)],
)
def test_round_half_up_absorbs_float_drift(value, expected):
    assert round_half_up(value) == expected


def test_huge_numbers_do_not_abort_scoring():
    result = score_match({"years_of_experience": 10**400}, {"min_experience": 10**400})

    assert result.score == 100
