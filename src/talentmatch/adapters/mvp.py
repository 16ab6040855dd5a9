"""Adapter for talent and job rows served by the portal backend."""

from __future__ import annotations

import json
from typing import Any, Iterable

from ..schemas import CandidateProfile, JobRequirement, parse_language_level
from ..schemas.fields import coerce_flag

_GERMAN_MARKERS = ("german", "deutsch")


class MvpRowAdapter:
    """Adapter converting backend rows into scoring value types.

    Rows come straight from the hosted database: most columns are nullable,
    talent languages are free text such as ``"German B2"`` and older rows keep
    the track under ``sap_track``.
    """

    provider = "mvp"

    def can_handle(self, blob: bytes | str | dict[str, Any], metadata: dict[str, Any]) -> bool:
        provider = metadata.get("provider")
        if provider:
            return str(provider).lower() == self.provider
        try:
            data = self._load(blob)
        except ValueError:
            return False
        return str(data.get("provider", self.provider)).lower() == self.provider

    def parse_candidate(self, blob: bytes | str | dict[str, Any]) -> dict[str, Any]:
        row = self._payload(self._load(blob))
        candidate = CandidateProfile(
            candidate_id=_first(row, "candidate_id", "id", "talent_id", "user_id"),
            skills=_skill_names(row.get("skills") or row.get("ai_skills")),
            years_of_experience=_first(row, "years_of_experience", "experience_years"),
            language_level=self._german_level(row),
            track=_first(row, "track", "sap_track"),
            availability=row.get("availability"),
            assessments_passed=self._assessments_passed(row),
            coach_rating=row.get("coach_rating"),
            bio_present=self._bio_present(row),
            placement_status=row.get("placement_status"),
        )
        return candidate.model_dump(mode="python")

    def parse_job(self, blob: bytes | str | dict[str, Any]) -> dict[str, Any]:
        row = self._payload(self._load(blob))
        job = JobRequirement(
            job_id=_first(row, "job_id", "id"),
            title=row.get("title"),
            required_skills=_skill_names(row.get("required_skills")),
            min_experience=_first(row, "min_experience", "min_experience_years"),
            track=_first(row, "track", "sap_track"),
            required_language_level=_first(
                row, "required_language_level", "german_level", "min_german_level"
            ),
            location=row.get("location"),
            status=row.get("status"),
        )
        return job.model_dump(mode="python")

    @staticmethod
    def _german_level(row: dict[str, Any]) -> Any:
        explicit = _first(row, "language_level", "german_level")
        if explicit:
            return explicit
        languages = row.get("languages") or []
        if isinstance(languages, str):
            languages = [languages]
        for entry in languages:
            text = str(entry or "")
            if not any(marker in text.lower() for marker in _GERMAN_MARKERS):
                continue
            try:
                return parse_language_level(text)
            except ValueError:
                # "German" without a level says nothing about proficiency.
                continue
        return None

    @staticmethod
    def _assessments_passed(row: dict[str, Any]) -> Any:
        if row.get("assessments_passed") is not None:
            return row["assessments_passed"]
        assessments = row.get("assessments")
        if isinstance(assessments, list):
            return sum(
                1
                for item in assessments
                if isinstance(item, dict) and (item.get("passed") or item.get("status") == "passed")
            )
        return 0

    @staticmethod
    def _bio_present(row: dict[str, Any]) -> bool:
        if "bio_present" in row:
            return coerce_flag(row["bio_present"])
        bio = row.get("bio")
        return bool(bio and str(bio).strip())

    @staticmethod
    def _payload(data: dict[str, Any]) -> dict[str, Any]:
        payload = data.get("payload", data)
        if not isinstance(payload, dict):
            raise ValueError("Row payload must be a JSON object")
        return payload

    @staticmethod
    def _load(blob: bytes | str | dict[str, Any]) -> dict[str, Any]:
        if isinstance(blob, dict):
            return blob
        if isinstance(blob, bytes):
            blob = blob.decode("utf-8")
        try:
            data = json.loads(blob)
        except json.JSONDecodeError as exc:
            raise ValueError("Invalid backend row payload") from exc
        if not isinstance(data, dict):
            raise ValueError("Backend row must be a JSON object")
        return data


def _first(row: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = row.get(key)
        if value is not None and value != "":
            return value
    return None


def _skill_names(values: Any) -> list[str]:
    """Accept plain strings or ``{"skill": ...}`` objects as stored by the CV analyzer."""
    if not isinstance(values, Iterable) or isinstance(values, (str, bytes, dict)):
        return [values] if isinstance(values, str) else []
    names: list[str] = []
    for value in values:
        if isinstance(value, dict):
            value = value.get("skill") or value.get("name")
        if value:
            names.append(str(value))
    return names
