"""Batch matching pipeline over exported backend records."""

from __future__ import annotations

import json
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, List

import pendulum
import structlog

from . import __version__
from .adapters import MvpRowAdapter, RecordAdapter
from .core import ReadinessScorer, SkillGapAnalyzer
from .presentation import PresentationAdapter
from .schemas import CandidateProfile, JobRequirement, JobStatus


class AdapterRegistry:
    """Registry mapping providers to record adapters."""

    def __init__(self, adapters: Iterable[RecordAdapter]):
        self._adapters = {adapter.provider: adapter for adapter in adapters}

    def get(self, provider: str) -> RecordAdapter:
        try:
            return self._adapters[provider]
        except KeyError as exc:
            raise KeyError(f"Unsupported provider: {provider!r}") from exc

    def providers(self) -> List[str]:
        return list(self._adapters.keys())


class CandidateLoadError(ValueError):
    """Raised when candidate loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list[CandidateProfile]):
        super().__init__("Candidate loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Candidate loading failed: {self.errors}"


class CandidateLoader:
    """Load candidate profiles from JSON lines through adapters."""

    def __init__(self, registry: AdapterRegistry, *, default_provider: str = "mvp"):
        self._registry = registry
        self._default_provider = default_provider

    def load(self, path: Path) -> list[CandidateProfile]:
        candidates: list[CandidateProfile] = []
        errors: list[str] = []
        with path.open("r", encoding="utf-8") as handle:
            for idx, line in enumerate(handle, start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    record = json.loads(raw)
                except json.JSONDecodeError as exc:
                    errors.append(f"line {idx}: invalid JSON ({exc})")
                    continue
                if not isinstance(record, dict):
                    errors.append(f"line {idx}: record must be a JSON object")
                    continue
                provider = record.get("provider") or self._default_provider
                try:
                    adapter = self._registry.get(provider)
                except KeyError:
                    errors.append(f"line {idx}: unsupported provider '{provider}'")
                    continue
                try:
                    candidate_dict = adapter.parse_candidate(record)
                    candidate = CandidateProfile.model_validate(candidate_dict)
                except (ValueError, TypeError) as exc:
                    errors.append(f"line {idx}: {exc}")
                    continue
                candidates.append(candidate)
        if errors:
            raise CandidateLoadError(errors, candidates)
        return candidates


class JobLoader:
    """Load job requirement documents (a JSON object or a list of them)."""

    def __init__(self, registry: AdapterRegistry, *, default_provider: str = "mvp"):
        self._registry = registry
        self._default_provider = default_provider

    def load(self, path: Path) -> list[JobRequirement]:
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid job JSON: {exc}") from exc
        records = data if isinstance(data, list) else [data]
        jobs: list[JobRequirement] = []
        for record in records:
            if not isinstance(record, dict):
                raise ValueError("Job entries must be JSON objects")
            provider = record.get("provider") or self._default_provider
            try:
                adapter = self._registry.get(provider)
            except KeyError as exc:
                raise ValueError(f"Unsupported job provider: {provider!r}") from exc
            jobs.append(JobRequirement.model_validate(adapter.parse_job(record)))
        return jobs


class OutputWriter:
    """Persist scoring reports."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, default=_json_default),
            encoding="utf-8",
        )


class MatchingPipeline:
    """End-to-end matching and readiness reports."""

    def __init__(
        self,
        *,
        presenter: PresentationAdapter,
        readiness: ReadinessScorer,
        skill_gap: SkillGapAnalyzer,
        registry: AdapterRegistry,
        candidate_loader: CandidateLoader | None = None,
        job_loader: JobLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._presenter = presenter
        self._readiness = readiness
        self._skill_gap = skill_gap
        self._registry = registry
        self._candidates = candidate_loader or CandidateLoader(registry)
        self._jobs = job_loader or JobLoader(registry)
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def run_matching(
        self,
        *,
        candidates_path: Path,
        jobs_path: Path,
        output_path: Path,
        top_n: int = 10,
        audit_logger: "AuditLogger | None" = None,
    ) -> list[dict]:
        jobs = self._jobs.load(jobs_path)
        candidates, load_errors = self._load_candidates(candidates_path)

        results: list[dict] = []
        for job in jobs:
            if job.status is not JobStatus.OPEN:
                self._logger.info("pipeline.job_skipped", job_id=job.job_id, status=job.status.value)
                continue

            ranked = self._presenter.rank_talents_for_job(candidates, job, top_n)
            matches = [
                {
                    "candidate_id": item.candidate_id,
                    "tier": self._presenter.tier(item.result.score).value,
                    **asdict(item.result),
                }
                for item in ranked
            ]
            results.append({"job_id": job.job_id, "title": job.title, "matches": matches})

            if audit_logger:
                for item in ranked:
                    audit_logger.append(
                        {
                            "event": "match.scored",
                            "candidate_id": item.candidate_id,
                            "job_id": item.job_id,
                            "score": item.result.score,
                            "breakdown": item.result.breakdown,
                        }
                    )

            self._logger.info(
                "pipeline.job_ranked",
                job_id=job.job_id,
                candidate_count=len(candidates),
                returned=len(matches),
                top_score=matches[0]["score"] if matches else None,
            )

        self._writer.write(
            output_path,
            {
                "metadata": self._metadata(
                    job_count=len(jobs),
                    candidate_count=len(candidates),
                    errors=load_errors,
                ),
                "results": results,
            },
        )
        return results

    def run_readiness(
        self,
        *,
        candidates_path: Path,
        output_path: Path,
        audit_logger: "AuditLogger | None" = None,
    ) -> list[dict]:
        candidates, load_errors = self._load_candidates(candidates_path)

        results: list[dict] = []
        for candidate in candidates:
            readiness = self._readiness.score(candidate)
            gap = self._skill_gap.analyze(candidate)
            results.append(
                {
                    "candidate_id": candidate.candidate_id,
                    "readiness": asdict(readiness),
                    "skill_gap": asdict(gap),
                }
            )
            if audit_logger:
                audit_logger.append(
                    {
                        "event": "readiness.scored",
                        "candidate_id": candidate.candidate_id,
                        "score": readiness.score,
                        "status": readiness.status_label.value,
                    }
                )

        self._logger.info(
            "pipeline.readiness_scored",
            candidate_count=len(candidates),
            job_ready=sum(1 for item in results if item["readiness"]["status_label"] == "JOB_READY"),
        )
        self._writer.write(
            output_path,
            {
                "metadata": self._metadata(candidate_count=len(candidates), errors=load_errors),
                "results": results,
            },
        )
        return json.loads(json.dumps(results, default=_json_default))

    def _load_candidates(self, path: Path) -> tuple[list[CandidateProfile], list[str]]:
        try:
            return self._candidates.load(path), []
        except CandidateLoadError as exc:
            self._logger.warning("candidates.partial_load", errors=exc.errors)
            return exc.partial, list(exc.errors)

    @staticmethod
    def _metadata(**fields: Any) -> dict[str, Any]:
        return {
            **fields,
            "timestamp": pendulum.now("UTC").to_iso8601_string(),
            "app_version": __version__,
        }


def default_registry() -> AdapterRegistry:
    """Return the default adapter registry."""
    return AdapterRegistry(adapters=[MvpRowAdapter()])


def _json_default(value):  # type: ignore[override]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, pendulum.DateTime):
        return value.to_iso8601_string()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False, default=_json_default))
            handle.write("\n")
