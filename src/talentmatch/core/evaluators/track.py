"""Specialization track fit evaluator."""

from __future__ import annotations

from typing import Any

from ..attributes import MatchAttributes


class TrackFitEvaluator:
    """Tracks fit when equal or when either side leaves the track open."""

    method = "track"

    def evaluate(self, attributes: MatchAttributes) -> dict[str, Any]:
        candidate_track = attributes.candidate_track
        job_track = attributes.job_track
        open_ended = candidate_track is None or job_track is None
        fit = 1.0 if open_ended or candidate_track == job_track else 0.0

        return {
            "method": self.method,
            "scores": {"track": fit},
            "metadata": {
                "candidate_track": candidate_track,
                "job_track": job_track,
            },
        }
