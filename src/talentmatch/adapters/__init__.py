"""Adapters from backend record shapes to scoring value types."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .mvp import MvpRowAdapter


@runtime_checkable
class RecordAdapter(Protocol):
    """Backend-specific record adapter contract.

    Implementations transform provider-native rows into dictionaries that
    validate as ``CandidateProfile`` or ``JobRequirement``.
    """

    provider: str

    def can_handle(self, blob: bytes | str | dict[str, Any], metadata: dict) -> bool:
        """Return True when the adapter can parse the given record."""

    def parse_candidate(self, blob: bytes | str | dict[str, Any]) -> dict:
        """Parse a talent record into a candidate profile dictionary."""

    def parse_job(self, blob: bytes | str | dict[str, Any]) -> dict:
        """Parse a job record into a job requirement dictionary."""


__all__ = ["RecordAdapter", "MvpRowAdapter"]
