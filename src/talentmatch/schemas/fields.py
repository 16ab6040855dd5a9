"""Shared field types and lenient coercion helpers for the schemas."""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, Iterable

_LEVEL_PATTERN = re.compile(r"(?<![A-Za-z0-9])([ABC][0-2])(?![0-9])", re.IGNORECASE)
_NATIVE_MARKERS = ("native", "muttersprache", "mother tongue")


class LanguageLevel(str, Enum):
    """CEFR-style German level, ordered from A0 (none) to C1."""

    A0 = "A0"
    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)


_LEVEL_ORDER: tuple[LanguageLevel, ...] = tuple(LanguageLevel)


class PlacementStatus(str, Enum):
    LEARNING = "LEARNING"
    JOB_READY = "JOB_READY"
    PLACED = "PLACED"


class JobStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


def parse_language_level(value: Any) -> LanguageLevel | None:
    """Parse a level code out of free text such as ``"German B2"``.

    ``None`` and blank strings mean "unknown" and return ``None``. C2 and
    native speakers sit at the top of the scale. Text without a level code
    raises ``ValueError``.
    """
    if value is None:
        return None
    if isinstance(value, LanguageLevel):
        return value
    text = str(value).strip()
    if not text:
        return None
    lowered = text.lower()
    if any(marker in lowered for marker in _NATIVE_MARKERS):
        return LanguageLevel.C1
    match = _LEVEL_PATTERN.search(text)
    if match is None:
        raise ValueError(f"Unknown language level: {value!r}")
    code = match.group(1).upper()
    if code == "C2":
        return LanguageLevel.C1
    try:
        return LanguageLevel(code)
    except ValueError as exc:
        # B0 and C0 look like codes but are not on the scale.
        raise ValueError(f"Unknown language level: {value!r}") from exc


def normalize_tokens(values: Any) -> list[str]:
    """Strip, drop blanks and deduplicate case-insensitively keeping first spelling."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    elif not isinstance(values, Iterable):
        return []

    seen: set[str] = set()
    tokens: list[str] = []
    for value in values:
        if value is None:
            continue
        token = str(value).strip()
        key = token.casefold()
        if not token or key in seen:
            continue
        seen.add(key)
        tokens.append(token)
    return tokens


def coerce_non_negative_int(value: Any) -> int:
    number = _coerce_number(value)
    return max(int(number), 0)


def coerce_rating(value: Any, *, upper: float = 5.0) -> float:
    number = _coerce_number(value)
    return min(max(number, 0.0), upper)


def coerce_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y"}
    return bool(value)


def coerce_optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number
