"""Match and readiness scoring for the talent portal."""

from __future__ import annotations

__version__ = "0.1.0"

from .core import score_match, score_readiness  # noqa: E402

__all__ = ["__version__", "score_match", "score_readiness"]
