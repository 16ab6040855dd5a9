"""Structured logging for the scoring CLI and pipeline."""

from __future__ import annotations

import logging
from typing import Any

import structlog

from . import __version__


def add_app_version(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Stamp every event with the package version so reports and logs line up."""
    event_dict.setdefault("app_version", __version__)
    return event_dict


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with JSON output."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=log_level, format="%(message)s")

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            add_app_version,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )
