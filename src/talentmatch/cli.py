"""Typer CLI entrypoint for batch scoring over exported records."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from .container import create_container
from .logging import configure_logging
from .pipeline import AuditLogger
from .schemas.config import load_config

app = typer.Typer(help="Talent match and readiness scoring CLI.")


def _load_settings(config: Optional[Path]) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise typer.BadParameter("Config file must be a YAML object", param_name="config")
    try:
        return load_config(loaded).to_settings()
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_name="config") from exc


@app.command()
def match(
    candidates: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Talent rows JSONL path."),
    jobs: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Job rows JSON path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    top_n: int = typer.Option(10, min=1, help="Matches kept per job."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Rank talents for every open job."""
    settings = _load_settings(config)
    configure_logging(log_level)

    container = create_container(settings=settings)
    pipeline = container.pipeline()
    audit_logger = AuditLogger(audit_log) if audit_log else None

    results = pipeline.run_matching(
        candidates_path=candidates,
        jobs_path=jobs,
        output_path=output,
        top_n=top_n,
        audit_logger=audit_logger,
    )
    typer.echo(f"Ranked talents for {len(results)} jobs. Results saved to {output}.")


@app.command()
def readiness(
    candidates: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Talent rows JSONL path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Score job readiness and curriculum gaps for every talent."""
    settings = _load_settings(config)
    configure_logging(log_level)

    container = create_container(settings=settings)
    pipeline = container.pipeline()
    audit_logger = AuditLogger(audit_log) if audit_log else None

    results = pipeline.run_readiness(
        candidates_path=candidates,
        output_path=output,
        audit_logger=audit_logger,
    )
    typer.echo(f"Scored {len(results)} talents. Results saved to {output}.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
