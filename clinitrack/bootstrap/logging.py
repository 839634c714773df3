"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

import os

from clinitrack.infrastructure.observability import configure_structlog as _configure_structlog

ENVIRONMENT_ENV = "ENVIRONMENT"


def configure_structlog(environment: str | None = None) -> None:
    """Configure structlog; defaults to $ENVIRONMENT, else production."""
    _configure_structlog(environment=environment or os.environ.get(ENVIRONMENT_ENV, "production"))


__all__ = ["configure_structlog"]
