"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

import os

from metadata_requests.infrastructure.observability import (
    configure_structlog as _configure_structlog,
)

APP_ENVIRONMENT_ENV = "APP_ENVIRONMENT"


def configure_structlog(environment: str | None = None) -> None:
    """Configure structlog for the given environment.

    Falls back to APP_ENVIRONMENT, then to "production".
    """
    _configure_structlog(
        environment=environment or os.environ.get(APP_ENVIRONMENT_ENV, "production")
    )


__all__ = ["configure_structlog"]
