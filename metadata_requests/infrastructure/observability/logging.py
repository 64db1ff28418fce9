"""structlog configuration for metadata request services.

Two output modes are supported:
- production: one JSON object per line, for log shipping
- anything else: coloured key=value console output for local runs

A production entry looks like:
    {"event": "vote_recorded", "level": "info", "timestamp": "...",
     "service": "MetadataRequestService", "operation": "vote",
     "request_id": 7, "correlation_id": "..."}

The minimum level is read from LOG_LEVEL (default INFO).
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from metadata_requests.infrastructure.observability.correlation import (
    correlation_id_processor,
)

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    """Map LOG_LEVEL to a logging level, falling back to INFO."""
    name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_structlog(environment: str = "production") -> None:
    """Install the processor chain and renderer for ``environment``.

    Call once at process start, before services are built.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: Processor
    if environment == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    processors.append(renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
