"""Correlation ids for grouping the log entries of one caller's call.

The id lives in a ContextVar. The caller that drives the service sets it
once per incoming call; LoggingMixin and correlation_id_processor read it
back when log entries are written.
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4

# Empty string means "no correlation id set"
_current_correlation_id: ContextVar[str] = ContextVar(
    "metadata_request_correlation_id", default=""
)


def generate_correlation_id() -> str:
    """Return a fresh random correlation id (UUID4 string)."""
    return str(uuid4())


def get_correlation_id() -> str:
    """Return the id for the current context, or "" when none is set."""
    return _current_correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the id used by every log entry written in the current context."""
    _current_correlation_id.set(correlation_id)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor stamping the current correlation id on an entry.

    Entries written outside any correlated call are left untouched.
    """
    correlation_id = _current_correlation_id.get()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict
