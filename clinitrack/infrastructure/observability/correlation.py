"""Correlation ids for request tracing.

Held in a ContextVar so the id set by the HTTP middleware is visible to
every service and log call made while handling that request, across
awaits.
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Generate a new correlation id (UUID4 string)."""
    return str(uuid4())


def get_correlation_id() -> str:
    """Current correlation id, or "" outside a request."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    _correlation_id.set(correlation_id)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding `correlation_id` to every entry.

    An explicitly bound correlation_id is left untouched.
    """
    correlation_id = get_correlation_id()
    if correlation_id and "correlation_id" not in event_dict:
        event_dict["correlation_id"] = correlation_id
    return event_dict
