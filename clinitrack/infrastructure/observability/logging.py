"""Structured logging configuration with structlog.

Production renders one JSON object per line; development renders
colored console output. Both carry an ISO timestamp, the level and the
request correlation id.

Usage:
    from clinitrack.infrastructure.observability import configure_structlog

    configure_structlog(environment="production")

    import structlog
    log = structlog.get_logger()
    log.info("record_archived", record_id="...")
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from clinitrack.infrastructure.observability.correlation import correlation_id_processor

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_structlog(environment: str = "production") -> None:
    """Configure structlog once at application startup.

    Args:
        environment: "production" for JSON output, anything else for
            console output.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if environment == "production":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger_for_service(
    service_name: str, component: str = "assessment"
) -> structlog.BoundLogger:
    """Logger with service and component pre-bound.

    Args:
        service_name: Service name, typically snake_case of the class.
        component: Component family (assessment, governance, storage).
    """
    return structlog.get_logger().bind(service=service_name, component=component)
