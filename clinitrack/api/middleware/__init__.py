"""HTTP middleware."""

from clinitrack.api.middleware.logging_middleware import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
