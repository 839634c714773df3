"""Store availability errors."""

from __future__ import annotations

from clinitrack.domain.exceptions import ClinitrackError


class StoreUnavailableError(ClinitrackError):
    """Raised when an I/O operation against a backing store fails.

    This is a transient condition: the caller may retry. It is kept
    distinct from the not-found errors so operators are never told to
    retry a record that is permanently gone.

    Attributes:
        store: Logical store name (active, archive, audit).
        operation: The operation that failed (get, put, delete, ...).
    """

    def __init__(self, store: str, operation: str, reason: str = "") -> None:
        self.store = store
        self.operation = operation
        self.reason = reason
        message = f"Store '{store}' unavailable during {operation}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
