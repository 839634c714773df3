"""Domain errors for Clinitrack.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from ClinitrackError.
"""

from clinitrack.domain.errors.archive import (
    AmbiguousArchiveMatchError,
    ArchiveError,
    ArchiveNotFoundError,
)
from clinitrack.domain.errors.audit import AuditWriteFailureError
from clinitrack.domain.errors.record import RecordNotFoundError, UnknownDomainError
from clinitrack.domain.errors.store import StoreUnavailableError

__all__: list[str] = [
    "AmbiguousArchiveMatchError",
    "ArchiveError",
    "ArchiveNotFoundError",
    "AuditWriteFailureError",
    "RecordNotFoundError",
    "StoreUnavailableError",
    "UnknownDomainError",
]
