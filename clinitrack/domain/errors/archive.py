"""Archive/restore errors.

NotFound and AmbiguousMatch are permanent outcomes for a given audit
entry; they must not be presented as retryable. Transient failures are
StoreUnavailableError.
"""

from __future__ import annotations

from clinitrack.domain.exceptions import ClinitrackError


class ArchiveError(ClinitrackError):
    """Base error for archive/restore operations."""

    pass


class ArchiveNotFoundError(ArchiveError):
    """Raised when no archived copy resolves for a restore request.

    Either the audit entry predates the archive feature, or the archived
    copy was already restored or purged.

    Attributes:
        reference: The archive id or audit entry id that was resolved.
    """

    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__(
            f"Archived data for {reference} could not be found; "
            "it may predate the archive feature or was already restored"
        )


class AmbiguousArchiveMatchError(ArchiveError):
    """Raised when display-name fallback matches several archived records.

    No candidate is picked silently; the caller must restore by an
    explicit archive id instead.

    Attributes:
        display_name: The name embedded in the audit entry.
        candidates: Archive ids sharing that display name.
    """

    def __init__(self, display_name: str, candidates: tuple[str, ...]) -> None:
        self.display_name = display_name
        self.candidates = candidates
        super().__init__(
            f"Display name {display_name!r} matches {len(candidates)} archived "
            f"records ({', '.join(candidates)}); restore by archive id"
        )
