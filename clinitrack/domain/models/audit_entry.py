"""Audit log entry domain model.

Entries are immutable and append-only: they are never edited or
deleted. They are historical evidence used for discovery and display;
they never decide whether a record currently exists.

Detail strings follow the convention used by existing entries:

    "<Verb> individual <shortId> (<FullName>) [docId=<archiveId>]"

The bracketed token was how older entries referenced the archived
document. New entries carry the reference in `archive_ref`; the token
is still written and still parsed so both generations resolve.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Final

DOC_ID_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(r"\[docId=([^\]\s]+)\]")

_SUBJECT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"individual\s+(?P<short_id>\S+)\s+\((?P<name>.*)\)\s*(?:\[docId=[^\]]*\]\s*)?$"
)


class AuditAction(str, Enum):
    """Mutating actions recorded in the audit log."""

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"
    RESTORED = "RESTORED"
    CORRECTED = "CORRECTED"


# Actions shown in the governance "critical" feed.
CRITICAL_ACTIONS: Final[frozenset[AuditAction]] = frozenset(
    {AuditAction.DELETED, AuditAction.RESTORED, AuditAction.CORRECTED}
)


def format_subject_detail(
    verb: str,
    record_short_id: str,
    display_name: str,
    archive_id: str | None = None,
) -> str:
    """Build a detail string in the established audit convention.

    Args:
        verb: Leading verb, e.g. "Deleted".
        record_short_id: Short form of the record id.
        display_name: The individual's display name.
        archive_id: Archive document id; adds the `[docId=...]` token.

    Returns:
        The detail text.
    """
    detail = f"{verb} individual {record_short_id} ({display_name})"
    if archive_id:
        detail = f"{detail} [docId={archive_id}]"
    return detail


def parse_doc_id_token(detail: str) -> str | None:
    """Extract the archive id from a `[docId=...]` token, if present."""
    match = DOC_ID_TOKEN_PATTERN.search(detail or "")
    return match.group(1) if match else None


def parse_subject_name(detail: str) -> str | None:
    """Extract the display name embedded in a detail string.

    Returns:
        The name inside the parentheses, or None if the detail does not
        follow the "individual <shortId> (<Name>)" convention.
    """
    match = _SUBJECT_PATTERN.search((detail or "").strip())
    if not match:
        return None
    name = match.group("name").strip()
    return name or None


def parse_subject_short_id(detail: str) -> str | None:
    """Extract the record short id from a detail string, if present."""
    match = _SUBJECT_PATTERN.search((detail or "").strip())
    return match.group("short_id") if match else None


@dataclass(frozen=True, eq=True)
class AuditLogEntry:
    """A single recorded action.

    Attributes:
        entry_id: Store-assigned identifier.
        actor_id: Id of the acting user.
        actor_name: Display name or email of the acting user.
        action: What was done.
        detail: Free-text description (see module docstring).
        timestamp: When the entry was written (UTC).
        archive_ref: Weak back-reference to an archived record id.
            Lookup only; the entry never owns the archived record.
    """

    entry_id: str
    actor_id: str
    actor_name: str
    action: AuditAction
    detail: str
    timestamp: datetime
    archive_ref: str | None = None

    @property
    def resolved_archive_ref(self) -> str | None:
        """Archive id from the explicit field, else from the legacy token."""
        return self.archive_ref or parse_doc_id_token(self.detail)

    @property
    def subject_name(self) -> str | None:
        """Display name embedded in the detail text."""
        return parse_subject_name(self.detail)

    @property
    def subject_short_id(self) -> str | None:
        return parse_subject_short_id(self.detail)
