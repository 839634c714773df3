"""Audit log errors."""

from __future__ import annotations

from clinitrack.domain.exceptions import ClinitrackError


class AuditWriteFailureError(ClinitrackError):
    """An audit entry could not be appended.

    Non-fatal by contract: the audit writer catches and logs it, and the
    primary save/delete/restore still succeeds. It never reaches callers
    of the writer.

    Attributes:
        action: The audit action that failed to record.
    """

    def __init__(self, action: str, reason: str = "") -> None:
        self.action = action
        self.reason = reason
        super().__init__(f"Failed to append {action} audit entry: {reason}")
