"""Audit log store port.

Append-only: there is deliberately no update or delete operation.
"""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from typing import Protocol

from clinitrack.domain.models.audit_entry import AuditAction, AuditLogEntry


class AuditLogStoreProtocol(Protocol):
    """Storage for immutable audit entries."""

    async def append(
        self,
        actor_id: str,
        actor_name: str,
        action: AuditAction,
        detail: str,
        timestamp: datetime,
        archive_ref: str | None = None,
    ) -> AuditLogEntry:
        """Persist a new entry; the store assigns its id.

        Returns:
            The stored entry.

        Raises:
            StoreUnavailableError: On I/O failure.
        """
        ...

    async def list_entries(
        self,
        actions: Collection[AuditAction] | None = None,
        limit: int | None = None,
    ) -> list[AuditLogEntry]:
        """List entries newest first.

        Args:
            actions: Only entries whose action is in this set (None = all).
            limit: Maximum number of entries (None = unlimited).

        Raises:
            StoreUnavailableError: On I/O failure.
        """
        ...

    async def get_entry(self, entry_id: str) -> AuditLogEntry | None:
        """Fetch a single entry by id.

        Raises:
            StoreUnavailableError: On I/O failure.
        """
        ...
