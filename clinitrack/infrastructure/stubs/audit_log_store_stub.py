"""Audit log store stub.

In-memory, append-only implementation of AuditLogStoreProtocol.
"""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from uuid import uuid4

from clinitrack.application.ports.audit_log_store import AuditLogStoreProtocol
from clinitrack.domain.errors.store import StoreUnavailableError
from clinitrack.domain.models.audit_entry import AuditAction, AuditLogEntry


class AuditLogStoreStub(AuditLogStoreProtocol):
    """Stub implementation of AuditLogStoreProtocol.

    Entries are kept in insertion order; listing sorts newest first,
    with insertion order breaking timestamp ties.

    Attributes:
        fail_appends: When True, append raises StoreUnavailableError.
        fail_reads: When True, list/get raise StoreUnavailableError.
    """

    def __init__(self) -> None:
        self._entries: list[AuditLogEntry] = []
        self.fail_appends = False
        self.fail_reads = False

    @property
    def entries(self) -> list[AuditLogEntry]:
        """All entries in insertion order."""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self.fail_appends = False
        self.fail_reads = False

    def add_entry(self, entry: AuditLogEntry) -> None:
        """Seed an entry directly, e.g. one written before archive_ref existed."""
        self._entries.append(entry)

    async def append(
        self,
        actor_id: str,
        actor_name: str,
        action: AuditAction,
        detail: str,
        timestamp: datetime,
        archive_ref: str | None = None,
    ) -> AuditLogEntry:
        if self.fail_appends:
            raise StoreUnavailableError("audit", "append", "simulated outage")
        entry = AuditLogEntry(
            entry_id=str(uuid4()),
            actor_id=actor_id,
            actor_name=actor_name,
            action=action,
            detail=detail,
            timestamp=timestamp,
            archive_ref=archive_ref,
        )
        self._entries.append(entry)
        return entry

    async def list_entries(
        self,
        actions: Collection[AuditAction] | None = None,
        limit: int | None = None,
    ) -> list[AuditLogEntry]:
        if self.fail_reads:
            raise StoreUnavailableError("audit", "list_entries", "simulated outage")
        indexed = [
            (index, entry)
            for index, entry in enumerate(self._entries)
            if actions is None or entry.action in actions
        ]
        indexed.sort(key=lambda pair: (pair[1].timestamp, pair[0]), reverse=True)
        result = [entry for _, entry in indexed]
        return result[:limit] if limit is not None else result

    async def get_entry(self, entry_id: str) -> AuditLogEntry | None:
        if self.fail_reads:
            raise StoreUnavailableError("audit", "get_entry", "simulated outage")
        for entry in self._entries:
            if entry.entry_id == entry_id:
                return entry
        return None
