"""Audit log writer.

Cross-cutting recorder called by every write path. Appends are
fire-and-forget relative to the action they describe: a failed append
is logged for operators and never propagated, so a save, delete or
restore that already happened is never reported as failed.

Reads (activity feed, governance views) are ordinary queries and do
propagate StoreUnavailableError.
"""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime, timezone
from typing import Final

import structlog

from clinitrack.application.ports.audit_log_store import AuditLogStoreProtocol
from clinitrack.domain.errors.audit import AuditWriteFailureError
from clinitrack.domain.models.audit_entry import (
    CRITICAL_ACTIONS,
    AuditAction,
    AuditLogEntry,
)

DEFAULT_CRITICAL_LIMIT: Final[int] = 10

log = structlog.get_logger()


class AuditLogWriter:
    """Append-only audit trail for mutating actions.

    Usage:
        writer = AuditLogWriter(store=audit_store)
        await writer.append("uid-1", "admin@example.org", AuditAction.DELETED,
                            "Deleted individual abc123 (Asha K) [docId=abc123...]",
                            archive_ref="abc123...")
        recent = await writer.list_critical()
    """

    def __init__(
        self,
        store: AuditLogStoreProtocol,
        critical_limit: int = DEFAULT_CRITICAL_LIMIT,
    ) -> None:
        """Initialize the writer.

        Args:
            store: Audit log store port.
            critical_limit: Default size of the critical-actions feed.
        """
        self._store = store
        self._critical_limit = critical_limit
        self._log = log.bind(service="audit_log_writer")

    async def append(
        self,
        actor_id: str,
        actor_name: str,
        action: AuditAction | str,
        detail: str,
        archive_ref: str | None = None,
    ) -> AuditLogEntry | None:
        """Record an action. Never raises.

        Args:
            actor_id: Id of the acting user.
            actor_name: Display name or email of the acting user.
            action: Action type; strings are upper-cased.
            detail: Free-text description.
            archive_ref: Archived record id this entry refers to, if any.

        Returns:
            The stored entry, or None if the append failed.
        """
        try:
            entry = await self._write(actor_id, actor_name, action, detail, archive_ref)
        except AuditWriteFailureError as failure:
            # Observability degrades; the primary action stands.
            self._log.error(
                "audit_write_failed",
                action=failure.action,
                actor_id=actor_id,
                archive_ref=archive_ref,
                reason=failure.reason,
            )
            return None

        self._log.debug(
            "audit_entry_appended",
            entry_id=entry.entry_id,
            action=entry.action.value,
            actor_id=actor_id,
        )
        return entry

    async def _write(
        self,
        actor_id: str,
        actor_name: str,
        action: AuditAction | str,
        detail: str,
        archive_ref: str | None,
    ) -> AuditLogEntry:
        action_name = action.value if isinstance(action, AuditAction) else str(action).upper()
        try:
            return await self._store.append(
                actor_id=actor_id,
                actor_name=actor_name,
                action=AuditAction(action_name),
                detail=detail,
                timestamp=datetime.now(timezone.utc),
                archive_ref=archive_ref,
            )
        except Exception as exc:
            raise AuditWriteFailureError(action_name, str(exc)) from exc

    async def list_entries(
        self,
        actions: Collection[AuditAction] | None = None,
        limit: int | None = None,
    ) -> list[AuditLogEntry]:
        """List entries newest first, optionally filtered by action.

        Raises:
            StoreUnavailableError: If the audit store cannot be read.
        """
        return await self._store.list_entries(actions=actions, limit=limit)

    async def list_critical(self, limit: int | None = None) -> list[AuditLogEntry]:
        """Latest DELETED / RESTORED / CORRECTED entries, newest first."""
        return await self._store.list_entries(
            actions=CRITICAL_ACTIONS,
            limit=limit if limit is not None else self._critical_limit,
        )

    async def get_entry(self, entry_id: str) -> AuditLogEntry | None:
        return await self._store.get_entry(entry_id)
