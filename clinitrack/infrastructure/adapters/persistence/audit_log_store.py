"""PostgreSQL audit log store.

Append-only table; this adapter issues INSERT and SELECT only.
"""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from clinitrack.application.ports.audit_log_store import AuditLogStoreProtocol
from clinitrack.domain.errors.store import StoreUnavailableError
from clinitrack.domain.models.audit_entry import AuditAction, AuditLogEntry
from clinitrack.infrastructure.observability.logging import get_logger_for_service

_COLUMNS = "id, actor_id, actor_name, action, detail, archive_ref, created_at"


def _row_to_entry(row: Any) -> AuditLogEntry:
    return AuditLogEntry(
        entry_id=str(row[0]),
        actor_id=row[1],
        actor_name=row[2],
        action=AuditAction(row[3]),
        detail=row[4],
        archive_ref=row[5],
        timestamp=row[6],
    )


class PostgresAuditLogStore(AuditLogStoreProtocol):
    """AuditLogStoreProtocol over an append-only table."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        table: str,
    ) -> None:
        self._session_factory = session_factory
        self._table = table
        self._log = get_logger_for_service("postgres_audit_log_store", component="storage").bind(
            table=table
        )

    def _unavailable(self, operation: str, exc: Exception) -> StoreUnavailableError:
        self._log.error("audit_store_io_failed", operation=operation, error=str(exc))
        return StoreUnavailableError("audit", operation, str(exc))

    async def ensure_schema(self) -> None:
        """Create the table and its timestamp index if missing."""
        try:
            async with self._session_factory() as session:
                await session.execute(
                    text(f"""
                        CREATE TABLE IF NOT EXISTS {self._table} (
                            id TEXT PRIMARY KEY,
                            actor_id TEXT NOT NULL,
                            actor_name TEXT NOT NULL,
                            action TEXT NOT NULL,
                            detail TEXT NOT NULL,
                            archive_ref TEXT NULL,
                            created_at TIMESTAMPTZ NOT NULL
                        )
                    """)
                )
                await session.execute(
                    text(
                        f"CREATE INDEX IF NOT EXISTS {self._table}_created_at_idx "
                        f"ON {self._table} (created_at DESC)"
                    )
                )
                await session.commit()
        except (SQLAlchemyError, OSError) as exc:
            raise self._unavailable("ensure_schema", exc) from exc

    async def append(
        self,
        actor_id: str,
        actor_name: str,
        action: AuditAction,
        detail: str,
        timestamp: datetime,
        archive_ref: str | None = None,
    ) -> AuditLogEntry:
        entry = AuditLogEntry(
            entry_id=str(uuid4()),
            actor_id=actor_id,
            actor_name=actor_name,
            action=action,
            detail=detail,
            timestamp=timestamp,
            archive_ref=archive_ref,
        )
        try:
            async with self._session_factory() as session:
                await session.execute(
                    text(f"""
                        INSERT INTO {self._table} ({_COLUMNS})
                        VALUES (:id, :actor_id, :actor_name, :action, :detail,
                                :archive_ref, :created_at)
                    """),
                    {
                        "id": entry.entry_id,
                        "actor_id": actor_id,
                        "actor_name": actor_name,
                        "action": action.value,
                        "detail": detail,
                        "archive_ref": archive_ref,
                        "created_at": timestamp,
                    },
                )
                await session.commit()
        except (SQLAlchemyError, OSError) as exc:
            raise self._unavailable("append", exc) from exc
        return entry

    async def list_entries(
        self,
        actions: Collection[AuditAction] | None = None,
        limit: int | None = None,
    ) -> list[AuditLogEntry]:
        clauses = []
        params: dict[str, Any] = {"limit": limit}
        if actions is not None:
            clauses.append("WHERE action = ANY(:actions)")
            params["actions"] = [action.value for action in actions]
        query = (
            f"SELECT {_COLUMNS} FROM {self._table} {' '.join(clauses)} "
            "ORDER BY created_at DESC LIMIT :limit"
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(text(query), params)
                rows = result.fetchall()
        except (SQLAlchemyError, OSError) as exc:
            raise self._unavailable("list_entries", exc) from exc
        return [_row_to_entry(row) for row in rows]

    async def get_entry(self, entry_id: str) -> AuditLogEntry | None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    text(f"SELECT {_COLUMNS} FROM {self._table} WHERE id = :id"),
                    {"id": entry_id},
                )
                row = result.fetchone()
        except (SQLAlchemyError, OSError) as exc:
            raise self._unavailable("get_entry", exc) from exc
        return _row_to_entry(row) if row else None
