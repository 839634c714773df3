"""PostgreSQL record store.

One row per record: `id TEXT PRIMARY KEY, document JSONB`. The same
class backs the active and the archive store, pointed at different
tables. Each call commits on its own; there is no transaction spanning
stores.

Driver errors surface as StoreUnavailableError.
"""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from clinitrack.application.ports.record_store import RecordStoreProtocol
from clinitrack.domain.errors.store import StoreUnavailableError
from clinitrack.infrastructure.observability.logging import get_logger_for_service


def _load_document(value: Any) -> dict[str, Any]:
    # asyncpg hands JSONB back as text unless a codec is registered.
    if isinstance(value, (str, bytes)):
        return json.loads(value)
    return dict(value)


class PostgresRecordStore(RecordStoreProtocol):
    """RecordStoreProtocol over a JSONB document table."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        table: str,
        name: str,
    ) -> None:
        """Initialize the store.

        Args:
            session_factory: SQLAlchemy async session factory.
            table: Table name, already validated by StoreConfig.
            name: Logical store name (active, archive).
        """
        self._session_factory = session_factory
        self._table = table
        self._name = name
        self._log = get_logger_for_service("postgres_record_store", component="storage").bind(
            store=name, table=table
        )

    @property
    def name(self) -> str:
        return self._name

    def _unavailable(self, operation: str, exc: Exception) -> StoreUnavailableError:
        self._log.error("record_store_io_failed", operation=operation, error=str(exc))
        return StoreUnavailableError(self._name, operation, str(exc))

    async def ensure_schema(self) -> None:
        """Create the table if it does not exist."""
        try:
            async with self._session_factory() as session:
                await session.execute(
                    text(f"""
                        CREATE TABLE IF NOT EXISTS {self._table} (
                            id TEXT PRIMARY KEY,
                            document JSONB NOT NULL,
                            stored_at TIMESTAMPTZ NOT NULL DEFAULT now()
                        )
                    """)
                )
                await session.commit()
        except (SQLAlchemyError, OSError) as exc:
            raise self._unavailable("ensure_schema", exc) from exc

    async def get(self, record_id: str) -> dict[str, Any] | None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    text(f"SELECT document FROM {self._table} WHERE id = :id"),
                    {"id": record_id},
                )
                row = result.fetchone()
        except (SQLAlchemyError, OSError) as exc:
            raise self._unavailable("get", exc) from exc
        return _load_document(row[0]) if row else None

    async def put(self, record_id: str, document: dict[str, Any]) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(
                    text(f"""
                        INSERT INTO {self._table} (id, document, stored_at)
                        VALUES (:id, CAST(:document AS JSONB), now())
                        ON CONFLICT (id) DO UPDATE
                        SET document = EXCLUDED.document, stored_at = now()
                    """),
                    {"id": record_id, "document": json.dumps(document)},
                )
                await session.commit()
        except (SQLAlchemyError, OSError) as exc:
            raise self._unavailable("put", exc) from exc

    async def delete(self, record_id: str) -> bool:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    text(f"DELETE FROM {self._table} WHERE id = :id"),
                    {"id": record_id},
                )
                await session.commit()
        except (SQLAlchemyError, OSError) as exc:
            raise self._unavailable("delete", exc) from exc
        return bool(result.rowcount)

    async def list_all(self) -> dict[str, dict[str, Any]]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    text(f"SELECT id, document FROM {self._table}")
                )
                rows = result.fetchall()
        except (SQLAlchemyError, OSError) as exc:
            raise self._unavailable("list_all", exc) from exc
        return {row[0]: _load_document(row[1]) for row in rows}
