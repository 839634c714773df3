"""PostgreSQL persistence adapters (SQLAlchemy async + asyncpg)."""

from clinitrack.infrastructure.adapters.persistence.audit_log_store import (
    PostgresAuditLogStore,
)
from clinitrack.infrastructure.adapters.persistence.record_store import (
    PostgresRecordStore,
)

__all__ = ["PostgresAuditLogStore", "PostgresRecordStore"]
