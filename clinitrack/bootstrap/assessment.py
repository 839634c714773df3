"""Bootstrap wiring for the record, archive and audit services.

Stores are PostgreSQL-backed when DATABASE_URL is set, otherwise
in-memory stubs (data does not persist).
"""

from __future__ import annotations

import os

from structlog import get_logger

from clinitrack.application.ports.audit_log_store import AuditLogStoreProtocol
from clinitrack.application.ports.record_store import RecordStoreProtocol
from clinitrack.application.services.archive_restore_coordinator import (
    ArchiveRestoreCoordinator,
)
from clinitrack.application.services.assessment_record_service import (
    AssessmentRecordService,
)
from clinitrack.application.services.assessment_summary_service import (
    AssessmentSummaryService,
)
from clinitrack.application.services.audit_log_writer import AuditLogWriter
from clinitrack.config.store_config import GovernanceConfig, StoreConfig
from clinitrack.infrastructure.stubs.audit_log_store_stub import AuditLogStoreStub
from clinitrack.infrastructure.stubs.record_store_stub import RecordStoreStub

logger = get_logger()

_store_config: StoreConfig | None = None
_governance_config: GovernanceConfig | None = None
_active_store: RecordStoreProtocol | None = None
_archive_store: RecordStoreProtocol | None = None
_audit_store: AuditLogStoreProtocol | None = None
_audit_writer: AuditLogWriter | None = None
_record_service: AssessmentRecordService | None = None
_archive_coordinator: ArchiveRestoreCoordinator | None = None
_summary_service: AssessmentSummaryService | None = None


def get_store_config() -> StoreConfig:
    global _store_config
    if _store_config is None:
        _store_config = StoreConfig.from_environment()
    return _store_config


def get_governance_config() -> GovernanceConfig:
    global _governance_config
    if _governance_config is None:
        _governance_config = GovernanceConfig.from_environment()
    return _governance_config


def _build_stores() -> None:
    """Create all three stores together so they share one backend."""
    global _active_store, _archive_store, _audit_store

    config = get_store_config()
    if os.environ.get("DATABASE_URL"):
        try:
            from clinitrack.bootstrap.database import get_session_factory
            from clinitrack.infrastructure.adapters.persistence import (
                PostgresAuditLogStore,
                PostgresRecordStore,
            )

            session_factory = get_session_factory()
            _active_store = PostgresRecordStore(
                session_factory, table=config.active_table, name="active"
            )
            _archive_store = PostgresRecordStore(
                session_factory, table=config.archive_table, name="archive"
            )
            _audit_store = PostgresAuditLogStore(session_factory, table=config.audit_table)
            logger.info(
                "assessment_stores_initialized",
                store_type="PostgreSQL",
                active_table=config.active_table,
                archive_table=config.archive_table,
                audit_table=config.audit_table,
            )
            return
        except Exception as e:
            logger.error(
                "postgres_store_init_failed",
                error=str(e),
                message="Falling back to in-memory stubs",
            )
    else:
        logger.warning(
            "assessment_stores_initialized",
            store_type="InMemoryStub",
            message="DATABASE_URL not set - using in-memory stubs (data will not persist)",
        )
    _active_store = RecordStoreStub(name="active")
    _archive_store = RecordStoreStub(name="archive")
    _audit_store = AuditLogStoreStub()


def get_active_store() -> RecordStoreProtocol:
    if _active_store is None:
        _build_stores()
    assert _active_store is not None
    return _active_store


def get_archive_store() -> RecordStoreProtocol:
    if _archive_store is None:
        _build_stores()
    assert _archive_store is not None
    return _archive_store


def get_audit_store() -> AuditLogStoreProtocol:
    if _audit_store is None:
        _build_stores()
    assert _audit_store is not None
    return _audit_store


async def initialize_stores() -> None:
    """Create PostgreSQL tables if needed (no-op for stubs)."""
    for store in (get_active_store(), get_archive_store(), get_audit_store()):
        ensure_schema = getattr(store, "ensure_schema", None)
        if ensure_schema is not None:
            await ensure_schema()


def get_audit_writer() -> AuditLogWriter:
    global _audit_writer
    if _audit_writer is None:
        _audit_writer = AuditLogWriter(
            store=get_audit_store(),
            critical_limit=get_governance_config().critical_log_limit,
        )
    return _audit_writer


def get_record_service() -> AssessmentRecordService:
    global _record_service
    if _record_service is None:
        _record_service = AssessmentRecordService(
            active_store=get_active_store(),
            audit_writer=get_audit_writer(),
        )
    return _record_service


def get_archive_coordinator() -> ArchiveRestoreCoordinator:
    global _archive_coordinator
    if _archive_coordinator is None:
        _archive_coordinator = ArchiveRestoreCoordinator(
            active_store=get_active_store(),
            archive_store=get_archive_store(),
            audit_writer=get_audit_writer(),
        )
    return _archive_coordinator


def get_summary_service() -> AssessmentSummaryService:
    global _summary_service
    if _summary_service is None:
        _summary_service = AssessmentSummaryService(active_store=get_active_store())
    return _summary_service


def reset_assessment_bootstrap() -> None:
    """Reset all singletons (for testing)."""
    global _store_config, _governance_config, _active_store, _archive_store
    global _audit_store, _audit_writer, _record_service, _archive_coordinator
    global _summary_service
    _store_config = None
    _governance_config = None
    _active_store = None
    _archive_store = None
    _audit_store = None
    _audit_writer = None
    _record_service = None
    _archive_coordinator = None
    _summary_service = None
