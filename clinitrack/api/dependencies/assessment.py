"""Service providers for the records and governance routes.

Thin wrappers over the bootstrap singletons so tests can override them
with `app.dependency_overrides`.
"""

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
from clinitrack.bootstrap.assessment import (
    get_archive_coordinator,
    get_audit_writer,
    get_governance_config,
    get_record_service,
    get_summary_service,
)
from clinitrack.config import GovernanceConfig


def get_record_service_dependency() -> AssessmentRecordService:
    return get_record_service()


def get_summary_service_dependency() -> AssessmentSummaryService:
    return get_summary_service()


def get_archive_coordinator_dependency() -> ArchiveRestoreCoordinator:
    return get_archive_coordinator()


def get_audit_writer_dependency() -> AuditLogWriter:
    return get_audit_writer()


def get_governance_config_dependency() -> GovernanceConfig:
    return get_governance_config()
