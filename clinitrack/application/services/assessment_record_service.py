"""Assessment record write path.

Called by the entry forms after every domain section save. Each save
replaces one domain's raw blob, recomputes all five domain statuses and
the global status from the raw blobs, and persists data and derived
cache together in a single write. The stored cache is never read as an
input, so a stale status can never leak into a new one.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import structlog

from clinitrack.application.ports.record_store import RecordStoreProtocol
from clinitrack.application.services.audit_log_writer import AuditLogWriter
from clinitrack.domain.errors.record import RecordNotFoundError, UnknownDomainError
from clinitrack.domain.models.actor import Actor
from clinitrack.domain.models.assessment_record import (
    DOMAIN_STATUSES_KEY,
    STATUS_KEY,
    AssessmentRecord,
    display_name_of,
    short_id,
)
from clinitrack.domain.models.assessment_status import Domain
from clinitrack.domain.models.audit_entry import AuditAction, format_subject_detail
from clinitrack.domain.services.completeness import evaluate_all
from clinitrack.domain.services.status_aggregator import aggregate

log = structlog.get_logger()


def new_record_id() -> str:
    return uuid4().hex


def recompute_statuses(document: dict[str, Any]) -> dict[str, Any]:
    """Rebuild the derived status cache of a document in place.

    Args:
        document: Record document with raw domain blobs.

    Returns:
        The same document, with `domainStatuses` and `status` replaced.
    """
    statuses = evaluate_all(document)
    document[DOMAIN_STATUSES_KEY] = {
        domain.value: status.value for domain, status in statuses.items()
    }
    document[STATUS_KEY] = aggregate(statuses).value
    return document


class AssessmentRecordService:
    """Creates and updates assessment records.

    Usage:
        service = AssessmentRecordService(active_store, audit_writer)
        record = await service.save_domain(None, Domain.PHYSIOTHERAPY, data, actor)
        record = await service.save_domain(record.record_id, Domain.NUTRITION, data, actor)
    """

    def __init__(
        self,
        active_store: RecordStoreProtocol,
        audit_writer: AuditLogWriter,
    ) -> None:
        self._active = active_store
        self._audit = audit_writer
        self._log = log.bind(service="assessment_record_service")

    async def get_record(self, record_id: str) -> AssessmentRecord:
        """Load an active record.

        Raises:
            RecordNotFoundError: If the id is not in the active store.
            StoreUnavailableError: On I/O failure.
        """
        document = await self._active.get(record_id)
        if document is None:
            raise RecordNotFoundError(record_id)
        return AssessmentRecord.from_document(record_id, document)

    async def save_domain(
        self,
        record_id: str | None,
        domain: Domain | str,
        domain_data: Mapping[str, Any],
        actor: Actor,
    ) -> AssessmentRecord:
        """Save one domain's data, creating the record on first save.

        Args:
            record_id: Existing record id, or None to create a record.
            domain: The domain being saved.
            domain_data: The domain's complete raw data blob.
            actor: Who is saving.

        Returns:
            The persisted record with freshly derived statuses.

        Raises:
            UnknownDomainError: If the domain is not registered.
            RecordNotFoundError: If record_id is given but not active.
            StoreUnavailableError: On I/O failure.
        """
        return await self._write(
            record_id, domain, domain_data, actor, action=None, reason=None
        )

    async def correct_domain(
        self,
        record_id: str,
        domain: Domain | str,
        domain_data: Mapping[str, Any],
        actor: Actor,
        reason: str = "",
    ) -> AssessmentRecord:
        """Correct erroneously entered data on an existing record.

        Same write path as save_domain, audited as CORRECTED.

        Raises:
            UnknownDomainError: If the domain is not registered.
            RecordNotFoundError: If the record is not active.
            StoreUnavailableError: On I/O failure.
        """
        return await self._write(
            record_id,
            domain,
            domain_data,
            actor,
            action=AuditAction.CORRECTED,
            reason=reason,
        )

    async def _write(
        self,
        record_id: str | None,
        domain: Domain | str,
        domain_data: Mapping[str, Any],
        actor: Actor,
        action: AuditAction | None,
        reason: str | None,
    ) -> AssessmentRecord:
        parsed = Domain.parse(domain)
        if parsed is None:
            raise UnknownDomainError(str(domain))

        now = datetime.now(timezone.utc)
        if record_id is None:
            record_id = new_record_id()
            document: dict[str, Any] = {
                "id": record_id,
                "createdAt": now.isoformat(),
                "createdBy": actor.actor_id,
            }
            action = AuditAction.CREATED
        else:
            existing = await self._active.get(record_id)
            if existing is None:
                raise RecordNotFoundError(record_id)
            document = existing
            action = action or AuditAction.UPDATED

        document[parsed.blob_key] = copy.deepcopy(dict(domain_data))
        document["updatedAt"] = now.isoformat()
        document["updatedBy"] = actor.actor_id
        recompute_statuses(document)

        await self._active.put(record_id, document)

        self._log.info(
            "record_domain_saved",
            record_id=record_id,
            domain=parsed.value,
            action=action.value,
            domain_status=document[DOMAIN_STATUSES_KEY][parsed.value],
            status=document[STATUS_KEY],
        )

        await self._audit.append(
            actor.actor_id,
            actor.actor_name,
            action,
            _save_detail(action, parsed, record_id, document, reason),
        )
        return AssessmentRecord.from_document(record_id, document)


def _save_detail(
    action: AuditAction,
    domain: Domain,
    record_id: str,
    document: Mapping[str, Any],
    reason: str | None,
) -> str:
    name = display_name_of(document)
    if action is AuditAction.CREATED:
        return format_subject_detail(f"Created {domain.value} for", short_id(record_id), name)
    if action is AuditAction.CORRECTED:
        detail = format_subject_detail(
            f"Corrected {domain.value} for", short_id(record_id), name
        )
        return f"{detail}: {reason}" if reason else detail
    return format_subject_detail(f"Updated {domain.value} for", short_id(record_id), name)
