"""ArchiveRestoreCoordinator: soft-delete and restore of assessment records.

Moves whole record documents between the active store and the archive
store and records each move in the audit log.

Authority rules:
- The archive store alone decides whether something is restorable.
- The audit log is a discovery aid: DELETED entries point at archive
  copies, by explicit reference or (for old entries) by display name.
- Audit appends are fire-and-forget; a move never fails because of one.

Each move runs as three idempotent steps (see ArchiveOperation). There
is no transaction spanning them and no compare-and-swap: two concurrent
restores of the same id both succeed, the later write winning. That is
accepted for a low-concurrency administrative workflow.

Usage:
    coordinator = ArchiveRestoreCoordinator(active, archive, audit_writer)
    operation = await coordinator.delete(record_id, actor)
    restorable = await coordinator.list_restorable()
    await coordinator.restore(restorable[0].archive_id, actor)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import structlog

from clinitrack.application.ports.record_store import RecordStoreProtocol
from clinitrack.application.services.audit_log_writer import AuditLogWriter
from clinitrack.domain.errors.archive import (
    AmbiguousArchiveMatchError,
    ArchiveNotFoundError,
)
from clinitrack.domain.errors.record import RecordNotFoundError
from clinitrack.domain.models.actor import Actor
from clinitrack.domain.models.archive_operation import (
    ArchiveOperation,
    ArchiveStep,
    OperationKind,
    RecordLocation,
    RestorableEntry,
)
from clinitrack.domain.models.assessment_record import display_name_of, short_id
from clinitrack.domain.models.audit_entry import (
    AuditAction,
    AuditLogEntry,
    format_subject_detail,
)

log = structlog.get_logger()

RESOLVED_BY_REFERENCE = "reference"
RESOLVED_BY_NAME = "name"


@dataclass(frozen=True)
class _Resolution:
    archive_id: str | None
    resolved_by: str
    display_name: str
    candidates: tuple[str, ...] = ()


def _resolve(
    entry: AuditLogEntry, archived_names: Mapping[str, str]
) -> _Resolution | None:
    """Resolve a DELETED entry against a snapshot of the archive.

    Order: explicit reference (field, then `[docId=...]` token), else an
    exact display-name match. A reference that is no longer archived does
    not fall back to the name. Several name matches are narrowed to the
    archive ids starting with the entry's short id; the match stays
    ambiguous unless exactly one survives.

    Returns:
        A resolution (possibly ambiguous), or None when nothing matches.
    """
    reference = entry.resolved_archive_ref
    if reference:
        if reference in archived_names:
            return _Resolution(reference, RESOLVED_BY_REFERENCE, archived_names[reference])
        return None

    name = entry.subject_name
    if not name:
        return None
    candidates = tuple(
        sorted(archive_id for archive_id, archived in archived_names.items() if archived == name)
    )
    if not candidates:
        return None
    if len(candidates) > 1:
        candidates = _narrow_by_short_id(candidates, entry.subject_short_id)
    if len(candidates) > 1:
        return _Resolution(None, RESOLVED_BY_NAME, name, candidates)
    return _Resolution(candidates[0], RESOLVED_BY_NAME, name, candidates)


def _narrow_by_short_id(
    candidates: tuple[str, ...], record_short_id: str | None
) -> tuple[str, ...]:
    if not record_short_id:
        return candidates
    narrowed = tuple(c for c in candidates if c.startswith(record_short_id))
    # No survivor: keep every candidate rather than guess.
    return narrowed or candidates


class ArchiveRestoreCoordinator:
    """Coordinates record moves between the active and archive stores.

    Delete: active -> archive, DELETED entry with the archive reference.
    Restore: archive -> active, RESTORED entry.
    """

    def __init__(
        self,
        active_store: RecordStoreProtocol,
        archive_store: RecordStoreProtocol,
        audit_writer: AuditLogWriter,
    ) -> None:
        """Initialize the coordinator.

        Args:
            active_store: Store of live records.
            archive_store: Store of soft-deleted copies, same ids.
            audit_writer: Audit trail (fire-and-forget appends).
        """
        self._active = active_store
        self._archive = archive_store
        self._audit = audit_writer
        self._log = log.bind(service="archive_restore_coordinator")

    async def locate(self, record_id: str) -> RecordLocation:
        """Report which store(s) hold a record id.

        BOTH means a move was interrupted after its copy step; running
        the same operation again completes it.

        Raises:
            StoreUnavailableError: On I/O failure.
        """
        in_active = await self._active.get(record_id) is not None
        in_archive = await self._archive.get(record_id) is not None
        if in_active and in_archive:
            return RecordLocation.BOTH
        if in_active:
            return RecordLocation.ACTIVE
        if in_archive:
            return RecordLocation.ARCHIVED
        return RecordLocation.ABSENT

    async def delete(self, record_id: str, actor: Actor) -> ArchiveOperation:
        """Soft-delete a record: archive it, remove it, log it.

        Re-running after a crash is safe: the archive write overwrites.

        Args:
            record_id: Active record to delete.
            actor: Who is deleting.

        Returns:
            The completed operation (archive_id is the record id).

        Raises:
            RecordNotFoundError: If the record is not in the active store.
            StoreUnavailableError: If the active or archive store fails.
        """
        document = await self._active.get(record_id)
        if document is None:
            raise RecordNotFoundError(record_id)

        operation = ArchiveOperation(
            kind=OperationKind.DELETE,
            record_id=record_id,
            actor_id=actor.actor_id,
            started_at=datetime.now(timezone.utc),
        )
        detail = format_subject_detail(
            "Deleted", short_id(record_id), display_name_of(document), archive_id=record_id
        )
        return await self._move(
            operation, document, self._archive, self._active, AuditAction.DELETED, detail, actor
        )

    async def restore(
        self, target: AuditLogEntry | str, actor: Actor
    ) -> ArchiveOperation:
        """Restore an archived record to the active store.

        Args:
            target: A DELETED audit entry (resolved via reference, then
                display name), or an archive id given explicitly.
            actor: Who is restoring.

        Returns:
            The completed operation.

        Raises:
            ArchiveNotFoundError: If no archived copy resolves.
            AmbiguousArchiveMatchError: If the display name matches
                several archived records.
            StoreUnavailableError: If the active or archive store fails.
        """
        if isinstance(target, AuditLogEntry):
            archive_id = await self.resolve_archive_id(target)
        else:
            archive_id = target

        document = await self._archive.get(archive_id)
        if document is None:
            raise ArchiveNotFoundError(archive_id)

        operation = ArchiveOperation(
            kind=OperationKind.RESTORE,
            record_id=archive_id,
            actor_id=actor.actor_id,
            started_at=datetime.now(timezone.utc),
        )
        detail = format_subject_detail(
            "Restored", short_id(archive_id), display_name_of(document), archive_id=archive_id
        )
        return await self._move(
            operation, document, self._active, self._archive, AuditAction.RESTORED, detail, actor
        )

    async def restore_entry(self, entry_id: str, actor: Actor) -> ArchiveOperation:
        """Restore the record a DELETED audit entry refers to.

        Raises:
            ArchiveNotFoundError: If the entry is unknown, not a
                deletion, or resolves to no archived copy.
            AmbiguousArchiveMatchError: See restore().
            StoreUnavailableError: On I/O failure.
        """
        entry = await self._audit.get_entry(entry_id)
        if entry is None or entry.action is not AuditAction.DELETED:
            raise ArchiveNotFoundError(entry_id)
        return await self.restore(entry, actor)

    async def resolve_archive_id(self, entry: AuditLogEntry) -> str:
        """Resolve the archive document a DELETED entry refers to.

        Raises:
            ArchiveNotFoundError: If nothing in the archive matches.
            AmbiguousArchiveMatchError: If several records share the name.
            StoreUnavailableError: On I/O failure.
        """
        reference = entry.resolved_archive_ref
        if reference:
            # Fast path: a single lookup instead of a full enumeration.
            if await self._archive.get(reference) is None:
                raise ArchiveNotFoundError(reference)
            return reference

        resolution = _resolve(entry, await self._archived_names())
        if resolution is None:
            raise ArchiveNotFoundError(entry.entry_id)
        if resolution.archive_id is None:
            raise AmbiguousArchiveMatchError(resolution.display_name, resolution.candidates)
        return resolution.archive_id

    async def list_restorable(self) -> list[RestorableEntry]:
        """List DELETED entries that still have an archived copy.

        Enumerates the archive once, then resolves every DELETED entry
        against it. Entries resolving to nothing are suppressed (they
        predate archiving, or the copy was restored or purged). Entries
        whose name matches several archived records are returned
        flagged as ambiguous, without an archive id. When several
        entries resolve to the same archive id, only the newest is kept.

        Returns:
            Restorable entries, newest first.

        Raises:
            StoreUnavailableError: If the archive or audit store fails.
        """
        archived_names = await self._archived_names()
        entries = await self._audit.list_entries(actions=[AuditAction.DELETED])

        restorable: list[RestorableEntry] = []
        seen_archive_ids: set[str] = set()
        suppressed = 0
        for entry in entries:
            resolution = _resolve(entry, archived_names)
            if resolution is None:
                suppressed += 1
                continue
            if resolution.archive_id is not None:
                if resolution.archive_id in seen_archive_ids:
                    continue
                seen_archive_ids.add(resolution.archive_id)
            restorable.append(
                RestorableEntry(
                    entry_id=entry.entry_id,
                    detail=entry.detail,
                    actor_name=entry.actor_name,
                    deleted_at=entry.timestamp,
                    archive_id=resolution.archive_id,
                    display_name=resolution.display_name,
                    resolved_by=resolution.resolved_by,
                    candidates=resolution.candidates if resolution.archive_id is None else (),
                )
            )

        self._log.debug(
            "restorable_entries_listed",
            archived_count=len(archived_names),
            deleted_entry_count=len(entries),
            restorable_count=len(restorable),
            suppressed_count=suppressed,
        )
        return restorable

    async def _archived_names(self) -> dict[str, str]:
        archived = await self._archive.list_all()
        return {archive_id: display_name_of(doc) for archive_id, doc in archived.items()}

    async def _move(
        self,
        operation: ArchiveOperation,
        document: dict[str, Any],
        destination: RecordStoreProtocol,
        source: RecordStoreProtocol,
        action: AuditAction,
        detail: str,
        actor: Actor,
    ) -> ArchiveOperation:
        record_id = operation.record_id
        op_log = self._log.bind(
            operation=operation.kind.value,
            record_id=record_id,
            actor_id=actor.actor_id,
        )

        # Step 1: verbatim copy into the destination (overwrite).
        await destination.put(record_id, document)
        operation = operation.advance(ArchiveStep.COPY_WRITTEN)
        op_log.debug("record_copy_written", store=destination.name)

        # Step 2: remove the source copy (delete-if-present).
        await source.delete(record_id)
        operation = operation.advance(ArchiveStep.SOURCE_REMOVED)
        op_log.debug("record_source_removed", store=source.name)

        # Step 3: audit append, never raises.
        entry = await self._audit.append(
            actor.actor_id,
            actor.actor_name,
            action,
            detail,
            archive_ref=record_id,
        )
        operation = operation.advance(ArchiveStep.AUDIT_APPENDED, audit_logged=entry is not None)

        op_log.info(
            "record_archived" if operation.kind is OperationKind.DELETE else "record_restored",
            audit_logged=operation.audit_logged,
            complete=operation.is_complete,
        )
        return operation
