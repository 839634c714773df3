"""Governance (delete / restore / audit) API models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from clinitrack.domain.models.archive_operation import ArchiveOperation, RestorableEntry
from clinitrack.domain.models.audit_entry import AuditLogEntry


class ArchiveOperationResponse(BaseModel):
    """Outcome of a delete or restore."""

    operation: str = Field(..., examples=["delete"])
    record_id: str
    archive_id: str
    completed_steps: list[str]
    audit_logged: bool = Field(
        ..., description="False if the move succeeded but its audit entry was not written"
    )
    complete: bool = Field(..., description="All steps committed")
    pending_step: str | None = Field(
        None, description="Next step to run when an interrupted move is repeated"
    )

    @classmethod
    def from_operation(cls, operation: ArchiveOperation) -> ArchiveOperationResponse:
        return cls(
            operation=operation.kind.value,
            record_id=operation.record_id,
            archive_id=operation.archive_id,
            completed_steps=[step.value for step in operation.completed_steps],
            audit_logged=operation.audit_logged,
            complete=operation.is_complete,
            pending_step=operation.next_step.value if operation.next_step else None,
        )


class RestoreRequest(BaseModel):
    """Restore by DELETED audit entry or by explicit archive id.

    Exactly one of the two must be given. An explicit archive id is the
    way to pick among candidates of an ambiguous entry.
    """

    entry_id: str | None = None
    archive_id: str | None = None

    @model_validator(mode="after")
    def _exactly_one_target(self) -> RestoreRequest:
        if (self.entry_id is None) == (self.archive_id is None):
            raise ValueError("Provide exactly one of entry_id or archive_id")
        return self


class RestorableEntryResponse(BaseModel):
    """A deletion that can still be undone."""

    entry_id: str
    detail: str
    actor_name: str
    deleted_at: datetime
    archive_id: str | None
    display_name: str
    resolved_by: str
    ambiguous: bool
    candidates: list[str]

    @classmethod
    def from_entry(cls, entry: RestorableEntry) -> RestorableEntryResponse:
        return cls(
            entry_id=entry.entry_id,
            detail=entry.detail,
            actor_name=entry.actor_name,
            deleted_at=entry.deleted_at,
            archive_id=entry.archive_id,
            display_name=entry.display_name,
            resolved_by=entry.resolved_by,
            ambiguous=entry.ambiguous,
            candidates=list(entry.candidates),
        )


class RestorableListResponse(BaseModel):
    entries: list[RestorableEntryResponse]
    total_count: int


class AuditEntryResponse(BaseModel):
    """One audit log entry (read-only)."""

    entry_id: str
    actor_id: str
    actor_name: str
    action: str
    detail: str
    timestamp: datetime
    archive_ref: str | None

    @classmethod
    def from_entry(cls, entry: AuditLogEntry) -> AuditEntryResponse:
        return cls(
            entry_id=entry.entry_id,
            actor_id=entry.actor_id,
            actor_name=entry.actor_name,
            action=entry.action.value,
            detail=entry.detail,
            timestamp=entry.timestamp,
            archive_ref=entry.resolved_archive_ref,
        )


class AuditLogResponse(BaseModel):
    entries: list[AuditEntryResponse]
    total_count: int
