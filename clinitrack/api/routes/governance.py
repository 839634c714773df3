"""Governance endpoints: restorable deletions, restore, and audit log.

Read-only audit views plus the restore action. Restore accepts either
a DELETED audit entry id or an explicit archive id; the latter settles
ambiguous name matches.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from clinitrack.api.dependencies.actor import get_actor
from clinitrack.api.dependencies.assessment import (
    get_archive_coordinator_dependency,
    get_audit_writer_dependency,
    get_governance_config_dependency,
)
from clinitrack.api.errors import to_http_exception
from clinitrack.api.models.errors import ErrorResponse
from clinitrack.api.models.governance import (
    ArchiveOperationResponse,
    AuditEntryResponse,
    AuditLogResponse,
    RestorableEntryResponse,
    RestorableListResponse,
    RestoreRequest,
)
from clinitrack.application.services.archive_restore_coordinator import (
    ArchiveRestoreCoordinator,
)
from clinitrack.application.services.audit_log_writer import AuditLogWriter
from clinitrack.config import GovernanceConfig
from clinitrack.domain.exceptions import ClinitrackError
from clinitrack.domain.models.actor import Actor
from clinitrack.domain.models.audit_entry import AuditAction

router = APIRouter(prefix="/v1/governance", tags=["governance"])


@router.get("/restorable", response_model=RestorableListResponse)
async def list_restorable(
    request: Request,
    coordinator: ArchiveRestoreCoordinator = Depends(get_archive_coordinator_dependency),
) -> RestorableListResponse:
    """Deletions whose archived copy still exists, newest first."""
    try:
        entries = await coordinator.list_restorable()
    except ClinitrackError as exc:
        raise to_http_exception(exc, request) from exc
    return RestorableListResponse(
        entries=[RestorableEntryResponse.from_entry(entry) for entry in entries],
        total_count=len(entries),
    )


@router.post("/restore", response_model=ArchiveOperationResponse)
async def restore_record(
    body: RestoreRequest,
    request: Request,
    actor: Actor = Depends(get_actor),
    coordinator: ArchiveRestoreCoordinator = Depends(get_archive_coordinator_dependency),
) -> ArchiveOperationResponse:
    """Move an archived record back to the active store."""
    try:
        if body.archive_id is not None:
            operation = await coordinator.restore(body.archive_id, actor)
        else:
            operation = await coordinator.restore_entry(body.entry_id, actor)
    except ClinitrackError as exc:
        raise to_http_exception(exc, request) from exc
    return ArchiveOperationResponse.from_operation(operation)


@router.get("/audit-log", response_model=AuditLogResponse)
async def list_audit_log(
    request: Request,
    action: list[str] | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1),
    writer: AuditLogWriter = Depends(get_audit_writer_dependency),
    config: GovernanceConfig = Depends(get_governance_config_dependency),
) -> AuditLogResponse:
    """Activity feed, newest first, optionally filtered by action."""
    actions = None
    if action:
        try:
            actions = [AuditAction(name.upper()) for name in action]
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=ErrorResponse(
                    type="https://clinitrack.dev/errors/invalid-action",
                    title="Invalid Action Filter",
                    status=status.HTTP_400_BAD_REQUEST,
                    detail=str(exc),
                    instance=str(request.url),
                ).model_dump(),
            ) from exc

    page_limit = min(limit or config.audit_page_limit, config.audit_page_limit)
    try:
        entries = await writer.list_entries(actions=actions, limit=page_limit)
    except ClinitrackError as exc:
        raise to_http_exception(exc, request) from exc
    return AuditLogResponse(
        entries=[AuditEntryResponse.from_entry(entry) for entry in entries],
        total_count=len(entries),
    )


@router.get("/critical", response_model=AuditLogResponse)
async def list_critical(
    request: Request,
    limit: int | None = Query(default=None, ge=1),
    writer: AuditLogWriter = Depends(get_audit_writer_dependency),
) -> AuditLogResponse:
    """Latest deletions, restorations and corrections."""
    try:
        entries = await writer.list_critical(limit=limit)
    except ClinitrackError as exc:
        raise to_http_exception(exc, request) from exc
    return AuditLogResponse(
        entries=[AuditEntryResponse.from_entry(entry) for entry in entries],
        total_count=len(entries),
    )
