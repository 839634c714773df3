"""Assessment record endpoints.

Per-domain entry forms save one domain at a time; statuses are derived
server-side on every save. Deletion is a soft delete into the archive
(see the governance router for restore).
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Query, Request, status

from clinitrack.api.dependencies.actor import get_actor
from clinitrack.api.dependencies.assessment import (
    get_archive_coordinator_dependency,
    get_record_service_dependency,
    get_summary_service_dependency,
)
from clinitrack.api.errors import to_http_exception
from clinitrack.api.models.governance import ArchiveOperationResponse
from clinitrack.api.models.records import (
    AttentionItemResponse,
    AttentionListResponse,
    CorrectionRequest,
    DomainSaveRequest,
    GrowthPointResponse,
    GrowthSeriesResponse,
    RecordResponse,
    ResumeWorkResponse,
    SummaryResponse,
)
from clinitrack.application.services.archive_restore_coordinator import (
    ArchiveRestoreCoordinator,
)
from clinitrack.application.services.assessment_record_service import (
    AssessmentRecordService,
)
from clinitrack.application.services.assessment_summary_service import (
    AssessmentSummaryService,
)
from clinitrack.domain.exceptions import ClinitrackError
from clinitrack.domain.models.actor import Actor

log = structlog.get_logger()

router = APIRouter(prefix="/v1/records", tags=["records"])


@router.post(
    "/domains/{domain}",
    response_model=RecordResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_record(
    domain: str,
    body: DomainSaveRequest,
    request: Request,
    actor: Actor = Depends(get_actor),
    service: AssessmentRecordService = Depends(get_record_service_dependency),
) -> RecordResponse:
    """Create a record from the first saved domain."""
    try:
        record = await service.save_domain(None, domain, body.data, actor)
    except ClinitrackError as exc:
        raise to_http_exception(exc, request) from exc
    return RecordResponse.from_record(record)


# Dashboard views are declared before /{record_id} so their paths are not
# captured as ids.
@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    request: Request,
    service: AssessmentSummaryService = Depends(get_summary_service_dependency),
) -> SummaryResponse:
    """Dashboard counts by global and per-domain status."""
    try:
        summary = await service.summarize()
    except ClinitrackError as exc:
        raise to_http_exception(exc, request) from exc
    return SummaryResponse.from_summary(summary)


@router.get("/attention", response_model=AttentionListResponse)
async def get_attention(
    request: Request,
    limit: int = Query(5, ge=1, le=50),
    service: AssessmentSummaryService = Depends(get_summary_service_dependency),
) -> AttentionListResponse:
    """Unfinished records with under 80% of domains completed, least complete first."""
    try:
        items = await service.needs_attention(limit=limit)
    except ClinitrackError as exc:
        raise to_http_exception(exc, request) from exc
    return AttentionListResponse(items=[AttentionItemResponse.from_item(item) for item in items])


@router.get("/resume", response_model=ResumeWorkResponse | None)
async def get_resume_target(
    request: Request,
    actor: Actor = Depends(get_actor),
    service: AssessmentSummaryService = Depends(get_summary_service_dependency),
) -> ResumeWorkResponse | None:
    """The record the acting user should continue; null when there are none."""
    try:
        target = await service.resume_target(actor.actor_id)
    except ClinitrackError as exc:
        raise to_http_exception(exc, request) from exc
    if target is None:
        return None
    return ResumeWorkResponse.from_target(target)


@router.get("/growth", response_model=GrowthSeriesResponse)
async def get_growth(
    request: Request,
    service: AssessmentSummaryService = Depends(get_summary_service_dependency),
) -> GrowthSeriesResponse:
    """Records created per month with completions and a running total."""
    try:
        points = await service.growth_series()
    except ClinitrackError as exc:
        raise to_http_exception(exc, request) from exc
    return GrowthSeriesResponse(points=[GrowthPointResponse.from_point(p) for p in points])


@router.get("/{record_id}", response_model=RecordResponse)
async def get_record(
    record_id: str,
    request: Request,
    service: AssessmentRecordService = Depends(get_record_service_dependency),
) -> RecordResponse:
    try:
        record = await service.get_record(record_id)
    except ClinitrackError as exc:
        raise to_http_exception(exc, request) from exc
    return RecordResponse.from_record(record)


@router.put("/{record_id}/domains/{domain}", response_model=RecordResponse)
async def save_domain(
    record_id: str,
    domain: str,
    body: DomainSaveRequest,
    request: Request,
    actor: Actor = Depends(get_actor),
    service: AssessmentRecordService = Depends(get_record_service_dependency),
) -> RecordResponse:
    """Save (replace) one domain's data on an existing record."""
    try:
        record = await service.save_domain(record_id, domain, body.data, actor)
    except ClinitrackError as exc:
        raise to_http_exception(exc, request) from exc
    return RecordResponse.from_record(record)


@router.post("/{record_id}/domains/{domain}/corrections", response_model=RecordResponse)
async def correct_domain(
    record_id: str,
    domain: str,
    body: CorrectionRequest,
    request: Request,
    actor: Actor = Depends(get_actor),
    service: AssessmentRecordService = Depends(get_record_service_dependency),
) -> RecordResponse:
    """Correct erroneous data on a record (audited as CORRECTED)."""
    try:
        record = await service.correct_domain(
            record_id, domain, body.data, actor, reason=body.reason
        )
    except ClinitrackError as exc:
        raise to_http_exception(exc, request) from exc
    return RecordResponse.from_record(record)


@router.delete("/{record_id}", response_model=ArchiveOperationResponse)
async def delete_record(
    record_id: str,
    request: Request,
    actor: Actor = Depends(get_actor),
    coordinator: ArchiveRestoreCoordinator = Depends(get_archive_coordinator_dependency),
) -> ArchiveOperationResponse:
    """Soft-delete a record into the archive."""
    try:
        operation = await coordinator.delete(record_id, actor)
    except ClinitrackError as exc:
        raise to_http_exception(exc, request) from exc

    if not operation.audit_logged:
        log.warning("record_deleted_without_audit", record_id=record_id)
    return ArchiveOperationResponse.from_operation(operation)
