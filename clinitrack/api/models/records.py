"""Assessment record API models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from clinitrack.application.services.assessment_summary_service import (
    AssessmentSummary,
    AttentionItem,
    GrowthPoint,
    ResumeTarget,
)
from clinitrack.domain.models.assessment_record import AssessmentRecord
from clinitrack.domain.models.assessment_status import CompletionStatus, Domain


class DomainSaveRequest(BaseModel):
    """Raw data for one domain, as submitted by an entry form."""

    data: dict[str, Any] = Field(
        default_factory=dict,
        description="The domain's complete data blob (sections and fields)",
        examples=[{"registrationDetails": {"fullName": "Asha K", "rank": "Maj"}}],
    )


class CorrectionRequest(DomainSaveRequest):
    """Corrected data for one domain, with the reason for the correction."""

    reason: str = Field("", max_length=500, description="Why the data was corrected")


class RecordResponse(BaseModel):
    """An assessment record with its derived statuses."""

    record_id: str
    short_id: str
    display_name: str
    status: str = Field(..., examples=["in_progress"])
    status_label: str = Field(..., examples=["In Progress"])
    domain_statuses: dict[str, str]
    domains: dict[str, dict[str, Any]]
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str | None = None
    updated_by: str | None = None

    @classmethod
    def from_record(cls, record: AssessmentRecord) -> RecordResponse:
        return cls(
            record_id=record.record_id,
            short_id=record.short_id,
            display_name=record.display_name,
            status=record.status.value,
            status_label=record.status.label,
            domain_statuses={
                domain.value: record.domain_statuses.get(
                    domain, CompletionStatus.PENDING
                ).value
                for domain in Domain
            },
            domains={domain.value: blob for domain, blob in record.domain_data.items()},
            created_at=record.created_at,
            updated_at=record.updated_at,
            created_by=record.created_by,
            updated_by=record.updated_by,
        )


class SummaryResponse(BaseModel):
    """Dashboard counts over active records."""

    total: int
    by_status: dict[str, int]
    by_domain: dict[str, dict[str, int]]
    completion_rates: dict[str, float]

    @classmethod
    def from_summary(cls, summary: AssessmentSummary) -> SummaryResponse:
        return cls(
            total=summary.total,
            by_status={status.value: count for status, count in summary.by_status.items()},
            by_domain={
                domain.value: {status.value: count for status, count in counts.items()}
                for domain, counts in summary.by_domain.items()
            },
            completion_rates={
                domain.value: round(summary.completion_rate(domain), 4) for domain in Domain
            },
        )


# Missing domains listed per attention item; the rest are only counted.
MISSING_DOMAINS_SHOWN = 3


class AttentionItemResponse(BaseModel):
    """An unfinished record below the completion threshold."""

    record_id: str
    short_id: str
    display_name: str
    status: str
    status_label: str
    completion_percentage: int = Field(..., ge=0, le=100)
    field_completion: float = Field(..., ge=0.0, le=1.0)
    missing_domains: list[str] = Field(
        ..., description="First missing domains, in domain order"
    )
    missing_count: int

    @classmethod
    def from_item(cls, item: AttentionItem) -> AttentionItemResponse:
        return cls(
            record_id=item.record_id,
            short_id=item.short_id,
            display_name=item.display_name,
            status=item.status.value,
            status_label=item.status.label,
            completion_percentage=item.completion_percentage,
            field_completion=round(item.field_completion, 4),
            missing_domains=[
                domain.value for domain in item.missing_domains[:MISSING_DOMAINS_SHOWN]
            ],
            missing_count=len(item.missing_domains),
        )


class AttentionListResponse(BaseModel):
    items: list[AttentionItemResponse]


class ResumeWorkResponse(BaseModel):
    """The record to continue, and the domain to open."""

    record_id: str
    short_id: str
    display_name: str
    status: str
    status_label: str
    domain_statuses: dict[str, str]
    active_domain: str | None = Field(
        None, description="First in-progress domain, else first pending; None when done"
    )
    updated_at: datetime | None = None

    @classmethod
    def from_target(cls, target: ResumeTarget) -> ResumeWorkResponse:
        return cls(
            record_id=target.record_id,
            short_id=target.short_id,
            display_name=target.display_name,
            status=target.status.value,
            status_label=target.status.label,
            domain_statuses={
                domain.value: status.value for domain, status in target.domain_statuses.items()
            },
            active_domain=target.active_domain.value if target.active_domain else None,
            updated_at=target.updated_at,
        )


class GrowthPointResponse(BaseModel):
    month: str = Field(..., examples=["2025-11"])
    assessments: int
    completed: int
    cumulative: int

    @classmethod
    def from_point(cls, point: GrowthPoint) -> GrowthPointResponse:
        return cls(
            month=point.month,
            assessments=point.assessments,
            completed=point.completed,
            cumulative=point.cumulative,
        )


class GrowthSeriesResponse(BaseModel):
    points: list[GrowthPointResponse]
