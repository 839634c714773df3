"""Dashboard views over active assessment records.

Counts records by global status and, per domain, by domain status, and
builds the dashboard worklists: records needing attention, the record
to resume, and the monthly growth series. Statuses are recomputed from
the raw blobs rather than read from the stored cache.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Final

import structlog

from clinitrack.application.ports.record_store import RecordStoreProtocol
from clinitrack.domain.models.assessment_record import AssessmentRecord
from clinitrack.domain.models.assessment_status import CompletionStatus, Domain
from clinitrack.domain.services.completeness import evaluate_all, measure_domain
from clinitrack.domain.services.status_aggregator import aggregate

log = structlog.get_logger()

ATTENTION_THRESHOLD_PERCENT: Final[int] = 80
ATTENTION_LIMIT: Final[int] = 5
EMPTY_GROWTH_MONTHS: Final[int] = 6

_EPOCH: Final[datetime] = datetime.min.replace(tzinfo=timezone.utc)


def _zero_counts() -> dict[CompletionStatus, int]:
    return {status: 0 for status in CompletionStatus}


@dataclass
class AssessmentSummary:
    """Aggregate counts over the active store.

    Attributes:
        total: Number of active records.
        by_status: Records per global status.
        by_domain: Per domain, records per domain status.
    """

    total: int = 0
    by_status: dict[CompletionStatus, int] = field(default_factory=_zero_counts)
    by_domain: dict[Domain, dict[CompletionStatus, int]] = field(
        default_factory=lambda: {domain: _zero_counts() for domain in Domain}
    )

    def completion_rate(self, domain: Domain) -> float:
        """Share of records whose `domain` is completed (0.0 when empty)."""
        if self.total == 0:
            return 0.0
        return self.by_domain[domain][CompletionStatus.COMPLETED] / self.total


@dataclass(frozen=True)
class AttentionItem:
    """An unfinished record that is far from complete.

    Attributes:
        record_id: Full record id.
        short_id: Short, human-facing id.
        display_name: Name of the individual.
        status: Recomputed global status.
        completion_percentage: Completed domains out of all domains, 0-100.
        field_completion: Mean filled-field ratio across domains, 0.0-1.0.
        missing_domains: Domains not yet completed, in domain order.
    """

    record_id: str
    short_id: str
    display_name: str
    status: CompletionStatus
    completion_percentage: int
    field_completion: float
    missing_domains: tuple[Domain, ...]


@dataclass(frozen=True)
class ResumeTarget:
    """The record a user should pick up next."""

    record_id: str
    short_id: str
    display_name: str
    status: CompletionStatus
    domain_statuses: dict[Domain, CompletionStatus]
    active_domain: Domain | None
    updated_at: datetime | None


@dataclass(frozen=True)
class GrowthPoint:
    month: str  # YYYY-MM
    assessments: int
    completed: int
    cumulative: int


def _aware(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _month_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def _trailing_months(today: date, count: int) -> list[str]:
    months = []
    year, month = today.year, today.month
    for _ in range(count):
        months.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(months))


def _field_completion(document: Mapping[str, Any]) -> float:
    ratios = [
        measured.ratio
        for measured in (measure_domain(domain, document) for domain in Domain)
        if measured is not None
    ]
    return sum(ratios) / len(ratios) if ratios else 0.0


def _active_domain(statuses: Mapping[Domain, CompletionStatus]) -> Domain | None:
    for wanted in (CompletionStatus.IN_PROGRESS, CompletionStatus.PENDING):
        for domain in Domain:
            if statuses[domain] is wanted:
                return domain
    return None


class AssessmentSummaryService:
    """Builds dashboard views from the active store.

    Every method reads the whole active store; all of them raise
    StoreUnavailableError on I/O failure.
    """

    def __init__(self, active_store: RecordStoreProtocol) -> None:
        self._active = active_store
        self._log = log.bind(service="assessment_summary_service")

    async def summarize(self) -> AssessmentSummary:
        """Count active records by global and per-domain status.

        Raises:
            StoreUnavailableError: On I/O failure.
        """
        documents = await self._active.list_all()
        summary = AssessmentSummary(total=len(documents))
        for document in documents.values():
            statuses = evaluate_all(document)
            summary.by_status[aggregate(statuses)] += 1
            for domain, status in statuses.items():
                summary.by_domain[domain][status] += 1

        self._log.debug("assessment_summary_computed", total=summary.total)
        return summary

    async def needs_attention(self, limit: int = ATTENTION_LIMIT) -> list[AttentionItem]:
        """Unfinished records below the attention threshold.

        A record qualifies when its recomputed global status is not
        completed and fewer than 80% of its domains are completed.
        Results are ordered least complete first (domain percentage,
        then mean field completion, then id).

        Args:
            limit: Maximum number of items returned.

        Raises:
            StoreUnavailableError: On I/O failure.
        """
        documents = await self._active.list_all()
        items: list[AttentionItem] = []
        for record_id, document in documents.items():
            statuses = evaluate_all(document)
            status = aggregate(statuses)
            if status is CompletionStatus.COMPLETED:
                continue
            missing = tuple(
                domain for domain in Domain if statuses[domain] is not CompletionStatus.COMPLETED
            )
            completed = len(statuses) - len(missing)
            percentage = round(completed / len(statuses) * 100)
            if percentage >= ATTENTION_THRESHOLD_PERCENT or not missing:
                continue
            record = AssessmentRecord.from_document(record_id, document)
            items.append(
                AttentionItem(
                    record_id=record_id,
                    short_id=record.short_id,
                    display_name=record.display_name,
                    status=status,
                    completion_percentage=percentage,
                    field_completion=_field_completion(document),
                    missing_domains=missing,
                )
            )

        items.sort(
            key=lambda item: (item.completion_percentage, item.field_completion, item.record_id)
        )
        self._log.debug(
            "attention_items_computed", candidates=len(items), limit=limit
        )
        return items[:limit]

    async def resume_target(self, actor_id: str) -> ResumeTarget | None:
        """The most recently updated record to continue working on.

        Prefers records created by `actor_id`; falls back to the most
        recently updated record of anyone. The active domain is the
        first in-progress domain, else the first pending one.

        Returns:
            The target, or None when the active store is empty.

        Raises:
            StoreUnavailableError: On I/O failure.
        """
        documents = await self._active.list_all()
        records = [
            AssessmentRecord.from_document(record_id, document)
            for record_id, document in documents.items()
        ]
        if not records:
            return None

        def last_touched(record: AssessmentRecord) -> datetime:
            return _aware(record.updated_at) or _aware(record.created_at) or _EPOCH

        own = [record for record in records if record.created_by == actor_id]
        record = max(own or records, key=last_touched)
        statuses = evaluate_all(documents[record.record_id])

        self._log.debug(
            "resume_target_selected",
            record_id=record.record_id,
            own_record=bool(own),
        )
        return ResumeTarget(
            record_id=record.record_id,
            short_id=record.short_id,
            display_name=record.display_name,
            status=aggregate(statuses),
            domain_statuses=statuses,
            active_domain=_active_domain(statuses),
            updated_at=record.updated_at,
        )

    async def growth_series(self, today: date | None = None) -> list[GrowthPoint]:
        """Records created per month, with completions and a running total.

        Months are keyed YYYY-MM from `createdAt`; a record without one
        counts in the current month. With no records at all, the last
        six months are returned with zero counts.

        Args:
            today: Reference date for the current month (defaults to now, UTC).

        Raises:
            StoreUnavailableError: On I/O failure.
        """
        today = today or datetime.now(timezone.utc).date()
        documents = await self._active.list_all()
        if not documents:
            return [
                GrowthPoint(month=month, assessments=0, completed=0, cumulative=0)
                for month in _trailing_months(today, EMPTY_GROWTH_MONTHS)
            ]

        created: dict[str, int] = {}
        completed: dict[str, int] = {}
        for record_id, document in documents.items():
            created_at = AssessmentRecord.from_document(record_id, document).created_at
            month = _month_key(created_at or today)
            created[month] = created.get(month, 0) + 1
            if aggregate(evaluate_all(document)) is CompletionStatus.COMPLETED:
                completed[month] = completed.get(month, 0) + 1

        series: list[GrowthPoint] = []
        cumulative = 0
        for month in sorted(created):
            cumulative += created[month]
            series.append(
                GrowthPoint(
                    month=month,
                    assessments=created[month],
                    completed=completed.get(month, 0),
                    cumulative=cumulative,
                )
            )
        return series
