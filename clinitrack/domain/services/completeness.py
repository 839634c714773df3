"""Completeness evaluator.

Pure and total: evaluates one domain of one record against the schema
registry and never raises. A missing data blob is an empty object; an
unknown domain is pending.

Filled rule:
- str: non-empty after strip
- bool, int, float: always filled (0 and False are real answers)
- mapping: non-empty and every own value filled (recursive)
- list/tuple: non-empty and every element filled
- None and anything else: not filled
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from clinitrack.domain.models.assessment_status import CompletionStatus, Domain
from clinitrack.domain.models.domain_schema import (
    DomainSpec,
    FieldPath,
    get_domain_spec,
)


@dataclass(frozen=True)
class DomainCompleteness:
    """Filled/total counts for one domain of one record."""

    domain: Domain
    filled: int
    total: int

    @property
    def ratio(self) -> float:
        if self.total == 0:
            return 0.0
        return self.filled / self.total

    @property
    def status(self) -> CompletionStatus:
        return status_from_counts(self.filled, self.total)


def is_filled(value: Any) -> bool:
    """Whether a single value counts as filled."""
    if isinstance(value, bool):
        return True
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, Mapping):
        return bool(value) and all(is_filled(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return bool(value) and all(is_filled(v) for v in value)
    return False


def status_from_counts(filled: int, total: int) -> CompletionStatus:
    if total == 0 or filled == 0:
        return CompletionStatus.PENDING
    if filled == total:
        return CompletionStatus.COMPLETED
    return CompletionStatus.IN_PROGRESS


def _resolve(blob: Mapping[str, Any], path: FieldPath) -> Any:
    current: Any = blob
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _domain_blob(spec: DomainSpec, record_data: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not isinstance(record_data, Mapping):
        return {}
    blob = record_data.get(spec.blob_key)
    if isinstance(blob, Mapping):
        return blob
    if spec.top_level_fallback:
        # Required paths start at the section name, so the root resolves them.
        return record_data
    return {}


def count_filled(spec: DomainSpec, blob: Mapping[str, Any]) -> int:
    return sum(1 for path in spec.required_paths if is_filled(_resolve(blob, path)))


def filled_count_strategy(spec: DomainSpec, blob: Mapping[str, Any]) -> CompletionStatus:
    """Default strategy: pending / in_progress / completed by filled count."""
    return status_from_counts(count_filled(spec, blob), spec.total)


def measure_domain(
    domain: Domain | str, record_data: Mapping[str, Any] | None
) -> DomainCompleteness | None:
    """Count filled required fields for one domain.

    Args:
        domain: Domain member, display name or blob key.
        record_data: The whole record document (domain blobs by key).

    Returns:
        DomainCompleteness, or None for an unregistered domain.
    """
    spec = get_domain_spec(domain)
    if spec is None:
        return None
    blob = _domain_blob(spec, record_data)
    return DomainCompleteness(
        domain=spec.domain,
        filled=count_filled(spec, blob),
        total=spec.total,
    )


def evaluate_domain(
    domain: Domain | str, record_data: Mapping[str, Any] | None
) -> CompletionStatus:
    """Evaluate the completion status of one domain.

    Args:
        domain: Domain member, display name or blob key.
        record_data: The whole record document. None is treated as {}.

    Returns:
        pending, in_progress or completed. Unknown domains are pending.
    """
    spec = get_domain_spec(domain)
    if spec is None:
        return CompletionStatus.PENDING
    blob = _domain_blob(spec, record_data)
    strategy = spec.strategy or filled_count_strategy
    return strategy(spec, blob)


def evaluate_all(record_data: Mapping[str, Any] | None) -> dict[Domain, CompletionStatus]:
    """Evaluate every domain of a record."""
    return {domain: evaluate_domain(domain, record_data) for domain in Domain}
