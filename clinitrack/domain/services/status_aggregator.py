"""Global status aggregation.

Rolls the five domain statuses of a record into one status:
- all five completed -> completed
- any completed or in_progress -> in_progress
- otherwise -> pending

Pure, order-independent and total. A domain missing from the input, or
carrying an unrecognised value, counts as pending.
"""

from __future__ import annotations

from collections.abc import Mapping

from clinitrack.domain.models.assessment_status import CompletionStatus, Domain


def _status_for(
    domain: Domain, domain_statuses: Mapping[Domain | str, CompletionStatus | str]
) -> CompletionStatus:
    for key, value in domain_statuses.items():
        if Domain.parse(key) is domain:
            return CompletionStatus.coerce(value)
    return CompletionStatus.PENDING


def aggregate(
    domain_statuses: Mapping[Domain | str, CompletionStatus | str] | None,
) -> CompletionStatus:
    """Compute the global status over the fixed set of domains.

    Args:
        domain_statuses: Status per domain, keyed by Domain or name.

    Returns:
        The global CompletionStatus.
    """
    statuses = [_status_for(domain, domain_statuses or {}) for domain in Domain]
    if all(status is CompletionStatus.COMPLETED for status in statuses):
        return CompletionStatus.COMPLETED
    if any(status is not CompletionStatus.PENDING for status in statuses):
        return CompletionStatus.IN_PROGRESS
    return CompletionStatus.PENDING
