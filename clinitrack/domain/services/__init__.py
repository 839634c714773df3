"""Pure domain services: completeness evaluation and status rollup."""

from clinitrack.domain.services.completeness import (
    DomainCompleteness,
    evaluate_all,
    evaluate_domain,
    is_filled,
    measure_domain,
)
from clinitrack.domain.services.status_aggregator import aggregate

__all__ = [
    "DomainCompleteness",
    "aggregate",
    "evaluate_all",
    "evaluate_domain",
    "is_filled",
    "measure_domain",
]
