"""Unit tests for the global status aggregator."""

import itertools

import pytest

from clinitrack.domain.models.assessment_status import CompletionStatus, Domain
from clinitrack.domain.services.status_aggregator import aggregate


def _all(status: CompletionStatus) -> dict[Domain, CompletionStatus]:
    return {domain: status for domain in Domain}


class TestAggregate:
    """Test the rollup rules."""

    def test_all_completed(self) -> None:
        assert aggregate(_all(CompletionStatus.COMPLETED)) == CompletionStatus.COMPLETED

    def test_all_pending(self) -> None:
        assert aggregate(_all(CompletionStatus.PENDING)) == CompletionStatus.PENDING

    def test_empty_input_is_pending(self) -> None:
        assert aggregate({}) == CompletionStatus.PENDING
        assert aggregate(None) == CompletionStatus.PENDING

    def test_one_completed_rest_pending(self) -> None:
        statuses = _all(CompletionStatus.PENDING)
        statuses[Domain.PHYSIOTHERAPY] = CompletionStatus.COMPLETED
        assert aggregate(statuses) == CompletionStatus.IN_PROGRESS

    def test_one_in_progress(self) -> None:
        statuses = _all(CompletionStatus.PENDING)
        statuses[Domain.NUTRITION] = CompletionStatus.IN_PROGRESS
        assert aggregate(statuses) == CompletionStatus.IN_PROGRESS

    def test_four_completed_is_not_completed(self) -> None:
        statuses = _all(CompletionStatus.COMPLETED)
        del statuses[Domain.PSYCHOLOGY]
        assert aggregate(statuses) == CompletionStatus.IN_PROGRESS

    def test_string_keys_and_values(self) -> None:
        statuses = {domain.value: "completed" for domain in Domain}
        assert aggregate(statuses) == CompletionStatus.COMPLETED

    def test_invalid_value_counts_as_pending(self) -> None:
        statuses: dict = _all(CompletionStatus.COMPLETED)
        statuses[Domain.BIOMECHANICS] = "not_started"
        assert aggregate(statuses) == CompletionStatus.IN_PROGRESS

    def test_unknown_domain_keys_ignored(self) -> None:
        statuses: dict = {"Cardiology": "completed"}
        assert aggregate(statuses) == CompletionStatus.PENDING

    @pytest.mark.parametrize(
        "combo",
        list(itertools.islice(itertools.product(CompletionStatus, repeat=5), 0, None, 17)),
    )
    def test_order_independent(self, combo: tuple[CompletionStatus, ...]) -> None:
        forward = dict(zip(Domain, combo))
        backward = dict(reversed(list(forward.items())))
        assert aggregate(forward) == aggregate(backward)
