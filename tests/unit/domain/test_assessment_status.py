"""Unit tests for CompletionStatus and Domain enums."""

from clinitrack.domain.models.assessment_status import CompletionStatus, Domain


class TestCompletionStatus:
    def test_ordering(self) -> None:
        assert (
            CompletionStatus.PENDING.rank
            < CompletionStatus.IN_PROGRESS.rank
            < CompletionStatus.COMPLETED.rank
        )

    def test_labels(self) -> None:
        assert CompletionStatus.IN_PROGRESS.label == "In Progress"

    def test_coerce_never_raises(self) -> None:
        assert CompletionStatus.coerce("completed") is CompletionStatus.COMPLETED
        assert CompletionStatus.coerce(CompletionStatus.IN_PROGRESS) is CompletionStatus.IN_PROGRESS
        assert CompletionStatus.coerce("not_started") is CompletionStatus.PENDING
        assert CompletionStatus.coerce(None) is CompletionStatus.PENDING


class TestDomain:
    def test_blob_key(self) -> None:
        assert Domain.PHYSIOTHERAPY.blob_key == "physiotherapy"

    def test_parse(self) -> None:
        assert Domain.parse("Nutrition") is Domain.NUTRITION
        assert Domain.parse(" psychology ") is Domain.PSYCHOLOGY
        assert Domain.parse(Domain.PHYSIOLOGY) is Domain.PHYSIOLOGY
        assert Domain.parse("Cardiology") is None
        assert Domain.parse(3) is None
