"""Unit tests for the assessment record model and display-name rule."""

from datetime import datetime, timezone

from clinitrack.domain.models.assessment_record import (
    UNKNOWN_DISPLAY_NAME,
    AssessmentRecord,
    display_name_of,
    short_id,
)
from clinitrack.domain.models.assessment_status import CompletionStatus, Domain


class TestDisplayName:
    def test_full_name(self) -> None:
        document = {"physiotherapy": {"registrationDetails": {"fullName": " Asha Kumar "}}}
        assert display_name_of(document) == "Asha Kumar"

    def test_name_parts_fallback(self) -> None:
        document = {
            "physiotherapy": {
                "registrationDetails": {"firstName": "Asha", "initials": "R", "lastName": "Kumar"}
            }
        }
        assert display_name_of(document) == "Asha R Kumar"

    def test_top_level_registration(self) -> None:
        document = {"registrationDetails": {"fullName": "Legacy Layout"}}
        assert display_name_of(document) == "Legacy Layout"

    def test_unknown(self) -> None:
        assert display_name_of({}) == UNKNOWN_DISPLAY_NAME
        assert display_name_of(None) == UNKNOWN_DISPLAY_NAME
        assert display_name_of({"physiotherapy": {"registrationDetails": {"fullName": ""}}}) == (
            UNKNOWN_DISPLAY_NAME
        )


class TestShortId:
    def test_first_six_characters(self) -> None:
        assert short_id("abcdef123456") == "abcdef"
        assert short_id("abc") == "abc"


class TestAssessmentRecord:
    def test_from_document(self) -> None:
        document = {
            "id": "rec-1",
            "status": "in_progress",
            "domainStatuses": {"Physiotherapy": "completed", "Nutrition": "bogus"},
            "nutrition": {"warmUpActivity": "jog"},
            "createdAt": "2025-11-18T09:30:00Z",
            "createdBy": "uid-1",
            "legacyFlag": True,
        }
        record = AssessmentRecord.from_document("rec-1", document)

        assert record.status is CompletionStatus.IN_PROGRESS
        assert record.domain_statuses[Domain.PHYSIOTHERAPY] is CompletionStatus.COMPLETED
        assert record.domain_statuses[Domain.NUTRITION] is CompletionStatus.PENDING
        assert record.domain_data == {Domain.NUTRITION: {"warmUpActivity": "jog"}}
        assert record.created_at == datetime(2025, 11, 18, 9, 30, tzinfo=timezone.utc)
        assert record.updated_at is None
        assert record.extra == {"legacyFlag": True}

    def test_document_round_trip_preserves_extra_keys(self) -> None:
        record = AssessmentRecord(
            record_id="rec-1",
            domain_data={Domain.PSYCHOLOGY: {"stairs": "pass"}},
            domain_statuses={domain: CompletionStatus.PENDING for domain in Domain},
            extra={"legacyFlag": True},
        )
        document = record.to_document()

        assert document["legacyFlag"] is True
        assert document["psychology"] == {"stairs": "pass"}
        assert document["domainStatuses"]["Psychology"] == "pending"
        assert AssessmentRecord.from_document("rec-1", document) == record

    def test_raw_data(self) -> None:
        record = AssessmentRecord(
            record_id="rec-1", domain_data={Domain.NUTRITION: {"environment": "indoor"}}
        )
        assert record.raw_data() == {"nutrition": {"environment": "indoor"}}
