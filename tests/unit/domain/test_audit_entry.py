"""Unit tests for audit entry detail formatting and parsing."""

from datetime import datetime, timezone

import pytest

from clinitrack.domain.models.audit_entry import (
    CRITICAL_ACTIONS,
    AuditAction,
    AuditLogEntry,
    format_subject_detail,
    parse_doc_id_token,
    parse_subject_name,
    parse_subject_short_id,
)


def _entry(detail: str, archive_ref: str | None = None) -> AuditLogEntry:
    return AuditLogEntry(
        entry_id="e-1",
        actor_id="uid-1",
        actor_name="admin@example.org",
        action=AuditAction.DELETED,
        detail=detail,
        timestamp=datetime(2025, 11, 18, 9, 30, tzinfo=timezone.utc),
        archive_ref=archive_ref,
    )


class TestFormatSubjectDetail:
    def test_with_archive_id(self) -> None:
        detail = format_subject_detail("Deleted", "abc123", "Asha Kumar", archive_id="abc123xyz")
        assert detail == "Deleted individual abc123 (Asha Kumar) [docId=abc123xyz]"

    def test_without_archive_id(self) -> None:
        assert (
            format_subject_detail("Restored", "abc123", "Asha Kumar")
            == "Restored individual abc123 (Asha Kumar)"
        )


class TestParsing:
    def test_doc_id_token(self) -> None:
        assert parse_doc_id_token("Deleted individual a (B) [docId=xyz789]") == "xyz789"
        assert parse_doc_id_token("Deleted individual a (B)") is None
        assert parse_doc_id_token("") is None

    @pytest.mark.parametrize(
        ("detail", "expected"),
        [
            ("Deleted individual abc123 (Asha Kumar)", "Asha Kumar"),
            ("Deleted individual abc123 (Asha Kumar) [docId=abc123x]", "Asha Kumar"),
            ("Deleted individual abc123 (O'Neil (Jr))", "O'Neil (Jr)"),
            ("Deleted individual abc123 ()", None),
            ("Updated Nutrition for someone", None),
        ],
    )
    def test_subject_name(self, detail: str, expected: str | None) -> None:
        assert parse_subject_name(detail) == expected

    def test_subject_short_id(self) -> None:
        assert parse_subject_short_id("Deleted individual abc123 (Asha Kumar)") == "abc123"
        assert (
            parse_subject_short_id("Deleted individual abc123 (Asha Kumar) [docId=abc123x]")
            == "abc123"
        )
        assert parse_subject_short_id("Updated Nutrition for someone") is None


class TestAuditLogEntry:
    def test_explicit_reference_wins(self) -> None:
        entry = _entry("Deleted individual a (B) [docId=from-token]", archive_ref="explicit")
        assert entry.resolved_archive_ref == "explicit"

    def test_token_fallback(self) -> None:
        entry = _entry("Deleted individual a (B) [docId=from-token]")
        assert entry.resolved_archive_ref == "from-token"

    def test_no_reference(self) -> None:
        entry = _entry("Deleted individual abc123 (Asha Kumar)")
        assert entry.resolved_archive_ref is None
        assert entry.subject_name == "Asha Kumar"
        assert entry.subject_short_id == "abc123"

    def test_entries_are_immutable(self) -> None:
        entry = _entry("x")
        with pytest.raises(AttributeError):
            entry.detail = "y"  # type: ignore[misc]

    def test_critical_actions(self) -> None:
        assert CRITICAL_ACTIONS == {
            AuditAction.DELETED,
            AuditAction.RESTORED,
            AuditAction.CORRECTED,
        }
