"""Unit tests for the completeness evaluator.

Covers the filled-value rule, nested sub-test objects, unknown domains
and monotonicity of the status as fields are filled.
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from clinitrack.domain.models.assessment_status import CompletionStatus, Domain
from clinitrack.domain.models.domain_schema import (
    BIOMECHANICS_SPEC,
    DOMAIN_REGISTRY,
    PHYSIOTHERAPY_SPEC,
    DomainSpec,
    get_domain_spec,
)
from clinitrack.domain.services.completeness import (
    evaluate_all,
    evaluate_domain,
    is_filled,
    measure_domain,
    status_from_counts,
)


class TestIsFilled:
    """Test the filled-value rule."""

    @pytest.mark.parametrize("value", [0, 0.0, False, True, 42, -1.5, "x", "  y "])
    def test_scalars_filled(self, value: Any) -> None:
        assert is_filled(value) is True

    @pytest.mark.parametrize("value", [None, "", "   ", {}, [], ()])
    def test_empty_values_not_filled(self, value: Any) -> None:
        assert is_filled(value) is False

    def test_object_requires_every_value(self) -> None:
        assert is_filled({"left": 180, "right": 188}) is True
        assert is_filled({"left": 180, "right": None}) is False
        assert is_filled({"left": 180, "right": ""}) is False

    def test_nested_object(self) -> None:
        assert is_filled({"a": {"b": {"c": 0}}}) is True
        assert is_filled({"a": {"b": {}}}) is False

    def test_list_requires_every_element(self) -> None:
        assert is_filled(["knee", "ankle"]) is True
        assert is_filled(["knee", ""]) is False

    def test_unknown_type_not_filled(self) -> None:
        assert is_filled(object()) is False


class TestStatusFromCounts:
    def test_thresholds(self) -> None:
        assert status_from_counts(0, 5) == CompletionStatus.PENDING
        assert status_from_counts(1, 5) == CompletionStatus.IN_PROGRESS
        assert status_from_counts(4, 5) == CompletionStatus.IN_PROGRESS
        assert status_from_counts(5, 5) == CompletionStatus.COMPLETED

    def test_empty_schema_is_pending(self) -> None:
        assert status_from_counts(0, 0) == CompletionStatus.PENDING


class TestSchemaRegistry:
    """Test the registry shape."""

    def test_every_domain_registered(self) -> None:
        assert set(DOMAIN_REGISTRY) == set(Domain)

    def test_registry_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            DOMAIN_REGISTRY[Domain.NUTRITION] = PHYSIOTHERAPY_SPEC  # type: ignore[index]

    def test_lookup_by_name(self) -> None:
        assert get_domain_spec("Physiotherapy") is PHYSIOTHERAPY_SPEC
        assert get_domain_spec("biomechanics") is BIOMECHANICS_SPEC
        assert get_domain_spec("Cardiology") is None

    def test_physiotherapy_totals(self) -> None:
        assert PHYSIOTHERAPY_SPEC.total == 18
        assert ("registrationDetails", "fullName") in PHYSIOTHERAPY_SPEC.required_paths


class TestEvaluateDomain:
    """Test per-domain evaluation."""

    def test_missing_blob_is_pending(self) -> None:
        for domain in Domain:
            assert evaluate_domain(domain, {}) == CompletionStatus.PENDING

    def test_none_record_is_pending(self) -> None:
        assert evaluate_domain(Domain.NUTRITION, None) == CompletionStatus.PENDING

    def test_unknown_domain_is_pending(self, complete_document: dict[str, Any]) -> None:
        assert evaluate_domain("Cardiology", complete_document) == CompletionStatus.PENDING

    def test_complete_domain(self, complete_document: dict[str, Any]) -> None:
        for domain in Domain:
            assert evaluate_domain(domain, complete_document) == CompletionStatus.COMPLETED

    def test_partial_domain(self) -> None:
        record = {"nutrition": {"warmUpActivity": "jog", "warmUpDuration": 10}}
        assert evaluate_domain(Domain.NUTRITION, record) == CompletionStatus.IN_PROGRESS

    def test_zero_and_false_count_as_filled(self) -> None:
        record = {
            "nutrition": {
                "warmUpActivity": "none",
                "warmUpDuration": 0,
                "environment": "indoor",
                "loadConditions": False,
                "restBetweenTests": 0.0,
            }
        }
        assert evaluate_domain(Domain.NUTRITION, record) == CompletionStatus.COMPLETED

    def test_whitespace_string_not_filled(self, complete_nutrition: dict[str, Any]) -> None:
        complete_nutrition["environment"] = "   "
        record = {"nutrition": complete_nutrition}
        assert evaluate_domain(Domain.NUTRITION, record) == CompletionStatus.IN_PROGRESS

    def test_sub_test_object_requires_all_measurements(
        self, complete_biomechanics: dict[str, Any]
    ) -> None:
        complete_biomechanics["strength"]["isokineticKnee"] = {"left": 180}
        record = {"biomechanics": complete_biomechanics}
        assert evaluate_domain(Domain.BIOMECHANICS, record) == CompletionStatus.COMPLETED

        complete_biomechanics["strength"]["isokineticKnee"] = {"left": 180, "right": None}
        assert evaluate_domain(Domain.BIOMECHANICS, record) == CompletionStatus.IN_PROGRESS

    def test_empty_sub_test_object_not_filled(
        self, complete_biomechanics: dict[str, Any]
    ) -> None:
        complete_biomechanics["powerTests"]["dropJump"] = {}
        measured = measure_domain(Domain.BIOMECHANICS, {"biomechanics": complete_biomechanics})
        assert measured is not None
        assert measured.filled == measured.total - 1

    def test_section_not_an_object(self) -> None:
        record = {"physiotherapy": {"registrationDetails": "Asha"}}
        assert evaluate_domain(Domain.PHYSIOTHERAPY, record) == CompletionStatus.PENDING

    def test_top_level_physiotherapy_sections(
        self, complete_physiotherapy: dict[str, Any]
    ) -> None:
        record = {"id": "legacy-1", **complete_physiotherapy}
        assert evaluate_domain(Domain.PHYSIOTHERAPY, record) == CompletionStatus.COMPLETED

        del record["fms"]
        assert evaluate_domain(Domain.PHYSIOTHERAPY, record) == CompletionStatus.IN_PROGRESS

    def test_nested_physiotherapy_blob_wins_over_top_level(
        self, complete_physiotherapy: dict[str, Any]
    ) -> None:
        record = {"physiotherapy": {}, **complete_physiotherapy}
        assert evaluate_domain(Domain.PHYSIOTHERAPY, record) == CompletionStatus.PENDING

    def test_other_domains_never_read_top_level(
        self, complete_nutrition: dict[str, Any]
    ) -> None:
        assert evaluate_domain(Domain.NUTRITION, complete_nutrition) == CompletionStatus.PENDING

    def test_extra_fields_ignored(self, complete_psychology: dict[str, Any]) -> None:
        complete_psychology["notes"] = ""
        record = {"psychology": complete_psychology}
        assert evaluate_domain(Domain.PSYCHOLOGY, record) == CompletionStatus.COMPLETED

    def test_custom_strategy_used(self, monkeypatch: pytest.MonkeyPatch) -> None:
        spec = DomainSpec(
            domain=Domain.PSYCHOLOGY,
            required_paths=(("stairs",),),
            strategy=lambda _spec, _blob: CompletionStatus.COMPLETED,
        )
        monkeypatch.setattr(
            "clinitrack.domain.services.completeness.get_domain_spec",
            lambda _domain: spec,
        )
        assert evaluate_domain(Domain.PSYCHOLOGY, {}) == CompletionStatus.COMPLETED

    def test_monotonic_as_fields_are_filled(
        self, complete_physiotherapy: dict[str, Any]
    ) -> None:
        blob: dict[str, Any] = {}
        previous = evaluate_domain(Domain.PHYSIOTHERAPY, {"physiotherapy": blob})
        for section, field_name in PHYSIOTHERAPY_SPEC.required_paths:
            blob.setdefault(section, {})[field_name] = copy.deepcopy(
                complete_physiotherapy[section][field_name]
            )
            current = evaluate_domain(Domain.PHYSIOTHERAPY, {"physiotherapy": blob})
            assert current.rank >= previous.rank
            previous = current
        assert previous == CompletionStatus.COMPLETED


class TestMeasureDomain:
    def test_counts(self) -> None:
        record = {"psychology": {"stairs": "pass", "turns": ""}}
        measured = measure_domain("Psychology", record)
        assert measured is not None
        assert (measured.filled, measured.total) == (1, 4)
        assert measured.ratio == pytest.approx(0.25)
        assert measured.status == CompletionStatus.IN_PROGRESS

    def test_unknown_domain(self) -> None:
        assert measure_domain("Cardiology", {}) is None


class TestEvaluateAll:
    def test_physiotherapy_only(self, complete_physiotherapy: dict[str, Any]) -> None:
        statuses = evaluate_all({"physiotherapy": complete_physiotherapy})
        assert statuses[Domain.PHYSIOTHERAPY] == CompletionStatus.COMPLETED
        for domain in Domain:
            if domain is not Domain.PHYSIOTHERAPY:
                assert statuses[domain] == CompletionStatus.PENDING

    def test_covers_every_domain(self) -> None:
        assert set(evaluate_all({})) == set(Domain)
