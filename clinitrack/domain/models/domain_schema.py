"""Schema registry: the required fields that define a complete domain.

Each domain's raw data lives in the record document under its blob key.
Required paths are tuples of keys relative to that blob. A path that
ends at an object (for example a strength sub-test) requires every
sub-field of that object to be filled.

The registry is immutable, process-wide data. Adding a domain means
adding an entry here; neither the evaluator nor the aggregator has a
per-domain branch.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Final

from clinitrack.domain.models.assessment_status import CompletionStatus, Domain


FieldPath = tuple[str, ...]

# (spec, domain blob) -> status. None selects the filled-count rule.
EvaluationStrategy = Callable[["DomainSpec", Mapping[str, Any]], CompletionStatus]


@dataclass(frozen=True)
class DomainSpec:
    """Schema and evaluation strategy for one domain.

    Attributes:
        domain: The domain this spec describes.
        required_paths: Field paths, relative to the domain blob, that
            must all be filled for the domain to be completed.
        strategy: Optional custom evaluation; the default counts
            filled required fields.
        top_level_fallback: Older documents stored this domain's
            sections at the document root instead of under the blob key.
    """

    domain: Domain
    required_paths: tuple[FieldPath, ...]
    strategy: EvaluationStrategy | None = None
    top_level_fallback: bool = False

    @property
    def blob_key(self) -> str:
        return self.domain.blob_key

    @property
    def total(self) -> int:
        return len(self.required_paths)


def _section(section: str, *fields: str) -> tuple[FieldPath, ...]:
    return tuple((section, field) for field in fields)


PHYSIOTHERAPY_SPEC: Final[DomainSpec] = DomainSpec(
    domain=Domain.PHYSIOTHERAPY,
    required_paths=(
        *_section(
            "registrationDetails", "fullName", "serviceNumber", "rank", "dob", "gender"
        ),
        *_section("injuryHistory", "chiefComplaints", "diagnosis", "painSeverity"),
        *_section("rom", "sitAndReach", "thomasTest"),
        *_section("strengthStability", "plankTime", "staticBalance", "dynamicBalance"),
        *_section("fms", "deepSquat", "trunkStability"),
        *_section("staticPosture", "headTilt", "pelvicTilt", "spinalCurves"),
    ),
    top_level_fallback=True,
)

BIOMECHANICS_SPEC: Final[DomainSpec] = DomainSpec(
    domain=Domain.BIOMECHANICS,
    required_paths=(
        *_section("metadata", "height", "mass", "dominantSide", "footwearType"),
        *_section("running", "runningSpeed", "cadence", "strideLength"),
        *_section("variability", "cadenceDrift", "stepVariability"),
        *_section("loadCarriage", "deltaSpeed", "loadEffectIndex"),
        # Sub-test objects: every measurement inside must be present.
        *_section("strength", "isokineticKnee", "isokineticAnkle", "nordicHamstring"),
        *_section("powerTests", "cmj", "dropJump"),
    ),
)

PHYSIOLOGY_SPEC: Final[DomainSpec] = DomainSpec(
    domain=Domain.PHYSIOLOGY,
    required_paths=(
        ("imuSensorsUsed",),
        ("samplingRate",),
        ("measurementRange",),
        ("calibrationType",),
        ("mountingMethod",),
        ("syncMethod",),
    ),
)

NUTRITION_SPEC: Final[DomainSpec] = DomainSpec(
    domain=Domain.NUTRITION,
    required_paths=(
        ("warmUpActivity",),
        ("warmUpDuration",),
        ("environment",),
        ("loadConditions",),
        ("restBetweenTests",),
    ),
)

PSYCHOLOGY_SPEC: Final[DomainSpec] = DomainSpec(
    domain=Domain.PSYCHOLOGY,
    required_paths=(
        ("stairs",),
        ("turns",),
        ("unevenGround",),
        ("weaponHandling",),
    ),
)

DOMAIN_REGISTRY: Final[Mapping[Domain, DomainSpec]] = MappingProxyType(
    {
        spec.domain: spec
        for spec in (
            PHYSIOTHERAPY_SPEC,
            BIOMECHANICS_SPEC,
            PHYSIOLOGY_SPEC,
            NUTRITION_SPEC,
            PSYCHOLOGY_SPEC,
        )
    }
)


def get_domain_spec(domain: Domain | str) -> DomainSpec | None:
    """Look up the registered spec for a domain.

    Args:
        domain: A Domain member, display name or blob key.

    Returns:
        The DomainSpec, or None if the domain is not registered.
    """
    parsed = Domain.parse(domain)
    if parsed is None:
        return None
    return DOMAIN_REGISTRY.get(parsed)
