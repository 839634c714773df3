"""
Pytest configuration and shared fixtures for Clinitrack tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Use the in-memory stubs for store ports
- Unit tests go in tests/unit/
"""

from typing import Any

import pytest

from clinitrack.domain.models.actor import Actor
from clinitrack.infrastructure.stubs import AuditLogStoreStub, RecordStoreStub


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from clinitrack import __version__

    return __version__


@pytest.fixture
def actor() -> Actor:
    """An authenticated administrator."""
    return Actor(actor_id="uid-admin", actor_name="admin@example.org")


@pytest.fixture
def active_store() -> RecordStoreStub:
    return RecordStoreStub(name="active")


@pytest.fixture
def archive_store() -> RecordStoreStub:
    return RecordStoreStub(name="archive")


@pytest.fixture
def audit_store() -> AuditLogStoreStub:
    return AuditLogStoreStub()


@pytest.fixture
def complete_physiotherapy() -> dict[str, Any]:
    """A physiotherapy blob with every required field filled."""
    return {
        "registrationDetails": {
            "fullName": "Asha Kumar",
            "serviceNumber": "SN-1042",
            "rank": "Maj",
            "dob": "1990-04-12",
            "gender": "F",
        },
        "injuryHistory": {
            "chiefComplaints": "Lower back pain",
            "diagnosis": "Lumbar strain",
            "painSeverity": 4,
        },
        "rom": {"sitAndReach": 21.5, "thomasTest": "negative"},
        "strengthStability": {
            "plankTime": 95,
            "staticBalance": "good",
            "dynamicBalance": "fair",
        },
        "fms": {"deepSquat": 2, "trunkStability": 3},
        "staticPosture": {
            "headTilt": "neutral",
            "pelvicTilt": "anterior",
            "spinalCurves": "normal",
        },
    }


@pytest.fixture
def complete_biomechanics() -> dict[str, Any]:
    """A biomechanics blob with every required field filled."""
    return {
        "metadata": {
            "height": 178,
            "mass": 74.2,
            "dominantSide": "right",
            "footwearType": "boots",
        },
        "running": {"runningSpeed": 3.4, "cadence": 172, "strideLength": 1.21},
        "variability": {"cadenceDrift": 0.8, "stepVariability": 2.1},
        "loadCarriage": {"deltaSpeed": -0.3, "loadEffectIndex": 0.12},
        "strength": {
            "isokineticKnee": {"left": 180, "right": 188},
            "isokineticAnkle": {"left": 95, "right": 97},
            "nordicHamstring": {"left": 310, "right": 322},
        },
        "powerTests": {
            "cmj": {"height": 38.2, "power": 4100},
            "dropJump": {"rsi": 1.7},
        },
    }


@pytest.fixture
def complete_physiology() -> dict[str, Any]:
    return {
        "imuSensorsUsed": "Xsens",
        "samplingRate": 100,
        "measurementRange": "16g",
        "calibrationType": "static",
        "mountingMethod": "strap",
        "syncMethod": "hardware",
    }


@pytest.fixture
def complete_nutrition() -> dict[str, Any]:
    return {
        "warmUpActivity": "jog",
        "warmUpDuration": 10,
        "environment": "indoor",
        "loadConditions": "20kg",
        "restBetweenTests": 3,
    }


@pytest.fixture
def complete_psychology() -> dict[str, Any]:
    return {
        "stairs": "pass",
        "turns": "pass",
        "unevenGround": "pass",
        "weaponHandling": "pass",
    }


@pytest.fixture
def complete_document(
    complete_physiotherapy: dict[str, Any],
    complete_biomechanics: dict[str, Any],
    complete_physiology: dict[str, Any],
    complete_nutrition: dict[str, Any],
    complete_psychology: dict[str, Any],
) -> dict[str, Any]:
    """A record document with all five domains complete."""
    return {
        "physiotherapy": complete_physiotherapy,
        "biomechanics": complete_biomechanics,
        "physiology": complete_physiology,
        "nutrition": complete_nutrition,
        "psychology": complete_psychology,
    }
