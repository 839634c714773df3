"""Assessment record domain model.

A record is stored as one document: a raw data blob per domain plus a
derived cache (`domainStatuses`, `status`) and create/update metadata.
The cache is rebuilt from the raw blobs on every write and is never
read back as an input.

Document shape (keys kept compatible with existing stored records):
    {
        "id": "...",
        "status": "in_progress",
        "domainStatuses": {"Physiotherapy": "completed", ...},
        "physiotherapy": {...}, "biomechanics": {...}, ...,
        "createdAt": "2025-11-18T09:30:00+00:00",
        "updatedAt": "...",
        "createdBy": "uid",
        "updatedBy": "uid",
    }
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Final

from clinitrack.domain.models.assessment_status import CompletionStatus, Domain

UNKNOWN_DISPLAY_NAME: Final[str] = "Unknown Patient"
SHORT_ID_LENGTH: Final[int] = 6

STATUS_KEY: Final[str] = "status"
DOMAIN_STATUSES_KEY: Final[str] = "domainStatuses"
REGISTRATION_SECTION: Final[str] = "registrationDetails"


def short_id(record_id: str) -> str:
    """Short, human-facing form of a record id (first 6 characters)."""
    return record_id[:SHORT_ID_LENGTH]


def display_name_of(document: Mapping[str, Any] | None) -> str:
    """Derive the display name of a record document.

    Uses `registrationDetails.fullName`, falling back to first name,
    initials and last name joined, then to "Unknown Patient".

    Args:
        document: A record document (active or archived). May be None.

    Returns:
        The display name, never empty.
    """
    if not document:
        return UNKNOWN_DISPLAY_NAME
    registration = _registration_details(document)
    full_name = registration.get("fullName")
    if isinstance(full_name, str) and full_name.strip():
        return full_name.strip()
    parts = [
        str(registration.get(key)).strip()
        for key in ("firstName", "initials", "lastName")
        if registration.get(key)
    ]
    joined = " ".join(part for part in parts if part)
    return joined or UNKNOWN_DISPLAY_NAME


def _registration_details(document: Mapping[str, Any]) -> Mapping[str, Any]:
    blob = document.get(Domain.PHYSIOTHERAPY.blob_key)
    if isinstance(blob, Mapping):
        details = blob.get(REGISTRATION_SECTION)
        if isinstance(details, Mapping):
            return details
    # Older documents kept physiotherapy sections at the top level.
    details = document.get(REGISTRATION_SECTION)
    if isinstance(details, Mapping):
        return details
    return {}


@dataclass
class AssessmentRecord:
    """One individual's assessment across all five domains.

    Attributes:
        record_id: Store key, shared by the active and archive stores.
        domain_data: Raw data blob per domain.
        domain_statuses: Derived per-domain status cache.
        status: Derived global status cache.
        created_at: When the record was first saved.
        updated_at: When the record was last saved.
        created_by: Actor id of the first save.
        updated_by: Actor id of the latest save.
        extra: Any other document keys, preserved verbatim.
    """

    record_id: str
    domain_data: dict[Domain, dict[str, Any]] = field(default_factory=dict)
    domain_statuses: dict[Domain, CompletionStatus] = field(default_factory=dict)
    status: CompletionStatus = CompletionStatus.PENDING
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str | None = None
    updated_by: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def short_id(self) -> str:
        return short_id(self.record_id)

    @property
    def display_name(self) -> str:
        return display_name_of(self.to_document())

    def raw_data(self) -> dict[str, Any]:
        """Domain blobs keyed the way the evaluator reads them."""
        return {domain.blob_key: blob for domain, blob in self.domain_data.items()}

    def to_document(self) -> dict[str, Any]:
        """Serialize to the stored document shape."""
        document: dict[str, Any] = copy.deepcopy(self.extra)
        document["id"] = self.record_id
        document[STATUS_KEY] = self.status.value
        document[DOMAIN_STATUSES_KEY] = {
            domain.value: self.domain_statuses.get(
                domain, CompletionStatus.PENDING
            ).value
            for domain in Domain
        }
        for domain, blob in self.domain_data.items():
            document[domain.blob_key] = copy.deepcopy(blob)
        document["createdAt"] = _iso(self.created_at)
        document["updatedAt"] = _iso(self.updated_at)
        document["createdBy"] = self.created_by
        document["updatedBy"] = self.updated_by
        return document

    @classmethod
    def from_document(cls, record_id: str, document: Mapping[str, Any]) -> AssessmentRecord:
        """Deserialize a stored document.

        The stored status cache is carried for display only; writers
        recompute it before persisting.
        """
        known = {
            "id",
            STATUS_KEY,
            DOMAIN_STATUSES_KEY,
            "createdAt",
            "updatedAt",
            "createdBy",
            "updatedBy",
            *(domain.blob_key for domain in Domain),
        }
        domain_data: dict[Domain, dict[str, Any]] = {}
        for domain in Domain:
            blob = document.get(domain.blob_key)
            if isinstance(blob, Mapping):
                domain_data[domain] = copy.deepcopy(dict(blob))

        stored_statuses = document.get(DOMAIN_STATUSES_KEY)
        domain_statuses: dict[Domain, CompletionStatus] = {}
        if isinstance(stored_statuses, Mapping):
            for name, value in stored_statuses.items():
                domain = Domain.parse(name)
                if domain is not None:
                    domain_statuses[domain] = CompletionStatus.coerce(value)

        return cls(
            record_id=record_id,
            domain_data=domain_data,
            domain_statuses=domain_statuses,
            status=CompletionStatus.coerce(document.get(STATUS_KEY)),
            created_at=_parse_datetime(document.get("createdAt")),
            updated_at=_parse_datetime(document.get("updatedAt")),
            created_by=document.get("createdBy"),
            updated_by=document.get("updatedBy"),
            extra={k: copy.deepcopy(v) for k, v in document.items() if k not in known},
        )


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_datetime(value: object) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None
