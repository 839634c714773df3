"""Assessment record errors."""

from __future__ import annotations

from clinitrack.domain.exceptions import ClinitrackError


class RecordNotFoundError(ClinitrackError):
    """Raised when a record id is not present in the active store.

    Attributes:
        record_id: The id that was looked up.
    """

    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"Assessment record {record_id} not found")


class UnknownDomainError(ClinitrackError):
    """Raised when a write names a domain outside the registry.

    The evaluator itself never raises this (unknown domains evaluate to
    pending); it is used at the write boundary so that raw data is never
    stored under a domain nobody evaluates.

    Attributes:
        domain_name: The rejected domain name.
    """

    def __init__(self, domain_name: str) -> None:
        self.domain_name = domain_name
        super().__init__(f"Unknown assessment domain: {domain_name!r}")
