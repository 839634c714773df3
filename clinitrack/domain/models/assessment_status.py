"""Assessment domains and completion statuses.

The five domains are a closed set; the global status of a record is a
rollup over exactly these five.
"""

from __future__ import annotations

from enum import Enum


class CompletionStatus(str, Enum):
    """Completion state of one domain, or of a whole record.

    Ordered: pending < in_progress < completed.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @property
    def rank(self) -> int:
        """Position in the pending < in_progress < completed order."""
        return _STATUS_RANK[self]

    @property
    def label(self) -> str:
        """Human-readable label for display."""
        return _STATUS_LABEL[self]

    @classmethod
    def coerce(cls, value: object) -> CompletionStatus:
        """Best-effort conversion that never raises.

        Anything unrecognised is treated as pending.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return cls.PENDING


_STATUS_RANK: dict[CompletionStatus, int] = {
    CompletionStatus.PENDING: 0,
    CompletionStatus.IN_PROGRESS: 1,
    CompletionStatus.COMPLETED: 2,
}

_STATUS_LABEL: dict[CompletionStatus, str] = {
    CompletionStatus.PENDING: "Pending",
    CompletionStatus.IN_PROGRESS: "In Progress",
    CompletionStatus.COMPLETED: "Completed",
}


class Domain(str, Enum):
    """The five assessment domains."""

    PHYSIOTHERAPY = "Physiotherapy"
    BIOMECHANICS = "Biomechanics"
    PHYSIOLOGY = "Physiology"
    NUTRITION = "Nutrition"
    PSYCHOLOGY = "Psychology"

    @property
    def blob_key(self) -> str:
        """Key of this domain's raw data blob inside a record document."""
        return self.value.lower()

    @classmethod
    def parse(cls, name: object) -> Domain | None:
        """Look up a domain by display name or blob key.

        Args:
            name: "Physiotherapy", "physiotherapy" or a Domain member.

        Returns:
            The matching Domain, or None for anything unknown.
        """
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            return None
        lowered = name.strip().lower()
        for domain in cls:
            if domain.blob_key == lowered:
                return domain
        return None
