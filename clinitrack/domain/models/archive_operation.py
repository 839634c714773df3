"""Archive/restore state machine models.

A record moves between the active and archive stores:

    Active --delete--> Archived --restore--> Active   (repeatable)
    Archived --purge--> Purged                      (reserved, not implemented)

Each move is three independently committed steps. Every step is
idempotent (overwrite, delete-if-present, append), so an interrupted
move is completed by running the same operation again:

    COPY_WRITTEN -> SOURCE_REMOVED -> AUDIT_APPENDED

A crash after COPY_WRITTEN leaves the record in BOTH stores; a crash
after SOURCE_REMOVED leaves an un-logged but consistent move.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum


class OperationKind(str, Enum):
    """Direction of a move between stores."""

    DELETE = "delete"
    RESTORE = "restore"


class ArchiveStep(str, Enum):
    """Sub-steps of a move, in execution order."""

    COPY_WRITTEN = "copy_written"
    SOURCE_REMOVED = "source_removed"
    AUDIT_APPENDED = "audit_appended"


STEP_ORDER: tuple[ArchiveStep, ...] = (
    ArchiveStep.COPY_WRITTEN,
    ArchiveStep.SOURCE_REMOVED,
    ArchiveStep.AUDIT_APPENDED,
)


class RecordLocation(str, Enum):
    """Where a record id currently lives."""

    ACTIVE = "active"
    ARCHIVED = "archived"
    BOTH = "both"  # interrupted move
    ABSENT = "absent"


@dataclass(frozen=True)
class ArchiveOperation:
    """Progress of one delete or restore.

    Attributes:
        kind: DELETE or RESTORE.
        record_id: Record id, identical in both stores.
        actor_id: Who performed the move.
        started_at: When the operation began.
        completed_steps: Steps committed so far, in order.
        audit_logged: False when the audit append was attempted but the
            audit store rejected it (the move itself still stands).
    """

    kind: OperationKind
    record_id: str
    actor_id: str
    started_at: datetime
    completed_steps: tuple[ArchiveStep, ...] = ()
    audit_logged: bool = False

    @property
    def archive_id(self) -> str:
        """Archived documents share the record id."""
        return self.record_id

    @property
    def is_complete(self) -> bool:
        return self.completed_steps == STEP_ORDER

    @property
    def next_step(self) -> ArchiveStep | None:
        for step in STEP_ORDER:
            if step not in self.completed_steps:
                return step
        return None

    def advance(self, step: ArchiveStep, *, audit_logged: bool | None = None) -> ArchiveOperation:
        """Return a copy with `step` recorded as committed.

        Raises:
            ValueError: If `step` is not the next step in order.
        """
        if step != self.next_step:
            raise ValueError(
                f"Cannot record {step.value} for {self.kind.value} of "
                f"{self.record_id}; next step is "
                f"{self.next_step.value if self.next_step else 'none'}"
            )
        return replace(
            self,
            completed_steps=(*self.completed_steps, step),
            audit_logged=self.audit_logged if audit_logged is None else audit_logged,
        )


@dataclass(frozen=True)
class RestorableEntry:
    """A DELETED audit entry paired with the archive copy it refers to.

    Attributes:
        entry_id: The DELETED audit entry.
        detail: The entry's detail text, for display.
        actor_name: Who performed the delete.
        deleted_at: The entry timestamp.
        archive_id: Resolved archive document id, or None when ambiguous.
        display_name: Name of the archived individual (or the name in
            the entry when ambiguous).
        resolved_by: "reference" (explicit field or docId token) or
            "name" (display-name fallback).
        candidates: Archive ids sharing the name when ambiguous.
    """

    entry_id: str
    detail: str
    actor_name: str
    deleted_at: datetime
    archive_id: str | None
    display_name: str
    resolved_by: str
    candidates: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ambiguous(self) -> bool:
        return self.archive_id is None and len(self.candidates) > 1
