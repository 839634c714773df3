"""Record store stub.

In-memory implementation of RecordStoreProtocol for testing. Documents
are deep-copied on the way in and out, so callers can never mutate
stored state by accident, the same as with a remote store.
"""

from __future__ import annotations

import copy
from typing import Any

from clinitrack.application.ports.record_store import RecordStoreProtocol
from clinitrack.domain.errors.store import StoreUnavailableError


class RecordStoreStub(RecordStoreProtocol):
    """Stub implementation of RecordStoreProtocol.

    Attributes:
        fail_operations: Operation names ("get", "put", "delete",
            "list_all") that raise StoreUnavailableError, for testing.
    """

    def __init__(self, name: str = "active") -> None:
        """Initialize the stub with empty storage.

        Args:
            name: Logical store name (active, archive).
        """
        self._name = name
        self._documents: dict[str, dict[str, Any]] = {}
        self.fail_operations: set[str] = set()

    @property
    def name(self) -> str:
        return self._name

    def clear(self) -> None:
        """Clear all stored data and failure injection."""
        self._documents.clear()
        self.fail_operations.clear()

    def add_document(self, record_id: str, document: dict[str, Any]) -> None:
        """Seed a document directly, bypassing failure injection."""
        self._documents[record_id] = copy.deepcopy(document)

    def contains(self, record_id: str) -> bool:
        return record_id in self._documents

    def _check(self, operation: str) -> None:
        if operation in self.fail_operations:
            raise StoreUnavailableError(self._name, operation, "simulated outage")

    async def get(self, record_id: str) -> dict[str, Any] | None:
        self._check("get")
        document = self._documents.get(record_id)
        return copy.deepcopy(document) if document is not None else None

    async def put(self, record_id: str, document: dict[str, Any]) -> None:
        self._check("put")
        self._documents[record_id] = copy.deepcopy(document)

    async def delete(self, record_id: str) -> bool:
        self._check("delete")
        return self._documents.pop(record_id, None) is not None

    async def list_all(self) -> dict[str, dict[str, Any]]:
        self._check("list_all")
        return copy.deepcopy(self._documents)
