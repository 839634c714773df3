"""Record store port.

One interface serves both the active store and the archive store: the
archive holds verbatim copies of active documents under the same id.

Implementations raise StoreUnavailableError on I/O failure. They never
interpret document contents.
"""

from __future__ import annotations

from typing import Any, Protocol


class RecordStoreProtocol(Protocol):
    """Document store keyed by record id."""

    @property
    def name(self) -> str:
        """Logical store name used in logs and errors (active, archive)."""
        ...

    async def get(self, record_id: str) -> dict[str, Any] | None:
        """Fetch a document.

        Args:
            record_id: The document key.

        Returns:
            A copy of the stored document, or None if absent.

        Raises:
            StoreUnavailableError: On I/O failure.
        """
        ...

    async def put(self, record_id: str, document: dict[str, Any]) -> None:
        """Write a document, replacing any existing one (idempotent).

        Raises:
            StoreUnavailableError: On I/O failure.
        """
        ...

    async def delete(self, record_id: str) -> bool:
        """Remove a document if present (idempotent).

        Returns:
            True if a document was removed, False if none existed.

        Raises:
            StoreUnavailableError: On I/O failure.
        """
        ...

    async def list_all(self) -> dict[str, dict[str, Any]]:
        """Enumerate every document in one pass.

        Returns:
            Mapping of record id to document copy.

        Raises:
            StoreUnavailableError: On I/O failure.
        """
        ...
