"""In-memory stub implementations of Clinitrack ports.

Used for tests and for running without a DATABASE_URL.
"""

from clinitrack.infrastructure.stubs.audit_log_store_stub import AuditLogStoreStub
from clinitrack.infrastructure.stubs.record_store_stub import RecordStoreStub

__all__ = ["AuditLogStoreStub", "RecordStoreStub"]
