"""Ports (interfaces) for Clinitrack's external collaborators."""

from clinitrack.application.ports.audit_log_store import AuditLogStoreProtocol
from clinitrack.application.ports.record_store import RecordStoreProtocol

__all__ = ["AuditLogStoreProtocol", "RecordStoreProtocol"]
