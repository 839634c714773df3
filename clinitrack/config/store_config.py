"""Store and governance configuration.

Environment Variables (Stores):
- CLINITRACK_ACTIVE_TABLE: Active record table (default: assessment_records)
- CLINITRACK_ARCHIVE_TABLE: Archive table (default: deleted_assessment_records)
- CLINITRACK_AUDIT_TABLE: Audit log table (default: audit_logs)

Environment Variables (Governance):
- CLINITRACK_CRITICAL_LOG_LIMIT: Entries in the critical feed (default: 10)
- CLINITRACK_AUDIT_PAGE_LIMIT: Max entries per audit log page (default: 100)
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

_TABLE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_str_env(key: str, default: str) -> str:
    value = os.environ.get(key, "").strip()
    return value or default


@dataclass(frozen=True)
class StoreConfig:
    """Table names backing the three stores.

    Table names are interpolated into SQL, so they are validated as
    plain identifiers.

    Attributes:
        active_table: One row per live record.
        archive_table: Verbatim copies of soft-deleted records.
        audit_table: Append-only audit entries.
    """

    active_table: str = "assessment_records"
    archive_table: str = "deleted_assessment_records"
    audit_table: str = "audit_logs"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        for label, table in (
            ("active_table", self.active_table),
            ("archive_table", self.archive_table),
            ("audit_table", self.audit_table),
        ):
            if not _TABLE_NAME_PATTERN.match(table):
                raise ValueError(f"{label} must be a plain SQL identifier, got {table!r}")
        if self.active_table == self.archive_table:
            raise ValueError("active_table and archive_table must differ")

    @classmethod
    def from_environment(cls) -> StoreConfig:
        """Create config from environment variables with defaults."""
        return cls(
            active_table=_get_str_env("CLINITRACK_ACTIVE_TABLE", "assessment_records"),
            archive_table=_get_str_env(
                "CLINITRACK_ARCHIVE_TABLE", "deleted_assessment_records"
            ),
            audit_table=_get_str_env("CLINITRACK_AUDIT_TABLE", "audit_logs"),
        )


@dataclass(frozen=True)
class GovernanceConfig:
    """Sizes of the governance audit views.

    Attributes:
        critical_log_limit: Entries shown in the critical-actions feed.
        audit_page_limit: Upper bound on entries returned per request.
    """

    critical_log_limit: int = 10
    audit_page_limit: int = 100

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.critical_log_limit < 1:
            raise ValueError(
                f"critical_log_limit must be positive, got {self.critical_log_limit}"
            )
        if self.audit_page_limit < self.critical_log_limit:
            raise ValueError(
                f"audit_page_limit ({self.audit_page_limit}) must be at least "
                f"critical_log_limit ({self.critical_log_limit})"
            )

    @classmethod
    def from_environment(cls) -> GovernanceConfig:
        """Create config from environment variables with defaults."""
        return cls(
            critical_log_limit=_get_int_env("CLINITRACK_CRITICAL_LOG_LIMIT", 10),
            audit_page_limit=_get_int_env("CLINITRACK_AUDIT_PAGE_LIMIT", 100),
        )


DEFAULT_STORE_CONFIG = StoreConfig()
DEFAULT_GOVERNANCE_CONFIG = GovernanceConfig()
