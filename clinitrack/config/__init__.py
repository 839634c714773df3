"""Configuration module for Clinitrack.

Available Configurations:
- StoreConfig: Table names for the active, archive and audit stores
- GovernanceConfig: Audit feed sizes for the governance views
"""

from clinitrack.config.store_config import (
    DEFAULT_GOVERNANCE_CONFIG,
    DEFAULT_STORE_CONFIG,
    GovernanceConfig,
    StoreConfig,
)

__all__ = [
    "DEFAULT_GOVERNANCE_CONFIG",
    "DEFAULT_STORE_CONFIG",
    "GovernanceConfig",
    "StoreConfig",
]
