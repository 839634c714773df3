"""Acting user identity.

Authentication happens elsewhere; only who performed an action is
consumed here, for record metadata and audit entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

UNKNOWN_ACTOR_ID: Final[str] = "unknown"
DEFAULT_ACTOR_NAME: Final[str] = "Admin"


@dataclass(frozen=True)
class Actor:
    """The user performing a write.

    Attributes:
        actor_id: Stable user id.
        actor_name: Email or display name, shown in the audit log.
    """

    actor_id: str = UNKNOWN_ACTOR_ID
    actor_name: str = DEFAULT_ACTOR_NAME
