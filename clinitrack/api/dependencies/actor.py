"""Acting-user dependency.

Authentication is handled upstream (gateway or identity provider); the
authenticated identity arrives as request headers.
"""

from fastapi import Header

from clinitrack.domain.models.actor import DEFAULT_ACTOR_NAME, UNKNOWN_ACTOR_ID, Actor


async def get_actor(
    x_actor_id: str | None = Header(default=None),
    x_actor_name: str | None = Header(default=None),
) -> Actor:
    """Build the acting user from X-Actor-Id / X-Actor-Name headers.

    Missing headers fall back to an unknown id and the generic "Admin"
    name so audit entries are never written without an actor.
    """
    return Actor(
        actor_id=(x_actor_id or "").strip() or UNKNOWN_ACTOR_ID,
        actor_name=(x_actor_name or "").strip() or DEFAULT_ACTOR_NAME,
    )
