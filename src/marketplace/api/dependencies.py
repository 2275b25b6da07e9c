"""Request-scoped dependencies shared by the marketplace routes."""

from fastapi import Header, HTTPException

from marketplace.identity.directory import RepositoryIdentityDirectory
from marketplace.identity.port import UserRef


async def current_actor(x_actor_id: str = Header(default="")) -> UserRef:
    """Resolve the ``X-Actor-Id`` header to a user, or answer 401."""
    actor = RepositoryIdentityDirectory(actor_id=x_actor_id or None).current_actor()
    if actor is None:
        raise HTTPException(status_code=401, detail="Unknown or missing actor")
    return actor
