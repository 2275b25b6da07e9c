"""Identity Directory backed by the User repository."""

from marketplace.errors import NotFoundError
from marketplace.identity.port import IdentityDirectory, UserRef
from marketplace.identity.user import User
from marketplace.shared.lookup import load


def to_ref(user: User) -> UserRef:
    return UserRef(id=str(user.id), role=user.role, display_name=user.display_name)


class RepositoryIdentityDirectory(IdentityDirectory):
    """Resolves users from the marketplace's own User aggregate.

    ``actor_id`` is whatever identifier the caller authenticated (an HTTP
    header, a test fixture). An unknown or missing id is a failed sign-in and
    yields None rather than an error.
    """

    def __init__(self, actor_id: str | None = None) -> None:
        self.actor_id = actor_id

    def resolve_user(self, user_id: str) -> UserRef:
        return to_ref(load(User, user_id, "user_id"))

    def current_actor(self) -> UserRef | None:
        if not self.actor_id:
            return None
        try:
            return self.resolve_user(self.actor_id)
        except NotFoundError:
            return None
