"""Identity Directory port (abstract interface).

Resolves user identifiers to a role and profile. Authentication and sessions
live outside the marketplace; callers hand the resolved actor to every
operation explicitly instead of reading ambient login state.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class UserRef:
    """The acting user as seen by the marketplace."""

    id: str
    role: str
    display_name: str | None = None

    @property
    def is_organizer(self) -> bool:
        return self.role == "organizer"

    @property
    def is_requester(self) -> bool:
        return self.role == "requester"


class IdentityDirectory(ABC):
    @abstractmethod
    def resolve_user(self, user_id: str) -> UserRef:
        """Return the user behind ``user_id`` or raise ``NotFoundError``."""
        ...

    @abstractmethod
    def current_actor(self) -> UserRef | None:
        """Return the signed-in user, or None when nobody is signed in."""
        ...
