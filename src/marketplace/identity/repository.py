"""Repository for the User aggregate."""

from marketplace.domain import marketplace
from marketplace.identity.user import User, UserRole


@marketplace.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        results = self._dao.query.filter(email=email).all().items
        return results[0] if results else None

    def organizers(self) -> list[User]:
        return self._dao.query.filter(role=UserRole.ORGANIZER.value).limit(None).all().items
