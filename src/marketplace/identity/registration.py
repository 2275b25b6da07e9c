"""User registration and profile management — commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.errors import AlreadyExistsError
from marketplace.identity.user import User
from marketplace.shared.lookup import load

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="User")
class RegisterOrganizer:
    """Create an organizer account with an empty rating."""

    email: String(required=True, max_length=254)
    username: String(required=True, max_length=100)
    organization_name: String(required=True, max_length=200)
    mobile_number: String(max_length=20)


@marketplace.command(part_of="User")
class RegisterRequester:
    """Create a requester account."""

    email: String(required=True, max_length=254)
    name: String(required=True, max_length=100)
    position: String(max_length=100)


@marketplace.command(part_of="User")
class UpdateProfile:
    user_id: Identifier(required=True)
    username: String(max_length=100)
    organization_name: String(max_length=200)
    mobile_number: String(max_length=20)
    name: String(max_length=100)
    position: String(max_length=100)


_PROFILE_COMMAND_FIELDS = ("username", "organization_name", "mobile_number", "name", "position")


def _ensure_email_is_free(email):
    if current_domain.repository_for(User).find_by_email(email) is not None:
        raise AlreadyExistsError({"email": [f"An account with email {email} already exists"]})


@marketplace.command_handler(part_of=User)
class ManageUsersHandler:
    @handle(RegisterOrganizer)
    def register_organizer(self, command):
        _ensure_email_is_free(command.email)

        user = User.register_organizer(
            email=command.email,
            username=command.username,
            organization_name=command.organization_name,
            mobile_number=command.mobile_number,
        )
        current_domain.repository_for(User).add(user)
        logger.info("User registered", user_id=str(user.id), role=user.role)
        return str(user.id)

    @handle(RegisterRequester)
    def register_requester(self, command):
        _ensure_email_is_free(command.email)

        user = User.register_requester(
            email=command.email,
            name=command.name,
            position=command.position,
        )
        current_domain.repository_for(User).add(user)
        logger.info("User registered", user_id=str(user.id), role=user.role)
        return str(user.id)

    @handle(UpdateProfile)
    def update_profile(self, command):
        user = load(User, command.user_id, "user_id")
        changes = {
            field: getattr(command, field) for field in _PROFILE_COMMAND_FIELDS if getattr(command, field) is not None
        }
        user.update_profile(**changes)
        current_domain.repository_for(User).add(user)
