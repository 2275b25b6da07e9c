"""Event type management — commands and handler.

Every mutation is made by the owning organizer. An event type that still has
packages cannot be deleted.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.catalog.event_package import EventPackage
from marketplace.catalog.event_type import EventType
from marketplace.domain import marketplace
from marketplace.errors import ConflictError, NotAuthorizedError
from marketplace.shared.lookup import load

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="EventType")
class CreateEventType:
    organizer_id: Identifier(required=True)
    name: String(required=True, max_length=100)
    description: Text(required=True)


@marketplace.command(part_of="EventType")
class UpdateEventType:
    event_type_id: Identifier(required=True)
    organizer_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()


@marketplace.command(part_of="EventType")
class DeleteEventType:
    event_type_id: Identifier(required=True)
    organizer_id: Identifier(required=True)


def assert_owned_by(entity, organizer_id):
    if str(entity.organizer_id) != str(organizer_id):
        raise NotAuthorizedError(
            {"organizer_id": [f"{type(entity).__name__} {entity.id} belongs to another organizer"]}
        )


@marketplace.command_handler(part_of=EventType)
class ManageEventTypesHandler:
    @handle(CreateEventType)
    def create_event_type(self, command):
        event_type = EventType.create(
            organizer_id=command.organizer_id,
            name=command.name,
            description=command.description,
        )
        current_domain.repository_for(EventType).add(event_type)
        return str(event_type.id)

    @handle(UpdateEventType)
    def update_event_type(self, command):
        event_type = load(EventType, command.event_type_id, "event_type_id")
        assert_owned_by(event_type, command.organizer_id)

        if command.name is None and command.description is None:
            raise ValidationError({"event_type": ["Nothing to update"]})

        event_type.update_details(name=command.name, description=command.description)
        current_domain.repository_for(EventType).add(event_type)

    @handle(DeleteEventType)
    def delete_event_type(self, command):
        repo = current_domain.repository_for(EventType)
        event_type = load(EventType, command.event_type_id, "event_type_id")
        assert_owned_by(event_type, command.organizer_id)

        packages = current_domain.repository_for(EventPackage).list_by_type(event_type.id)
        if packages:
            raise ConflictError({"event_type": ["Cannot delete event type that has packages"]})

        repo._dao.delete(event_type)
        logger.info(
            "Event type deleted",
            event_type_id=str(event_type.id),
            organizer_id=str(event_type.organizer_id),
        )
