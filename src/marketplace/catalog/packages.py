"""Event package management — commands and handler.

A package must point at an event type owned by the same organizer, and cannot
be deleted once any event request references it.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.catalog.event_package import EventPackage
from marketplace.catalog.event_type import EventType
from marketplace.catalog.management import assert_owned_by
from marketplace.domain import marketplace
from marketplace.errors import ConflictError
from marketplace.shared.lookup import load

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="EventPackage")
class CreateEventPackage:
    organizer_id: Identifier(required=True)
    event_type_id: Identifier(required=True)
    title: String(required=True, max_length=200)
    description: Text(required=True)
    price: Float(required=True)
    location: String(required=True, max_length=255)
    image_url: String(max_length=500)


@marketplace.command(part_of="EventPackage")
class UpdateEventPackage:
    package_id: Identifier(required=True)
    organizer_id: Identifier(required=True)
    event_type_id: Identifier()
    title: String(max_length=200)
    description: Text()
    price: Float()
    location: String(max_length=255)
    image_url: String(max_length=500)
    status: String(max_length=20)


@marketplace.command(part_of="EventPackage")
class DeleteEventPackage:
    package_id: Identifier(required=True)
    organizer_id: Identifier(required=True)


_EDITABLE_FIELDS = ("event_type_id", "title", "description", "price", "location", "image_url", "status")


def _assert_type_belongs_to(event_type_id, organizer_id):
    """The referenced event type must exist and be owned by the same organizer."""
    try:
        event_type = current_domain.repository_for(EventType).get(event_type_id)
    except ObjectNotFoundError:
        raise ValidationError({"event_type_id": [f"Event type {event_type_id} does not exist"]}) from None

    if str(event_type.organizer_id) != str(organizer_id):
        raise ValidationError({"event_type_id": ["Event type belongs to another organizer"]})


@marketplace.command_handler(part_of=EventPackage)
class ManageEventPackagesHandler:
    @handle(CreateEventPackage)
    def create_event_package(self, command):
        _assert_type_belongs_to(command.event_type_id, command.organizer_id)

        package = EventPackage.create(
            organizer_id=command.organizer_id,
            event_type_id=command.event_type_id,
            title=command.title,
            description=command.description,
            price=command.price,
            location=command.location,
            image_url=command.image_url,
        )
        current_domain.repository_for(EventPackage).add(package)
        return str(package.id)

    @handle(UpdateEventPackage)
    def update_event_package(self, command):
        package = load(EventPackage, command.package_id, "package_id")
        assert_owned_by(package, command.organizer_id)

        changes = {field: getattr(command, field) for field in _EDITABLE_FIELDS if getattr(command, field) is not None}
        if not changes:
            raise ValidationError({"package": ["Nothing to update"]})

        if "event_type_id" in changes:
            _assert_type_belongs_to(changes["event_type_id"], package.organizer_id)

        package.update_details(**changes)
        current_domain.repository_for(EventPackage).add(package)

    @handle(DeleteEventPackage)
    def delete_event_package(self, command):
        from marketplace.ledger.event_request import EventRequest

        repo = current_domain.repository_for(EventPackage)
        package = load(EventPackage, command.package_id, "package_id")
        assert_owned_by(package, command.organizer_id)

        if current_domain.repository_for(EventRequest).list_by_package(package.id):
            raise ConflictError({"package": ["Cannot delete package that has requests"]})

        repo._dao.delete(package)
        logger.info(
            "Event package deleted",
            package_id=str(package.id),
            organizer_id=str(package.organizer_id),
        )
