"""SubmitEventRequest — a requester books one of an organizer's packages.

The package must exist, be Active, and belong to the organizer named on the
request; otherwise the request is refused with ``NotFoundError`` so callers
cannot probe inactive or foreign packages.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, Integer, Text
from protean.utils.globals import current_domain

from marketplace.catalog.event_package import EventPackage
from marketplace.domain import marketplace
from marketplace.errors import NotFoundError
from marketplace.ledger.event_request import EventRequest

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="EventRequest")
class SubmitEventRequest:
    requester_id = Identifier(required=True)
    package_id = Identifier(required=True)
    organizer_id = Identifier(required=True)
    event_date = DateTime(required=True)
    attendees = Integer(required=True)
    comments = Text(required=True)


def bookable_package(package_id, organizer_id):
    """Return the package if a request against it may be opened."""
    try:
        package = current_domain.repository_for(EventPackage).get(package_id)
    except ObjectNotFoundError:
        raise NotFoundError({"package_id": [f"Package {package_id} does not exist"]}) from None

    if not package.is_active:
        raise NotFoundError({"package_id": [f"Package {package_id} is not available"]})

    if str(package.organizer_id) != str(organizer_id):
        raise NotFoundError({"package_id": [f"Package {package_id} is not offered by organizer {organizer_id}"]})

    return package


@marketplace.command_handler(part_of=EventRequest)
class SubmitEventRequestHandler:
    @handle(SubmitEventRequest)
    def submit_event_request(self, command):
        package = bookable_package(command.package_id, command.organizer_id)

        request = EventRequest.submit(
            package_id=package.id,
            organizer_id=package.organizer_id,
            requester_id=command.requester_id,
            event_date=command.event_date,
            attendees=command.attendees,
            comments=command.comments,
        )
        current_domain.repository_for(EventRequest).add(request)

        logger.info(
            "Event request submitted",
            request_id=str(request.id),
            package_id=str(package.id),
            organizer_id=str(package.organizer_id),
        )
        return str(request.id)
