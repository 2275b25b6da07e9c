"""Request status changes — commands and handler.

Each handler re-reads the request inside its unit of work and, when the
caller passes ``expected_status``, refuses to write over a status it did not
see.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.ledger.event_request import EventRequest
from marketplace.shared.lookup import load

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="EventRequest")
class TransitionEventRequest:
    request_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    new_status = String(required=True, max_length=20)
    expected_status = String(max_length=20)


@marketplace.command(part_of="EventRequest")
class CancelEventRequest:
    request_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    expected_status = String(max_length=20)


@marketplace.command_handler(part_of=EventRequest)
class RequestTransitionsHandler:
    @handle(TransitionEventRequest)
    def transition_event_request(self, command):
        request = load(EventRequest, command.request_id, "request_id")
        request.assert_status(command.expected_status)

        previous = request.status
        request.transition_to(command.new_status, command.actor_id)
        current_domain.repository_for(EventRequest).add(request)

        logger.info(
            "Event request status changed",
            request_id=str(request.id),
            previous_status=previous,
            status=request.status,
            actor_id=str(command.actor_id),
        )

    @handle(CancelEventRequest)
    def cancel_event_request(self, command):
        request = load(EventRequest, command.request_id, "request_id")
        request.assert_status(command.expected_status)

        request.cancel(command.actor_id)
        current_domain.repository_for(EventRequest).add(request)

        logger.info(
            "Event request cancelled",
            request_id=str(request.id),
            cancelled_by=request.cancelled_by,
        )
