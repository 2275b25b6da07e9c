"""Forwards Request Ledger events to the notification sink.

Each party hears about moves made by the other side: requesters learn that
their request was confirmed, started or completed; organizers learn about new
requests and feedback. Cancellations go to whoever did not cancel.
"""

import structlog
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.ledger.event_request import EventRequest
from marketplace.ledger.events import (
    EventRequestCancelled,
    EventRequestCompleted,
    EventRequestConfirmed,
    EventRequestStarted,
    EventRequestSubmitted,
    FeedbackSubmitted,
)
from marketplace.notifications import get_sink

logger = structlog.get_logger(__name__)


@marketplace.event_handler(part_of=EventRequest)
class RequestNotificationsHandler:
    """Reacts to EventRequest events by notifying the other party."""

    @handle(EventRequestSubmitted)
    def on_submitted(self, event: EventRequestSubmitted) -> None:
        get_sink().notify(
            event.organizer_id,
            "request_submitted",
            f"New request for {event.attendees} attendees",
            request_id=str(event.request_id),
            requester_id=str(event.requester_id),
        )

    @handle(EventRequestConfirmed)
    def on_confirmed(self, event: EventRequestConfirmed) -> None:
        get_sink().notify(
            event.requester_id,
            "request_confirmed",
            "Your event request was confirmed",
            request_id=str(event.request_id),
        )

    @handle(EventRequestStarted)
    def on_started(self, event: EventRequestStarted) -> None:
        get_sink().notify(
            event.requester_id,
            "request_started",
            "Work on your event has started",
            request_id=str(event.request_id),
        )

    @handle(EventRequestCompleted)
    def on_completed(self, event: EventRequestCompleted) -> None:
        get_sink().notify(
            event.requester_id,
            "request_completed",
            "Your event is complete; feedback is now open",
            request_id=str(event.request_id),
        )

    @handle(EventRequestCancelled)
    def on_cancelled(self, event: EventRequestCancelled) -> None:
        if event.cancelled_by == "organizer":
            recipient = event.requester_id
        else:
            recipient = event.organizer_id
        get_sink().notify(
            recipient,
            "request_cancelled",
            f"Request was cancelled by the {event.cancelled_by}",
            request_id=str(event.request_id),
            previous_status=event.previous_status,
        )

    @handle(FeedbackSubmitted)
    def on_feedback(self, event: FeedbackSubmitted) -> None:
        get_sink().notify(
            event.organizer_id,
            "feedback_received",
            f"You received a {event.rating}-star rating",
            request_id=str(event.request_id),
        )
        logger.debug("Feedback notification forwarded", request_id=str(event.request_id))
