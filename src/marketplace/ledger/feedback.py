"""SubmitFeedback — the requester rates a completed event.

Feedback and the organizer's rating change together: both aggregates are
loaded and mutated before either is handed to its repository, and the
handler's unit of work commits them as one. If the organizer cannot be rated,
the feedback is not stored either.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.identity.user import User
from marketplace.ledger.event_request import EventRequest
from marketplace.shared.lookup import load

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="EventRequest")
class SubmitFeedback:
    request_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text(required=True)


@marketplace.command_handler(part_of=EventRequest)
class SubmitFeedbackHandler:
    @handle(SubmitFeedback)
    def submit_feedback(self, command):
        request = load(EventRequest, command.request_id, "request_id")
        request.attach_feedback(rating=command.rating, comment=command.comment)

        organizer = load(User, request.organizer_id, "organizer_id")
        summary = organizer.record_rating(command.rating)

        current_domain.repository_for(User).add(organizer)
        current_domain.repository_for(EventRequest).add(request)

        logger.info(
            "Feedback submitted",
            request_id=str(request.id),
            organizer_id=str(organizer.id),
            rating=summary.rating,
            review_count=summary.review_count,
        )
