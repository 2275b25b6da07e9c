"""Application tests for feedback and the organizer rating update."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from marketplace.catalog.management import CreateEventType
from marketplace.catalog.packages import CreateEventPackage
from marketplace.errors import AlreadyExistsError, InvalidStateError, NotFoundError
from marketplace.identity.user import User
from marketplace.ledger.event_request import EventRequest
from marketplace.ledger.feedback import SubmitFeedback
from marketplace.ledger.submission import SubmitEventRequest
from marketplace.ledger.transitions import TransitionEventRequest


def _feedback(request_id, rating=5, comment="Flawless day"):
    current_domain.process(SubmitFeedback(request_id=request_id, rating=rating, comment=comment), asynchronous=False)


def _completed_request_for(organizer_id, requester_id, event_date):
    """Drive a request to Completed for an organizer id that need not be a registered user."""
    event_type_id = current_domain.process(
        CreateEventType(organizer_id=organizer_id, name="Wedding", description="Wedding planning"),
        asynchronous=False,
    )
    package_id = current_domain.process(
        CreateEventPackage(
            organizer_id=organizer_id,
            event_type_id=event_type_id,
            title="Classic Wedding",
            description="Ceremony and reception",
            price=5000.0,
            location="Garden Venue",
        ),
        asynchronous=False,
    )
    request_id = current_domain.process(
        SubmitEventRequest(
            requester_id=requester_id,
            package_id=package_id,
            organizer_id=organizer_id,
            event_date=event_date,
            attendees=50,
            comments="outdoor ceremony",
        ),
        asynchronous=False,
    )
    for status in ("Confirmed", "InProgress", "Completed"):
        current_domain.process(
            TransitionEventRequest(request_id=request_id, actor_id=organizer_id, new_status=status),
            asynchronous=False,
        )
    return request_id


class TestSubmitFeedback:
    def test_feedback_updates_organizer_rating(self, organizer, completed_request):
        _feedback(completed_request.id, rating=4)

        request = current_domain.repository_for(EventRequest).get(completed_request.id)
        assert request.feedback.rating == 4
        assert request.feedback.comment == "Flawless day"

        user = current_domain.repository_for(User).get(organizer.id)
        assert user.rating == 4.0
        assert user.review_count == 1

    def test_second_feedback_refused_and_rating_counted_once(self, organizer, completed_request):
        _feedback(completed_request.id, rating=5)

        with pytest.raises(AlreadyExistsError):
            _feedback(completed_request.id, rating=1)

        user = current_domain.repository_for(User).get(organizer.id)
        assert user.rating == 5.0
        assert user.review_count == 1

    def test_feedback_on_pending_request(self, organizer, pending_request):
        with pytest.raises(InvalidStateError):
            _feedback(pending_request.id)

        user = current_domain.repository_for(User).get(organizer.id)
        assert user.review_count == 0

    def test_invalid_rating(self, organizer, completed_request):
        with pytest.raises(ValidationError):
            _feedback(completed_request.id, rating=7)

        assert current_domain.repository_for(EventRequest).get(completed_request.id).feedback is None
        assert current_domain.repository_for(User).get(organizer.id).review_count == 0

    def test_ratings_accumulate_across_requests(self, organizer, requester, wedding_package, in_days):
        from marketplace import facade

        for score in (4, 5, 3):
            request = facade.submit_request(
                requester,
                package_id=wedding_package.id,
                organizer_id=organizer.id,
                event_date=in_days(10),
                attendees=20,
                comments="family gathering",
            )
            for status in ("Confirmed", "InProgress", "Completed"):
                facade.transition_request(organizer, request.id, status)
            _feedback(request.id, rating=score)

        user = current_domain.repository_for(User).get(organizer.id)
        assert user.rating == pytest.approx(4.0)
        assert user.review_count == 3


class TestFeedbackAtomicity:
    def test_missing_organizer_blocks_feedback(self, requester, in_days):
        request_id = _completed_request_for("org-ghost", requester.id, in_days(5))

        with pytest.raises(NotFoundError):
            _feedback(request_id)

        assert current_domain.repository_for(EventRequest).get(request_id).feedback is None

    def test_unratable_organizer_blocks_feedback(self, requester, other_requester, in_days):
        # The "organizer" on this request is a requester account and cannot be rated
        request_id = _completed_request_for(other_requester.id, requester.id, in_days(5))

        with pytest.raises(InvalidStateError):
            _feedback(request_id)

        assert current_domain.repository_for(EventRequest).get(request_id).feedback is None
        assert current_domain.repository_for(User).get(other_requester.id).review_count == 0
