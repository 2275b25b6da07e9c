"""EventRequest aggregate (CQRS) — the core of the Request Ledger.

A requester asks an organizer to plan an event from one of the organizer's
packages. The organizer drives the request forward; either party may back out
before work starts. Feedback is write-once and only possible once the event is
completed.

State Machine (5 states):
    PENDING → CONFIRMED → IN_PROGRESS → COMPLETED     (organizer)
    PENDING | CONFIRMED → CANCELLED                   (organizer or requester)
    COMPLETED, CANCELLED → (terminal)
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text, ValueObject

from marketplace.domain import marketplace
from marketplace.errors import (
    AlreadyExistsError,
    ConcurrencyError,
    InvalidStateError,
    InvalidTransitionError,
    NotAuthorizedError,
)
from marketplace.ledger.events import (
    EventRequestCancelled,
    EventRequestCompleted,
    EventRequestConfirmed,
    EventRequestStarted,
    EventRequestSubmitted,
    FeedbackSubmitted,
)
from marketplace.ratings.aggregator import validate_score


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class RequestStatus(Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Party(Enum):
    """The role an actor plays on one particular request."""

    ORGANIZER = "organizer"
    REQUESTER = "requester"


# ---------------------------------------------------------------------------
# State Machine
# ---------------------------------------------------------------------------
# (from, to) -> parties allowed to make the move
_TRANSITIONS = {
    (RequestStatus.PENDING, RequestStatus.CONFIRMED): {Party.ORGANIZER},
    (RequestStatus.PENDING, RequestStatus.CANCELLED): {Party.ORGANIZER, Party.REQUESTER},
    (RequestStatus.CONFIRMED, RequestStatus.IN_PROGRESS): {Party.ORGANIZER},
    (RequestStatus.CONFIRMED, RequestStatus.CANCELLED): {Party.ORGANIZER, Party.REQUESTER},
    (RequestStatus.IN_PROGRESS, RequestStatus.COMPLETED): {Party.ORGANIZER},
}

TERMINAL_STATES = frozenset({RequestStatus.COMPLETED, RequestStatus.CANCELLED})


def allowed_transitions():
    """Return a copy of the transition table."""
    return {pair: set(parties) for pair, parties in _TRANSITIONS.items()}


def _as_aware(moment):
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@marketplace.value_object(part_of="EventRequest")
class Feedback:
    """The requester's rating and comment on a completed event."""

    rating = Integer(required=True)
    comment = Text(required=True)
    submitted_at = DateTime()

    @invariant.post
    def rating_must_be_in_range(self):
        if self.rating is not None:
            validate_score(self.rating)

    @invariant.post
    def comment_must_not_be_blank(self):
        if self.comment is not None and not self.comment.strip():
            raise ValidationError({"comment": ["Feedback comment cannot be empty"]})


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@marketplace.aggregate
class EventRequest:
    """A requester's booking request against an organizer's package."""

    package_id = Identifier(required=True)
    organizer_id = Identifier(required=True)
    requester_id = Identifier(required=True)

    event_date = DateTime(required=True)
    request_date = DateTime()
    attendees = Integer(required=True)
    comments = Text(required=True)

    status = String(choices=RequestStatus, default=RequestStatus.PENDING.value)
    cancelled_by = String(max_length=20)
    feedback = ValueObject(Feedback)

    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def attendees_must_be_positive(self):
        if self.attendees is not None and self.attendees <= 0:
            raise ValidationError({"attendees": ["Attendees must be greater than zero"]})

    @invariant.post
    def comments_must_not_be_blank(self):
        if self.comments is not None and not self.comments.strip():
            raise ValidationError({"comments": ["Comments cannot be empty"]})

    @invariant.post
    def feedback_only_on_completed_requests(self):
        if self.feedback is not None and self.status != RequestStatus.COMPLETED.value:
            raise ValidationError({"feedback": ["Feedback is only allowed on completed requests"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(cls, package_id, organizer_id, requester_id, event_date, attendees, comments):
        """Open a new request in PENDING status."""
        now = datetime.now(UTC)

        if event_date is None:
            raise ValidationError({"event_date": ["Event date is required"]})
        event_date = _as_aware(event_date)
        if event_date <= now:
            raise ValidationError({"event_date": ["Event date must be in the future"]})

        if isinstance(attendees, bool) or not isinstance(attendees, int) or attendees <= 0:
            raise ValidationError({"attendees": ["Attendees must be greater than zero"]})

        if not comments or not comments.strip():
            raise ValidationError({"comments": ["Comments cannot be empty"]})

        request = cls(
            package_id=package_id,
            organizer_id=organizer_id,
            requester_id=requester_id,
            event_date=event_date,
            request_date=now,
            attendees=attendees,
            comments=comments,
            status=RequestStatus.PENDING.value,
            feedback=None,
            updated_at=now,
        )

        request.raise_(
            EventRequestSubmitted(
                request_id=str(request.id),
                package_id=str(package_id),
                organizer_id=str(organizer_id),
                requester_id=str(requester_id),
                event_date=event_date,
                attendees=attendees,
                comments=comments,
                requested_at=now,
            )
        )

        return request

    # -------------------------------------------------------------------
    # Parties and optimistic checks
    # -------------------------------------------------------------------
    def party_of(self, actor_id):
        """Return which side of the request ``actor_id`` is on."""
        if str(actor_id) == str(self.organizer_id):
            return Party.ORGANIZER
        if str(actor_id) == str(self.requester_id):
            return Party.REQUESTER
        raise NotAuthorizedError({"actor_id": [f"{actor_id} is not a party to request {self.id}"]})

    def assert_status(self, expected_status):
        """Reject the write if the request moved since the caller last read it."""
        if expected_status is not None and expected_status != self.status:
            raise ConcurrencyError(
                {"status": [f"Request is {self.status}, expected {expected_status}; reload and retry"]}
            )

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def transition_to(self, target_status, actor_id):
        """Move the request to ``target_status`` on behalf of ``actor_id``."""
        try:
            target = RequestStatus(target_status)
        except ValueError:
            raise InvalidTransitionError({"status": [f"Unknown request status {target_status}"]}) from None

        party = self.party_of(actor_id)
        current = RequestStatus(self.status)

        if party not in _TRANSITIONS.get((current, target), set()):
            raise InvalidTransitionError(
                {"status": [f"Cannot transition from {current.value} to {target.value} as {party.value}"]}
            )

        now = datetime.now(UTC)
        with atomic_change(self):
            self.status = target.value
            if target == RequestStatus.CANCELLED:
                self.cancelled_by = party.value
            self.updated_at = now

        self._raise_transition_event(current, target, party, now)

    def cancel(self, actor_id):
        """Back out of a PENDING or CONFIRMED request."""
        self.transition_to(RequestStatus.CANCELLED, actor_id)

    def _raise_transition_event(self, previous, target, party, now):
        ids = {
            "request_id": str(self.id),
            "organizer_id": str(self.organizer_id),
            "requester_id": str(self.requester_id),
        }
        if target == RequestStatus.CONFIRMED:
            self.raise_(EventRequestConfirmed(**ids, confirmed_at=now))
        elif target == RequestStatus.IN_PROGRESS:
            self.raise_(EventRequestStarted(**ids, started_at=now))
        elif target == RequestStatus.COMPLETED:
            self.raise_(EventRequestCompleted(**ids, completed_at=now))
        else:
            self.raise_(
                EventRequestCancelled(
                    **ids,
                    previous_status=previous.value,
                    cancelled_by=party.value,
                    cancelled_at=now,
                )
            )

    # -------------------------------------------------------------------
    # Feedback
    # -------------------------------------------------------------------
    def attach_feedback(self, rating, comment):
        """Record the requester's feedback. Only once, only on COMPLETED requests."""
        if self.status != RequestStatus.COMPLETED.value:
            raise InvalidStateError({"status": [f"Feedback requires a Completed request, not {self.status}"]})

        if self.feedback is not None:
            raise AlreadyExistsError({"feedback": ["Feedback was already submitted for this request"]})

        validate_score(rating)
        now = datetime.now(UTC)
        feedback = Feedback(rating=rating, comment=comment, submitted_at=now)

        with atomic_change(self):
            self.feedback = feedback
            self.updated_at = now

        self.raise_(
            FeedbackSubmitted(
                request_id=str(self.id),
                organizer_id=str(self.organizer_id),
                requester_id=str(self.requester_id),
                rating=rating,
                comment=comment,
                submitted_at=now,
            )
        )
        return feedback
