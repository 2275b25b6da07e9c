"""Domain events for the EventRequest aggregate.

Events feed the notification sink and any downstream projection; the
request's own state never depends on them.
"""

from protean.fields import DateTime, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="EventRequest")
class EventRequestSubmitted:
    """A requester asked an organizer to plan an event from one of their packages."""

    __version__ = 1

    request_id = Identifier(required=True)
    package_id = Identifier(required=True)
    organizer_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    event_date = DateTime(required=True)
    attendees = Integer(required=True)
    comments = Text(required=True)
    requested_at = DateTime(required=True)


@marketplace.event(part_of="EventRequest")
class EventRequestConfirmed:
    __version__ = 1

    request_id = Identifier(required=True)
    organizer_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    confirmed_at = DateTime(required=True)


@marketplace.event(part_of="EventRequest")
class EventRequestStarted:
    __version__ = 1

    request_id = Identifier(required=True)
    organizer_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    started_at = DateTime(required=True)


@marketplace.event(part_of="EventRequest")
class EventRequestCompleted:
    __version__ = 1

    request_id = Identifier(required=True)
    organizer_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    completed_at = DateTime(required=True)


@marketplace.event(part_of="EventRequest")
class EventRequestCancelled:
    __version__ = 1

    request_id = Identifier(required=True)
    organizer_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    previous_status = String(required=True)
    cancelled_by = String(required=True)  # "organizer" or "requester"
    cancelled_at = DateTime(required=True)


@marketplace.event(part_of="EventRequest")
class FeedbackSubmitted:
    """The requester rated a completed event."""

    __version__ = 1

    request_id = Identifier(required=True)
    organizer_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text(required=True)
    submitted_at = DateTime(required=True)
