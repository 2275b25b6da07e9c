"""Domain events for the User aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="User")
class OrganizerRegistered:
    """An event organizer signed up."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    username = String(required=True)
    organization_name = String(required=True)
    registered_at = DateTime(required=True)


@marketplace.event(part_of="User")
class RequesterRegistered:
    """A requester signed up."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    name = String(required=True)
    registered_at = DateTime(required=True)


@marketplace.event(part_of="User")
class ProfileUpdated:
    """A user changed their profile fields."""

    __version__ = 1

    user_id = Identifier(required=True)
    role = String(required=True)
    changed_fields = String(required=True)  # comma separated field names
    updated_at = DateTime(required=True)


@marketplace.event(part_of="User")
class OrganizerRated:
    """Feedback on a completed request moved an organizer's running rating."""

    __version__ = 1

    user_id = Identifier(required=True)
    score = Integer(required=True)
    rating = Float(required=True)
    review_count = Integer(required=True)
    rated_at = DateTime(required=True)
