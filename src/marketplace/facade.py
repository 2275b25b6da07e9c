"""Marketplace facade — the single entry point for coordinated operations.

Every mutating call takes the acting user as an explicit ``UserRef`` and
dispatches a command through the domain, so each write runs inside its own
unit of work. Reads go straight to the repositories and add no rules of their
own.

Errors from the domain propagate unchanged. The one translation is Protean's
``ExpectedVersionError`` (a stale aggregate lost a write race), which surfaces
as ``ConcurrencyError`` like the explicit ``expected_status`` check does.
"""

from contextlib import contextmanager
from datetime import date

from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

from marketplace.catalog.event_package import EventPackage
from marketplace.catalog.event_type import EventType
from marketplace.catalog.management import CreateEventType, DeleteEventType, UpdateEventType
from marketplace.catalog.packages import CreateEventPackage, DeleteEventPackage, UpdateEventPackage
from marketplace.errors import ConcurrencyError, NotAuthorizedError, NotFoundError
from marketplace.identity.port import UserRef
from marketplace.identity.registration import RegisterOrganizer, RegisterRequester, UpdateProfile
from marketplace.identity.user import User
from marketplace.insights import dashboards
from marketplace.ledger.event_request import EventRequest
from marketplace.ledger.feedback import SubmitFeedback
from marketplace.ledger.submission import SubmitEventRequest
from marketplace.ledger.transitions import CancelEventRequest, TransitionEventRequest
from marketplace.shared.lookup import load


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _require_actor(actor: UserRef | None) -> UserRef:
    if actor is None:
        raise NotAuthorizedError({"actor": ["Sign in required"]})
    return actor


def _require_organizer(actor: UserRef | None) -> UserRef:
    actor = _require_actor(actor)
    if not actor.is_organizer:
        raise NotAuthorizedError({"actor": ["Only organizers can manage the catalog"]})
    return actor


def _require_requester(actor: UserRef | None) -> UserRef:
    actor = _require_actor(actor)
    if not actor.is_requester:
        raise NotAuthorizedError({"actor": ["Only requesters can submit event requests"]})
    return actor


@contextmanager
def _optimistic():
    try:
        yield
    except ExpectedVersionError as exc:
        raise ConcurrencyError({"version": [f"Entity was modified concurrently; reload and retry ({exc})"]}) from exc


def _process(command):
    with _optimistic():
        return current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------
def register_organizer(email, username, organization_name, mobile_number=None) -> User:
    user_id = _process(
        RegisterOrganizer(
            email=email,
            username=username,
            organization_name=organization_name,
            mobile_number=mobile_number,
        )
    )
    return load(User, user_id, "user_id")


def register_requester(email, name, position=None) -> User:
    user_id = _process(RegisterRequester(email=email, name=name, position=position))
    return load(User, user_id, "user_id")


def update_profile(actor: UserRef, **changes) -> User:
    actor = _require_actor(actor)
    _process(UpdateProfile(user_id=actor.id, **changes))
    return load(User, actor.id, "user_id")


def list_organizers(search: str | None = None) -> list[User]:
    """Organizers sorted by rating, best first, optionally filtered by name."""
    organizers = current_domain.repository_for(User).organizers()
    if search:
        needle = search.strip().lower()
        organizers = [
            o
            for o in organizers
            if needle in (o.organization_name or "").lower() or needle in (o.username or "").lower()
        ]
    return sorted(organizers, key=lambda o: o.rating or 0.0, reverse=True)


def get_organizer(organizer_id) -> User:
    user = load(User, organizer_id, "organizer_id")
    if not user.is_organizer:
        raise NotFoundError({"organizer_id": [f"Organizer {organizer_id} does not exist"]})
    return user


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------
def create_event_type(actor: UserRef, name, description) -> EventType:
    actor = _require_organizer(actor)
    event_type_id = _process(CreateEventType(organizer_id=actor.id, name=name, description=description))
    return load(EventType, event_type_id, "event_type_id")


def update_event_type(actor: UserRef, event_type_id, name=None, description=None) -> EventType:
    actor = _require_organizer(actor)
    _process(
        UpdateEventType(
            event_type_id=event_type_id,
            organizer_id=actor.id,
            name=name,
            description=description,
        )
    )
    return load(EventType, event_type_id, "event_type_id")


def delete_event_type(actor: UserRef, event_type_id) -> None:
    actor = _require_organizer(actor)
    _process(DeleteEventType(event_type_id=event_type_id, organizer_id=actor.id))


def get_event_type(event_type_id) -> EventType:
    return load(EventType, event_type_id, "event_type_id")


def list_event_types(organizer_id) -> list[EventType]:
    return current_domain.repository_for(EventType).list_by_organizer(organizer_id)


def create_event_package(
    actor: UserRef, event_type_id, title, description, price, location, image_url=None
) -> EventPackage:
    actor = _require_organizer(actor)
    package_id = _process(
        CreateEventPackage(
            organizer_id=actor.id,
            event_type_id=event_type_id,
            title=title,
            description=description,
            price=price,
            location=location,
            image_url=image_url,
        )
    )
    return load(EventPackage, package_id, "package_id")


def update_event_package(actor: UserRef, package_id, **changes) -> EventPackage:
    """Partial update; ``organizer_id`` is never accepted."""
    actor = _require_organizer(actor)
    if "organizer_id" in changes:
        raise NotAuthorizedError({"organizer_id": ["Package ownership cannot be changed"]})
    _process(UpdateEventPackage(package_id=package_id, organizer_id=actor.id, **changes))
    return load(EventPackage, package_id, "package_id")


def delete_event_package(actor: UserRef, package_id) -> None:
    actor = _require_organizer(actor)
    _process(DeleteEventPackage(package_id=package_id, organizer_id=actor.id))


def get_event_package(package_id) -> EventPackage:
    return load(EventPackage, package_id, "package_id")


def list_packages(organizer_id) -> list[EventPackage]:
    return current_domain.repository_for(EventPackage).list_by_organizer(organizer_id)


def list_active_packages(organizer_id) -> list[EventPackage]:
    return current_domain.repository_for(EventPackage).list_active_by_organizer(organizer_id)


def list_packages_by_type(event_type_id) -> list[EventPackage]:
    return current_domain.repository_for(EventPackage).list_by_type(event_type_id)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
def submit_request(actor: UserRef, package_id, organizer_id, event_date, attendees, comments) -> EventRequest:
    actor = _require_requester(actor)
    request_id = _process(
        SubmitEventRequest(
            requester_id=actor.id,
            package_id=package_id,
            organizer_id=organizer_id,
            event_date=event_date,
            attendees=attendees,
            comments=comments,
        )
    )
    return load(EventRequest, request_id, "request_id")


def transition_request(actor: UserRef, request_id, new_status, expected_status=None) -> EventRequest:
    actor = _require_actor(actor)
    _process(
        TransitionEventRequest(
            request_id=request_id,
            actor_id=actor.id,
            new_status=new_status,
            expected_status=expected_status,
        )
    )
    return load(EventRequest, request_id, "request_id")


def cancel_request(actor: UserRef, request_id, expected_status=None) -> EventRequest:
    actor = _require_actor(actor)
    _process(CancelEventRequest(request_id=request_id, actor_id=actor.id, expected_status=expected_status))
    return load(EventRequest, request_id, "request_id")


def submit_feedback(request_id, rating, comment) -> EventRequest:
    """Attach feedback and fold the rating into the organizer's summary.

    The caller must already have established that the acting user is the
    request's requester.
    """
    _process(SubmitFeedback(request_id=request_id, rating=rating, comment=comment))
    return load(EventRequest, request_id, "request_id")


def get_event_request(request_id) -> EventRequest:
    return load(EventRequest, request_id, "request_id")


def list_requests_for_organizer(organizer_id, status=None) -> list[EventRequest]:
    return current_domain.repository_for(EventRequest).list_by_organizer(organizer_id, status)


def list_requests_for_requester(requester_id, status=None) -> list[EventRequest]:
    return current_domain.repository_for(EventRequest).list_by_requester(requester_id, status)


# ---------------------------------------------------------------------------
# Dashboards
# ---------------------------------------------------------------------------
def organizer_dashboard(organizer_id) -> dashboards.OrganizerDashboard:
    return dashboards.organizer_dashboard(organizer_id)


def requester_dashboard(requester_id) -> dashboards.RequesterDashboard:
    return dashboards.requester_dashboard(requester_id)


def events_on_date(organizer_id, day: date) -> list[EventRequest]:
    return dashboards.events_on_date(organizer_id, day)
