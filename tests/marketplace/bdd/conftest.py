"""Shared BDD fixtures and step definitions for the request lifecycle."""

from datetime import UTC, datetime, timedelta

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

from marketplace import facade
from marketplace.errors import (
    AlreadyExistsError,
    ConflictError,
    InvalidStateError,
    InvalidTransitionError,
)
from marketplace.identity.directory import to_ref


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def booking():
    """Holds the request under test between steps."""
    return {"request": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('an organizer with an event type "{name}"'), target_fixture="catalog")
def organizer_with_event_type(name):
    organizer = to_ref(
        facade.register_organizer(
            email="olivia@dreamdays.example",
            username="olivia",
            organization_name="Dream Days Events",
        )
    )
    event_type = facade.create_event_type(organizer, name=name, description=f"{name} planning services")
    return {"organizer": organizer, "event_type": event_type, "package": None}


@given(parsers.cfparse('a package "{title}" priced at {price:d} for that event type'))
def package_for_event_type(catalog, title, price):
    catalog["package"] = facade.create_event_package(
        catalog["organizer"],
        event_type_id=catalog["event_type"].id,
        title=title,
        description=f"{title} package",
        price=float(price),
        location="Garden Venue",
    )


@given("a registered requester", target_fixture="requester")
def registered_requester():
    return to_ref(facade.register_requester(email="rita@example.com", name="Rita Alvarez"))


@given("a submitted request")
def submitted_request(catalog, requester, booking):
    booking["request"] = facade.submit_request(
        requester,
        package_id=catalog["package"].id,
        organizer_id=catalog["organizer"].id,
        event_date=datetime.now(UTC) + timedelta(days=30),
        attendees=50,
        comments="outdoor ceremony",
    )


@given(parsers.cfparse('the organizer has moved the request to "{status}"'))
def organizer_has_moved_request(catalog, booking, status):
    booking["request"] = facade.transition_request(catalog["organizer"], booking["request"].id, status)


@given("a completed request")
def completed_request(catalog, requester, booking):
    submitted_request(catalog, requester, booking)
    for status in ("Confirmed", "InProgress", "Completed"):
        booking["request"] = facade.transition_request(catalog["organizer"], booking["request"].id, status)


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the request status is "{status}"'))
def request_status_is(booking, status):
    assert facade.get_event_request(booking["request"].id).status == status


@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then("the action fails with an invalid transition error")
def action_fails_with_invalid_transition(error):
    assert isinstance(error["exc"], InvalidTransitionError)


@then("the action fails with an invalid state error")
def action_fails_with_invalid_state(error):
    assert isinstance(error["exc"], InvalidStateError)


@then("the action fails with an already exists error")
def action_fails_with_already_exists(error):
    assert isinstance(error["exc"], AlreadyExistsError)


@then("the action fails with a conflict error")
def action_fails_with_conflict(error):
    assert isinstance(error["exc"], ConflictError)
