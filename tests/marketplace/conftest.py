import os
from datetime import UTC, datetime, timedelta

import pytest

from marketplace.notifications import reset_sink, set_sink
from marketplace.notifications.recording_adapter import RecordingNotificationSink


@pytest.fixture(scope="session")
def _marketplace_domain(request):
    """Initialize the marketplace domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from marketplace.domain import marketplace

    marketplace.init()
    return marketplace


@pytest.fixture(scope="session", autouse=True)
def setup_db(_marketplace_domain):
    from marketplace.utils.db import drop_db, setup_db

    setup_db(_marketplace_domain)

    yield

    drop_db(_marketplace_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_marketplace_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _marketplace_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def sink():
    """Route notifications into memory for the duration of a test."""
    recording = RecordingNotificationSink()
    set_sink(recording)
    yield recording
    reset_sink()


# ---------------------------------------------------------------------------
# Actors and catalog, created through the facade
# ---------------------------------------------------------------------------
def future(days=30):
    return datetime.now(UTC) + timedelta(days=days)


@pytest.fixture()
def organizer():
    from marketplace import facade
    from marketplace.identity.directory import to_ref

    return to_ref(
        facade.register_organizer(
            email="olivia@dreamdays.example",
            username="olivia",
            organization_name="Dream Days Events",
            mobile_number="+1-555-0101",
        )
    )


@pytest.fixture()
def other_organizer():
    from marketplace import facade
    from marketplace.identity.directory import to_ref

    return to_ref(
        facade.register_organizer(
            email="marco@bigtent.example",
            username="marco",
            organization_name="Big Tent Productions",
        )
    )


@pytest.fixture()
def requester():
    from marketplace import facade
    from marketplace.identity.directory import to_ref

    return to_ref(facade.register_requester(email="rita@example.com", name="Rita Alvarez", position="HR Lead"))


@pytest.fixture()
def other_requester():
    from marketplace import facade
    from marketplace.identity.directory import to_ref

    return to_ref(facade.register_requester(email="sam@example.com", name="Sam Lee"))


@pytest.fixture()
def wedding_type(organizer):
    from marketplace import facade

    return facade.create_event_type(organizer, name="Wedding", description="Complete wedding planning services")


@pytest.fixture()
def wedding_package(organizer, wedding_type):
    from marketplace import facade

    return facade.create_event_package(
        organizer,
        event_type_id=wedding_type.id,
        title="Classic Wedding",
        description="Ceremony and reception for up to 150 guests",
        price=5000.0,
        location="Garden Venue",
    )


@pytest.fixture()
def pending_request(requester, organizer, wedding_package):
    from marketplace import facade

    return facade.submit_request(
        requester,
        package_id=wedding_package.id,
        organizer_id=organizer.id,
        event_date=future(),
        attendees=50,
        comments="outdoor ceremony",
    )


@pytest.fixture()
def completed_request(organizer, pending_request):
    from marketplace import facade

    for status in ("Confirmed", "InProgress", "Completed"):
        facade.transition_request(organizer, pending_request.id, status)
    return facade.get_event_request(pending_request.id)


@pytest.fixture()
def in_days():
    """Timezone-aware moment ``days`` from now."""
    return future
