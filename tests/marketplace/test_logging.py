"""Tests for the marketplace structlog processors and request context."""

import pytest
import structlog

from marketplace.utils.logging import (
    SERVICE_NAME,
    add_service_info,
    bind_request_context,
    clear_context,
    drop_empty_context,
)


@pytest.fixture(autouse=True)
def fresh_context():
    clear_context()
    yield
    clear_context()


class TestProcessors:
    def test_service_info_is_stamped(self, monkeypatch):
        monkeypatch.setenv("ENV", "staging")

        event = add_service_info(None, "info", {"event": "Request submitted"})

        assert event["service"] == SERVICE_NAME
        assert event["env"] == "staging"

    def test_service_info_keeps_explicit_values(self):
        event = add_service_info(None, "info", {"event": "Seeded", "service": "manage"})
        assert event["service"] == "manage"

    def test_empty_context_is_dropped(self):
        event = drop_empty_context(
            None, "info", {"event": "Request submitted", "actor_id": None, "request_id": "abc", "attendees": 0}
        )
        assert event == {"event": "Request submitted", "request_id": "abc", "attendees": 0}


class TestRequestContext:
    def test_binds_request_and_actor(self):
        request_id = bind_request_context("POST", "/event-requests", actor_id="user-1", request_id="req-42")

        assert request_id == "req-42"
        assert structlog.contextvars.get_contextvars() == {
            "request_id": "req-42",
            "method": "POST",
            "path": "/event-requests",
            "actor_id": "user-1",
        }

    def test_generates_request_id_when_missing(self):
        request_id = bind_request_context("GET", "/organizers")

        assert request_id
        context = structlog.contextvars.get_contextvars()
        assert context["request_id"] == request_id
        assert context["actor_id"] is None

    def test_clear_context(self):
        bind_request_context("GET", "/health", actor_id="user-1")
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}
