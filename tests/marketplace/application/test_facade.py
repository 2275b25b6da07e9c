"""Application tests for the marketplace facade."""

import pytest
from protean import UnitOfWork, current_domain
from protean.exceptions import ExpectedVersionError, ValidationError

from marketplace import facade
from marketplace.errors import (
    ConcurrencyError,
    ConflictError,
    InvalidStateError,
    InvalidTransitionError,
    NotAuthorizedError,
    NotFoundError,
)
from marketplace.identity.port import UserRef
from marketplace.identity.user import User
from marketplace.ledger.event_request import EventRequest


class TestWeddingScenario:
    def test_confirm_then_skip_to_completed_fails(self, organizer, requester, in_days):
        wedding = facade.create_event_type(organizer, name="Wedding", description="Complete wedding planning")
        package = facade.create_event_package(
            organizer,
            event_type_id=wedding.id,
            title="Classic Wedding",
            description="Ceremony and reception",
            price=5000.0,
            location="Garden Venue",
        )

        request = facade.submit_request(
            requester,
            package_id=package.id,
            organizer_id=organizer.id,
            event_date=in_days(60),
            attendees=50,
            comments="outdoor ceremony",
        )
        assert request.status == "Pending"

        confirmed = facade.transition_request(organizer, request.id, "Confirmed")
        assert confirmed.status == "Confirmed"

        with pytest.raises(InvalidTransitionError):
            facade.transition_request(organizer, request.id, "Completed")
        assert facade.get_event_request(request.id).status == "Confirmed"

    def test_cancelled_request_refuses_feedback(self, requester, pending_request):
        cancelled = facade.cancel_request(requester, pending_request.id)
        assert cancelled.status == "Cancelled"

        with pytest.raises(InvalidStateError):
            facade.submit_feedback(pending_request.id, rating=5, comment="Never happened")


class TestRoleChecks:
    def test_requester_cannot_create_event_types(self, requester):
        with pytest.raises(NotAuthorizedError):
            facade.create_event_type(requester, name="Wedding", description="Complete wedding planning")

    def test_organizer_cannot_submit_requests(self, organizer, wedding_package, in_days):
        with pytest.raises(NotAuthorizedError):
            facade.submit_request(
                organizer,
                package_id=wedding_package.id,
                organizer_id=organizer.id,
                event_date=in_days(10),
                attendees=10,
                comments="for myself",
            )

    def test_missing_actor(self, pending_request):
        with pytest.raises(NotAuthorizedError):
            facade.cancel_request(None, pending_request.id)

    def test_other_organizer_cannot_delete_type(self, other_organizer, wedding_type):
        with pytest.raises(NotAuthorizedError):
            facade.delete_event_type(other_organizer, wedding_type.id)

    def test_package_owner_cannot_change(self, organizer, wedding_package):
        with pytest.raises(NotAuthorizedError):
            facade.update_event_package(organizer, wedding_package.id, organizer_id="someone-else")


class TestCatalogThroughFacade:
    def test_delete_type_with_package_conflicts(self, organizer, wedding_type, wedding_package):
        with pytest.raises(ConflictError):
            facade.delete_event_type(organizer, wedding_type.id)
        assert facade.get_event_type(wedding_type.id).name == "Wedding"

    def test_delete_type_without_packages(self, organizer, wedding_type):
        facade.delete_event_type(organizer, wedding_type.id)
        with pytest.raises(NotFoundError):
            facade.get_event_type(wedding_type.id)

    def test_delete_package_with_requests_conflicts(self, organizer, wedding_package, pending_request):
        with pytest.raises(ConflictError) as exc:
            facade.delete_event_package(organizer, wedding_package.id)
        assert "Cannot delete package that has requests" in str(exc.value)

    def test_update_event_type(self, organizer, wedding_type):
        updated = facade.update_event_type(organizer, wedding_type.id, description="Ceremony and reception")
        assert updated.description == "Ceremony and reception"
        assert updated.name == "Wedding"

    def test_active_package_listing(self, organizer, wedding_type, wedding_package):
        second = facade.create_event_package(
            organizer,
            event_type_id=wedding_type.id,
            title="Elopement",
            description="Just the two of you",
            price=900.0,
            location="City Hall",
        )
        facade.update_event_package(organizer, second.id, status="Inactive")

        assert {p.title for p in facade.list_packages(organizer.id)} == {"Classic Wedding", "Elopement"}
        assert [p.title for p in facade.list_active_packages(organizer.id)] == ["Classic Wedding"]
        assert len(facade.list_packages_by_type(wedding_type.id)) == 2

    @pytest.mark.slow
    def test_large_catalog_is_listed_in_full(self, organizer, wedding_type):
        for i in range(110):
            facade.create_event_package(
                organizer,
                event_type_id=wedding_type.id,
                title=f"Package {i}",
                description="Seasonal offer",
                price=100.0 + i,
                location="Garden Venue",
            )

        assert len(facade.list_packages(organizer.id)) == 110
        assert len(facade.list_active_packages(organizer.id)) == 110
        assert len(facade.list_packages_by_type(wedding_type.id)) == 110

    def test_blank_event_type_name(self, organizer):
        with pytest.raises(ValidationError):
            facade.create_event_type(organizer, name="", description="Nameless")


class TestRequestQueries:
    def test_lists_by_party_and_status(self, organizer, requester, pending_request, wedding_package, in_days):
        second = facade.submit_request(
            requester,
            package_id=wedding_package.id,
            organizer_id=organizer.id,
            event_date=in_days(90),
            attendees=120,
            comments="evening reception",
        )
        facade.transition_request(organizer, second.id, "Confirmed")

        assert len(facade.list_requests_for_organizer(organizer.id)) == 2
        assert [r.id for r in facade.list_requests_for_organizer(organizer.id, "Confirmed")] == [second.id]
        assert [r.id for r in facade.list_requests_for_requester(requester.id, "Pending")] == [pending_request.id]

    def test_get_missing_request(self):
        with pytest.raises(NotFoundError):
            facade.get_event_request("missing")


class TestConcurrency:
    def test_expected_status_is_checked(self, organizer, requester, pending_request):
        facade.transition_request(organizer, pending_request.id, "Confirmed", expected_status="Pending")
        with pytest.raises(ConcurrencyError):
            facade.cancel_request(requester, pending_request.id, expected_status="Pending")

    def test_stale_organizer_loses_the_rating_race(self, organizer):
        users = current_domain.repository_for(User)
        first = users.get(organizer.id)
        stale = users.get(organizer.id)

        first.record_rating(5)
        with UnitOfWork():
            users.add(first)

        stale.record_rating(1)
        with pytest.raises(ExpectedVersionError):
            with UnitOfWork():
                users.add(stale)

        saved = users.get(organizer.id)
        assert saved.rating == 5.0
        assert saved.review_count == 1

    def test_stale_write_surfaces_as_concurrency_error(self, organizer):
        users = current_domain.repository_for(User)
        first = users.get(organizer.id)
        stale = users.get(organizer.id)

        first.record_rating(5)
        with UnitOfWork():
            users.add(first)

        stale.record_rating(1)
        with pytest.raises(ConcurrencyError):
            with facade._optimistic():
                with UnitOfWork():
                    users.add(stale)

        assert facade.get_organizer(organizer.id).rating == 5.0

    def test_stale_request_cannot_overwrite_a_confirmation(self, organizer, requester, pending_request):
        requests = current_domain.repository_for(EventRequest)
        confirming = requests.get(pending_request.id)
        cancelling = requests.get(pending_request.id)

        confirming.transition_to("Confirmed", organizer.id)
        with UnitOfWork():
            requests.add(confirming)

        cancelling.cancel(requester.id)
        with pytest.raises(ConcurrencyError):
            with facade._optimistic():
                with UnitOfWork():
                    requests.add(cancelling)

        assert facade.get_event_request(pending_request.id).status == "Confirmed"


class TestActorRef:
    def test_user_ref_roles(self):
        assert UserRef(id="1", role="organizer").is_organizer
        assert UserRef(id="2", role="requester").is_requester
