"""Repository for the EventRequest aggregate."""

from marketplace.domain import marketplace
from marketplace.ledger.event_request import EventRequest


@marketplace.repository(part_of=EventRequest)
class EventRequestRepository:
    def list_by_package(self, package_id: str) -> list[EventRequest]:
        return self._dao.query.filter(package_id=str(package_id)).limit(None).all().items

    def list_by_organizer(self, organizer_id: str, status: str | None = None) -> list[EventRequest]:
        criteria = {"organizer_id": str(organizer_id)}
        if status:
            criteria["status"] = status
        return self._dao.query.filter(**criteria).limit(None).all().items

    def list_by_requester(self, requester_id: str, status: str | None = None) -> list[EventRequest]:
        criteria = {"requester_id": str(requester_id)}
        if status:
            criteria["status"] = status
        return self._dao.query.filter(**criteria).limit(None).all().items
