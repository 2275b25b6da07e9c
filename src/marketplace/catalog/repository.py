"""Repositories for the catalog aggregates."""

from marketplace.catalog.event_package import EventPackage, PackageStatus
from marketplace.catalog.event_type import EventType
from marketplace.domain import marketplace


@marketplace.repository(part_of=EventType)
class EventTypeRepository:
    def list_by_organizer(self, organizer_id: str) -> list[EventType]:
        return self._dao.query.filter(organizer_id=str(organizer_id)).limit(None).all().items


@marketplace.repository(part_of=EventPackage)
class EventPackageRepository:
    def list_by_organizer(self, organizer_id: str) -> list[EventPackage]:
        return self._dao.query.filter(organizer_id=str(organizer_id)).limit(None).all().items

    def list_active_by_organizer(self, organizer_id: str) -> list[EventPackage]:
        return (
            self._dao.query.filter(
                organizer_id=str(organizer_id),
                status=PackageStatus.ACTIVE.value,
            )
            .limit(None)
            .all()
            .items
        )

    def list_by_type(self, event_type_id: str) -> list[EventPackage]:
        return self._dao.query.filter(event_type_id=str(event_type_id)).limit(None).all().items
