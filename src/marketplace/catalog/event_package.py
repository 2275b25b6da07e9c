"""EventPackage aggregate — a bookable offer for one of the organizer's event types.

Status:
    ACTIVE ⇄ INACTIVE   (only Active packages accept new requests)
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.catalog.events import EventPackageCreated, EventPackageUpdated
from marketplace.domain import marketplace


class PackageStatus(Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


@marketplace.aggregate
class EventPackage:
    """A priced package (venue, catering, coordination, ...) offered by an organizer."""

    organizer_id: Identifier(required=True)
    event_type_id: Identifier(required=True)
    title: String(required=True, max_length=200)
    description: Text(required=True)
    price: Float(required=True)
    location: String(required=True, max_length=255)
    image_url: String(max_length=500)
    status: String(choices=PackageStatus, default=PackageStatus.ACTIVE.value)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Package price must be greater than zero"]})

    @invariant.post
    def title_must_not_be_blank(self):
        if self.title is not None and not self.title.strip():
            raise ValidationError({"title": ["Package title cannot be empty"]})

    @property
    def is_active(self):
        return self.status == PackageStatus.ACTIVE.value

    @classmethod
    def create(cls, organizer_id, event_type_id, title, description, price, location, image_url=None):
        now = datetime.now(UTC)
        package = cls(
            organizer_id=organizer_id,
            event_type_id=event_type_id,
            title=title,
            description=description,
            price=price,
            location=location,
            image_url=image_url,
            status=PackageStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )
        package.raise_(
            EventPackageCreated(
                package_id=package.id,
                organizer_id=organizer_id,
                event_type_id=event_type_id,
                title=title,
                price=price,
                location=location,
                status=package.status,
                created_at=now,
            )
        )
        return package

    def update_details(self, **changes):
        """Partial merge of the editable fields. ``organizer_id`` is not editable."""
        if "organizer_id" in changes:
            raise ValidationError({"organizer_id": ["Package owner cannot be changed"]})

        status = changes.pop("status", None)
        if status is not None and status not in {s.value for s in PackageStatus}:
            raise ValidationError({"status": [f"Unknown package status {status}"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            for field, value in changes.items():
                if value is not None:
                    setattr(self, field, value)
            if status is not None:
                self.status = status
            self.updated_at = now

        self.raise_(
            EventPackageUpdated(
                package_id=self.id,
                event_type_id=self.event_type_id,
                title=self.title,
                price=self.price,
                status=self.status,
                updated_at=now,
            )
        )

    def activate(self):
        if self.is_active:
            raise ValidationError({"status": ["Package is already active"]})
        self.update_details(status=PackageStatus.ACTIVE.value)

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"status": ["Package is already inactive"]})
        self.update_details(status=PackageStatus.INACTIVE.value)
