"""EventType aggregate — a kind of event an organizer plans."""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from marketplace.catalog.events import EventTypeCreated, EventTypeUpdated
from marketplace.domain import marketplace


@marketplace.aggregate
class EventType:
    """A category of event (Wedding, Corporate Event, ...) owned by one organizer.

    Cannot be deleted while an EventPackage still references it; that check
    spans aggregates and lives in the delete handler.
    """

    organizer_id: Identifier(required=True)
    name: String(required=True, max_length=100)
    description: Text(required=True)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Event type name cannot be empty"]})

    @invariant.post
    def description_must_not_be_blank(self):
        if self.description is not None and not self.description.strip():
            raise ValidationError({"description": ["Event type description cannot be empty"]})

    @classmethod
    def create(cls, organizer_id, name, description):
        now = datetime.now(UTC)
        event_type = cls(
            organizer_id=organizer_id,
            name=name,
            description=description,
            created_at=now,
            updated_at=now,
        )
        event_type.raise_(
            EventTypeCreated(
                event_type_id=event_type.id,
                organizer_id=organizer_id,
                name=name,
                description=description,
                created_at=now,
            )
        )
        return event_type

    def update_details(self, name=None, description=None):
        now = datetime.now(UTC)
        with atomic_change(self):
            if name is not None:
                self.name = name
            if description is not None:
                self.description = description
            self.updated_at = now

        self.raise_(
            EventTypeUpdated(
                event_type_id=self.id,
                name=self.name,
                description=self.description,
                updated_at=now,
            )
        )
