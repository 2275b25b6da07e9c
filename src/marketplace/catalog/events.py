"""Domain events for the EventType and EventPackage aggregates."""

from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="EventType")
class EventTypeCreated:
    """An organizer added a kind of event they plan (Wedding, Birthday Party, ...)."""

    __version__ = 1

    event_type_id = Identifier(required=True)
    organizer_id = Identifier(required=True)
    name = String(required=True)
    description = Text(required=True)
    created_at = DateTime(required=True)


@marketplace.event(part_of="EventType")
class EventTypeUpdated:
    __version__ = 1

    event_type_id = Identifier(required=True)
    name = String(required=True)
    description = Text(required=True)
    updated_at = DateTime(required=True)


@marketplace.event(part_of="EventPackage")
class EventPackageCreated:
    """An organizer published a bookable package."""

    __version__ = 1

    package_id = Identifier(required=True)
    organizer_id = Identifier(required=True)
    event_type_id = Identifier(required=True)
    title = String(required=True)
    price = Float(required=True)
    location = String(required=True)
    status = String(required=True)
    created_at = DateTime(required=True)


@marketplace.event(part_of="EventPackage")
class EventPackageUpdated:
    __version__ = 1

    package_id = Identifier(required=True)
    event_type_id = Identifier(required=True)
    title = String(required=True)
    price = Float(required=True)
    status = String(required=True)
    updated_at = DateTime(required=True)
