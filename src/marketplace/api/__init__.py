"""Marketplace API package."""

from marketplace.api.routes import (
    event_package_router,
    event_request_router,
    event_type_router,
    organizer_router,
    user_router,
)

__all__ = [
    "event_package_router",
    "event_request_router",
    "event_type_router",
    "organizer_router",
    "user_router",
]
