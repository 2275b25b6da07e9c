"""Dashboard read models, computed on demand from the request ledger.

Nothing here is stored; each call reads the requests for one user and folds
them into counts, revenue and the short lists the dashboards show.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from protean.utils.globals import current_domain

from marketplace.catalog.event_package import EventPackage
from marketplace.ledger.event_request import EventRequest, RequestStatus

RECENT_LIMIT = 5

_COUNT_KEYS = {
    RequestStatus.PENDING.value: "pending",
    RequestStatus.CONFIRMED.value: "confirmed",
    RequestStatus.IN_PROGRESS.value: "in_progress",
    RequestStatus.COMPLETED.value: "completed",
    RequestStatus.CANCELLED.value: "cancelled",
}


@dataclass(frozen=True)
class StatusCounts:
    total: int = 0
    pending: int = 0
    confirmed: int = 0
    in_progress: int = 0
    completed: int = 0
    cancelled: int = 0

    @classmethod
    def of(cls, requests):
        tally = Counter(_COUNT_KEYS[r.status] for r in requests)
        return cls(total=len(requests), **tally)


@dataclass(frozen=True)
class OrganizerDashboard:
    counts: StatusCounts
    total_revenue: float = 0.0


@dataclass(frozen=True)
class RequesterDashboard:
    counts: StatusCounts
    upcoming: list = field(default_factory=list)
    recent: list = field(default_factory=list)


def _sort_moment(moment):
    if moment is None:
        return datetime.min.replace(tzinfo=UTC)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def _package_prices(organizer_id) -> dict[str, float]:
    packages = current_domain.repository_for(EventPackage).list_by_organizer(organizer_id)
    return {str(p.id): p.price or 0.0 for p in packages}


def organizer_dashboard(organizer_id) -> OrganizerDashboard:
    """Status counts and revenue from completed requests."""
    requests = current_domain.repository_for(EventRequest).list_by_organizer(organizer_id)

    prices = _package_prices(organizer_id)
    revenue = sum(
        prices.get(str(r.package_id), 0.0) for r in requests if r.status == RequestStatus.COMPLETED.value
    )
    return OrganizerDashboard(counts=StatusCounts.of(requests), total_revenue=float(revenue))


def requester_dashboard(requester_id) -> RequesterDashboard:
    """Status counts, upcoming confirmed events and the most recent requests."""
    requests = current_domain.repository_for(EventRequest).list_by_requester(requester_id)

    upcoming = sorted(
        (r for r in requests if r.status == RequestStatus.CONFIRMED.value),
        key=lambda r: _sort_moment(r.event_date),
    )
    recent = sorted(requests, key=lambda r: _sort_moment(r.request_date), reverse=True)[:RECENT_LIMIT]

    return RequesterDashboard(counts=StatusCounts.of(requests), upcoming=upcoming, recent=recent)


def events_on_date(organizer_id, day: date) -> list[EventRequest]:
    """Requests for ``organizer_id`` whose event falls on ``day`` (UTC calendar day)."""
    requests = current_domain.repository_for(EventRequest).list_by_organizer(organizer_id)
    matches = [r for r in requests if r.event_date and _sort_moment(r.event_date).date() == day]
    return sorted(matches, key=lambda r: _sort_moment(r.event_date))
