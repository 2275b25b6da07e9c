"""FastAPI routes for the marketplace.

Each route resolves the acting user from the ``X-Actor-Id`` header and hands
it to the facade explicitly; no route reads ambient login state.
"""

from fastapi import APIRouter, Depends, HTTPException

from marketplace import facade
from marketplace.api.dependencies import current_actor
from marketplace.api.schemas import (
    CancelRequest,
    CreateEventPackageRequest,
    CreateEventTypeRequest,
    EventPackageResponse,
    EventRequestResponse,
    EventTypeResponse,
    OrganizerDashboardResponse,
    RegisterOrganizerRequest,
    RegisterRequesterRequest,
    StatusCountsResponse,
    StatusResponse,
    SubmitEventRequestRequest,
    SubmitFeedbackRequest,
    TransitionRequest,
    UpdateEventPackageRequest,
    UpdateEventTypeRequest,
    UpdateProfileRequest,
    UserResponse,
)
from marketplace.identity.port import UserRef

user_router = APIRouter(prefix="/users", tags=["users"])
organizer_router = APIRouter(prefix="/organizers", tags=["organizers"])
event_type_router = APIRouter(prefix="/event-types", tags=["catalog"])
event_package_router = APIRouter(prefix="/event-packages", tags=["catalog"])
event_request_router = APIRouter(prefix="/event-requests", tags=["requests"])


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
@user_router.post("/organizers", status_code=201, response_model=UserResponse)
async def register_organizer(body: RegisterOrganizerRequest) -> UserResponse:
    user = facade.register_organizer(
        email=body.email,
        username=body.username,
        organization_name=body.organization_name,
        mobile_number=body.mobile_number,
    )
    return UserResponse.from_user(user)


@user_router.post("/requesters", status_code=201, response_model=UserResponse)
async def register_requester(body: RegisterRequesterRequest) -> UserResponse:
    user = facade.register_requester(email=body.email, name=body.name, position=body.position)
    return UserResponse.from_user(user)


@user_router.put("/me", response_model=UserResponse)
async def update_profile(body: UpdateProfileRequest, actor: UserRef = Depends(current_actor)) -> UserResponse:
    user = facade.update_profile(actor, **body.model_dump(exclude_none=True))
    return UserResponse.from_user(user)


# ---------------------------------------------------------------------------
# Organizers
# ---------------------------------------------------------------------------
@organizer_router.get("", response_model=list[UserResponse])
async def list_organizers(search: str | None = None) -> list[UserResponse]:
    return [UserResponse.from_user(o) for o in facade.list_organizers(search)]


@organizer_router.get("/{organizer_id}", response_model=UserResponse)
async def get_organizer(organizer_id: str) -> UserResponse:
    return UserResponse.from_user(facade.get_organizer(organizer_id))


@organizer_router.get("/{organizer_id}/packages", response_model=list[EventPackageResponse])
async def list_organizer_packages(organizer_id: str) -> list[EventPackageResponse]:
    """Active packages only; this is what requesters browse."""
    facade.get_organizer(organizer_id)
    return [EventPackageResponse.from_package(p) for p in facade.list_active_packages(organizer_id)]


@organizer_router.get("/{organizer_id}/dashboard", response_model=OrganizerDashboardResponse)
async def organizer_dashboard(
    organizer_id: str, actor: UserRef = Depends(current_actor)
) -> OrganizerDashboardResponse:
    if actor.id != organizer_id:
        raise HTTPException(status_code=403, detail="Dashboards are private to their organizer")
    dashboard = facade.organizer_dashboard(organizer_id)
    counts = dashboard.counts
    return OrganizerDashboardResponse(
        counts=StatusCountsResponse(
            total=counts.total,
            pending=counts.pending,
            confirmed=counts.confirmed,
            in_progress=counts.in_progress,
            completed=counts.completed,
            cancelled=counts.cancelled,
        ),
        total_revenue=dashboard.total_revenue,
    )


# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------
@event_type_router.post("", status_code=201, response_model=EventTypeResponse)
async def create_event_type(
    body: CreateEventTypeRequest, actor: UserRef = Depends(current_actor)
) -> EventTypeResponse:
    event_type = facade.create_event_type(actor, name=body.name, description=body.description)
    return EventTypeResponse.from_event_type(event_type)


@event_type_router.get("", response_model=list[EventTypeResponse])
async def list_event_types(
    organizer_id: str | None = None, actor: UserRef = Depends(current_actor)
) -> list[EventTypeResponse]:
    return [EventTypeResponse.from_event_type(t) for t in facade.list_event_types(organizer_id or actor.id)]


@event_type_router.get("/{event_type_id}", response_model=EventTypeResponse)
async def get_event_type(event_type_id: str) -> EventTypeResponse:
    return EventTypeResponse.from_event_type(facade.get_event_type(event_type_id))


@event_type_router.put("/{event_type_id}", response_model=EventTypeResponse)
async def update_event_type(
    event_type_id: str, body: UpdateEventTypeRequest, actor: UserRef = Depends(current_actor)
) -> EventTypeResponse:
    event_type = facade.update_event_type(actor, event_type_id, name=body.name, description=body.description)
    return EventTypeResponse.from_event_type(event_type)


@event_type_router.delete("/{event_type_id}", response_model=StatusResponse)
async def delete_event_type(event_type_id: str, actor: UserRef = Depends(current_actor)) -> StatusResponse:
    facade.delete_event_type(actor, event_type_id)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Event packages
# ---------------------------------------------------------------------------
@event_package_router.post("", status_code=201, response_model=EventPackageResponse)
async def create_event_package(
    body: CreateEventPackageRequest, actor: UserRef = Depends(current_actor)
) -> EventPackageResponse:
    package = facade.create_event_package(
        actor,
        event_type_id=body.event_type_id,
        title=body.title,
        description=body.description,
        price=body.price,
        location=body.location,
        image_url=body.image_url,
    )
    return EventPackageResponse.from_package(package)


@event_package_router.get("", response_model=list[EventPackageResponse])
async def list_event_packages(
    event_type_id: str | None = None, actor: UserRef = Depends(current_actor)
) -> list[EventPackageResponse]:
    """The caller's own packages, or every package of one event type."""
    if event_type_id:
        packages = facade.list_packages_by_type(event_type_id)
    else:
        packages = facade.list_packages(actor.id)
    return [EventPackageResponse.from_package(p) for p in packages]


@event_package_router.get("/{package_id}", response_model=EventPackageResponse)
async def get_event_package(package_id: str) -> EventPackageResponse:
    return EventPackageResponse.from_package(facade.get_event_package(package_id))


@event_package_router.put("/{package_id}", response_model=EventPackageResponse)
async def update_event_package(
    package_id: str, body: UpdateEventPackageRequest, actor: UserRef = Depends(current_actor)
) -> EventPackageResponse:
    package = facade.update_event_package(actor, package_id, **body.model_dump(exclude_none=True))
    return EventPackageResponse.from_package(package)


@event_package_router.delete("/{package_id}", response_model=StatusResponse)
async def delete_event_package(package_id: str, actor: UserRef = Depends(current_actor)) -> StatusResponse:
    facade.delete_event_package(actor, package_id)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Event requests
# ---------------------------------------------------------------------------
def _visible_to(request, actor: UserRef) -> bool:
    return actor.id in (str(request.organizer_id), str(request.requester_id))


@event_request_router.post("", status_code=201, response_model=EventRequestResponse)
async def submit_event_request(
    body: SubmitEventRequestRequest, actor: UserRef = Depends(current_actor)
) -> EventRequestResponse:
    request = facade.submit_request(
        actor,
        package_id=body.package_id,
        organizer_id=body.organizer_id,
        event_date=body.event_date,
        attendees=body.attendees,
        comments=body.comments,
    )
    return EventRequestResponse.from_request(request)


@event_request_router.get("", response_model=list[EventRequestResponse])
async def list_event_requests(
    status: str | None = None, actor: UserRef = Depends(current_actor)
) -> list[EventRequestResponse]:
    """Requests the caller is a party to, newest first."""
    if actor.is_organizer:
        requests = facade.list_requests_for_organizer(actor.id, status)
    else:
        requests = facade.list_requests_for_requester(actor.id, status)
    requests = sorted(requests, key=lambda r: r.request_date, reverse=True)
    return [EventRequestResponse.from_request(r) for r in requests]


@event_request_router.get("/{request_id}", response_model=EventRequestResponse)
async def get_event_request(request_id: str, actor: UserRef = Depends(current_actor)) -> EventRequestResponse:
    request = facade.get_event_request(request_id)
    if not _visible_to(request, actor):
        raise HTTPException(status_code=403, detail="Not a party to this request")
    return EventRequestResponse.from_request(request)


@event_request_router.put("/{request_id}/status", response_model=EventRequestResponse)
async def transition_event_request(
    request_id: str, body: TransitionRequest, actor: UserRef = Depends(current_actor)
) -> EventRequestResponse:
    request = facade.transition_request(
        actor, request_id, new_status=body.status, expected_status=body.expected_status
    )
    return EventRequestResponse.from_request(request)


@event_request_router.put("/{request_id}/cancel", response_model=EventRequestResponse)
async def cancel_event_request(
    request_id: str, body: CancelRequest | None = None, actor: UserRef = Depends(current_actor)
) -> EventRequestResponse:
    expected_status = body.expected_status if body else None
    request = facade.cancel_request(actor, request_id, expected_status=expected_status)
    return EventRequestResponse.from_request(request)


@event_request_router.post("/{request_id}/feedback", status_code=201, response_model=EventRequestResponse)
async def submit_feedback(
    request_id: str, body: SubmitFeedbackRequest, actor: UserRef = Depends(current_actor)
) -> EventRequestResponse:
    """Only the request's requester may leave feedback."""
    request = facade.get_event_request(request_id)
    if str(request.requester_id) != actor.id:
        raise HTTPException(status_code=403, detail="Only the requester can leave feedback")
    request = facade.submit_feedback(request_id, rating=body.rating, comment=body.comment)
    return EventRequestResponse.from_request(request)
