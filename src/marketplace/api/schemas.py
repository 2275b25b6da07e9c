"""Pydantic request/response schemas for the marketplace API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class RegisterOrganizerRequest(BaseModel):
    email: str
    username: str
    organization_name: str
    mobile_number: str | None = None


class RegisterRequesterRequest(BaseModel):
    email: str
    name: str
    position: str | None = None


class UpdateProfileRequest(BaseModel):
    username: str | None = None
    organization_name: str | None = None
    mobile_number: str | None = None
    name: str | None = None
    position: str | None = None


class CreateEventTypeRequest(BaseModel):
    name: str
    description: str


class UpdateEventTypeRequest(BaseModel):
    name: str | None = None
    description: str | None = None


class CreateEventPackageRequest(BaseModel):
    event_type_id: str
    title: str
    description: str
    price: float
    location: str
    image_url: str | None = None


class UpdateEventPackageRequest(BaseModel):
    event_type_id: str | None = None
    title: str | None = None
    description: str | None = None
    price: float | None = None
    location: str | None = None
    image_url: str | None = None
    status: str | None = None  # "Active" or "Inactive"


class SubmitEventRequestRequest(BaseModel):
    package_id: str
    organizer_id: str
    event_date: datetime
    attendees: int
    comments: str


class TransitionRequest(BaseModel):
    status: str  # "Confirmed", "InProgress", "Completed" or "Cancelled"
    expected_status: str | None = None


class CancelRequest(BaseModel):
    expected_status: str | None = None


class SubmitFeedbackRequest(BaseModel):
    rating: int
    comment: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class UserResponse(BaseModel):
    id: str
    role: str
    email: str
    username: str | None = None
    organization_name: str | None = None
    mobile_number: str | None = None
    rating: float | None = None
    review_count: int | None = None
    name: str | None = None
    position: str | None = None

    @classmethod
    def from_user(cls, user) -> UserResponse:
        return cls(
            id=str(user.id),
            role=user.role,
            email=user.email,
            username=user.username,
            organization_name=user.organization_name,
            mobile_number=user.mobile_number,
            rating=user.rating if user.is_organizer else None,
            review_count=user.review_count if user.is_organizer else None,
            name=user.name,
            position=user.position,
        )


class EventTypeResponse(BaseModel):
    id: str
    organizer_id: str
    name: str
    description: str

    @classmethod
    def from_event_type(cls, event_type) -> EventTypeResponse:
        return cls(
            id=str(event_type.id),
            organizer_id=str(event_type.organizer_id),
            name=event_type.name,
            description=event_type.description,
        )


class EventPackageResponse(BaseModel):
    id: str
    organizer_id: str
    event_type_id: str
    title: str
    description: str
    price: float
    location: str
    image_url: str | None = None
    status: str

    @classmethod
    def from_package(cls, package) -> EventPackageResponse:
        return cls(
            id=str(package.id),
            organizer_id=str(package.organizer_id),
            event_type_id=str(package.event_type_id),
            title=package.title,
            description=package.description,
            price=package.price,
            location=package.location,
            image_url=package.image_url,
            status=package.status,
        )


class FeedbackResponse(BaseModel):
    rating: int
    comment: str


class EventRequestResponse(BaseModel):
    id: str
    package_id: str
    organizer_id: str
    requester_id: str
    event_date: datetime
    request_date: datetime | None = None
    attendees: int
    comments: str
    status: str
    cancelled_by: str | None = None
    feedback: FeedbackResponse | None = None

    @classmethod
    def from_request(cls, request) -> EventRequestResponse:
        feedback = None
        if request.feedback is not None:
            feedback = FeedbackResponse(rating=request.feedback.rating, comment=request.feedback.comment)
        return cls(
            id=str(request.id),
            package_id=str(request.package_id),
            organizer_id=str(request.organizer_id),
            requester_id=str(request.requester_id),
            event_date=request.event_date,
            request_date=request.request_date,
            attendees=request.attendees,
            comments=request.comments,
            status=request.status,
            cancelled_by=request.cancelled_by,
            feedback=feedback,
        )


class StatusCountsResponse(BaseModel):
    total: int
    pending: int
    confirmed: int
    in_progress: int
    completed: int
    cancelled: int


class OrganizerDashboardResponse(BaseModel):
    counts: StatusCountsResponse
    total_revenue: float


class StatusResponse(BaseModel):
    status: str = "ok"
