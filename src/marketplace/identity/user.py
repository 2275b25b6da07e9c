"""User aggregate — organizers and requesters of the marketplace.

A single aggregate carries both roles; the role decides which profile fields
are meaningful. Organizers additionally hold a running ``rating`` and the
``review_count`` behind it, which only change through ``record_rating``.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String

from marketplace.domain import marketplace
from marketplace.errors import InvalidStateError
from marketplace.identity.events import (
    OrganizerRated,
    OrganizerRegistered,
    ProfileUpdated,
    RequesterRegistered,
)
from marketplace.ratings.aggregator import RatingSummary

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserRole(Enum):
    ORGANIZER = "organizer"
    REQUESTER = "requester"


_PROFILE_FIELDS = {
    UserRole.ORGANIZER: ("username", "organization_name", "mobile_number"),
    UserRole.REQUESTER: ("name", "position"),
}


@marketplace.aggregate
class User:
    """A marketplace account, either an event organizer or a requester."""

    role: String(choices=UserRole, required=True)
    email: String(required=True, max_length=254)

    # Organizer profile
    username: String(max_length=100)
    organization_name: String(max_length=200)
    mobile_number: String(max_length=20)
    rating: Float(default=0.0)
    review_count: Integer(default=0)

    # Requester profile
    name: String(max_length=100)
    position: String(max_length=100)

    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not _EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @invariant.post
    def organizer_profile_must_be_complete(self):
        if self.role != UserRole.ORGANIZER.value:
            return
        if not (self.username or "").strip():
            raise ValidationError({"username": ["Organizers need a username"]})
        if not (self.organization_name or "").strip():
            raise ValidationError({"organization_name": ["Organizers need an organization name"]})

    @invariant.post
    def requester_profile_must_be_complete(self):
        if self.role == UserRole.REQUESTER.value and not (self.name or "").strip():
            raise ValidationError({"name": ["Requesters need a name"]})

    @invariant.post
    def rating_must_be_within_scale(self):
        if self.rating is not None and not (0.0 <= self.rating <= 5.0):
            raise ValidationError({"rating": ["Rating must stay between 0 and 5"]})
        if self.review_count is not None and self.review_count < 0:
            raise ValidationError({"review_count": ["Review count cannot be negative"]})

    @property
    def is_organizer(self):
        return self.role == UserRole.ORGANIZER.value

    @property
    def display_name(self):
        if self.is_organizer:
            return self.organization_name
        return self.name

    # -------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------
    @classmethod
    def register_organizer(cls, email, username, organization_name, mobile_number=None):
        now = datetime.now(UTC)
        user = cls(
            role=UserRole.ORGANIZER.value,
            email=email,
            username=username,
            organization_name=organization_name,
            mobile_number=mobile_number,
            rating=0.0,
            review_count=0,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            OrganizerRegistered(
                user_id=user.id,
                email=email,
                username=username,
                organization_name=organization_name,
                registered_at=now,
            )
        )
        return user

    @classmethod
    def register_requester(cls, email, name, position=None):
        now = datetime.now(UTC)
        user = cls(
            role=UserRole.REQUESTER.value,
            email=email,
            name=name,
            position=position or "",
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            RequesterRegistered(
                user_id=user.id,
                email=email,
                name=name,
                registered_at=now,
            )
        )
        return user

    # -------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------
    def update_profile(self, **changes):
        """Merge role-specific profile fields; role, email and rating are never touched."""
        allowed = _PROFILE_FIELDS[UserRole(self.role)]
        unknown = sorted(set(changes) - set(allowed))
        if unknown:
            raise ValidationError({field: [f"Cannot update {field} on a {self.role} profile"] for field in unknown})

        provided = {field: value for field, value in changes.items() if value is not None}
        if not provided:
            return

        now = datetime.now(UTC)
        with atomic_change(self):
            for field, value in provided.items():
                setattr(self, field, value)
            self.updated_at = now

        self.raise_(
            ProfileUpdated(
                user_id=self.id,
                role=self.role,
                changed_fields=",".join(sorted(provided)),
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Rating
    # -------------------------------------------------------------------
    def record_rating(self, score):
        """Fold one feedback score into the organizer's running rating."""
        if not self.is_organizer:
            raise InvalidStateError({"role": ["Only organizers can be rated"]})

        summary = RatingSummary(rating=self.rating or 0.0, review_count=self.review_count or 0).fold(score)

        now = datetime.now(UTC)
        with atomic_change(self):
            self.rating = summary.rating
            self.review_count = summary.review_count
            self.updated_at = now

        self.raise_(
            OrganizerRated(
                user_id=self.id,
                score=score,
                rating=summary.rating,
                review_count=summary.review_count,
                rated_at=now,
            )
        )
        return summary
