"""Error kinds raised by the marketplace domain.

All errors carry a ``messages`` dict shaped like Protean's validation errors
(``{"field": ["message", ...]}``) so callers can render them uniformly.

    ValidationError          malformed or missing input (Protean's own class)
    InvalidTransitionError   status change not allowed by the request state machine
    NotFoundError            referenced entity does not exist
    ConflictError            delete blocked by a referencing entity
    InvalidStateError        operation not allowed in the entity's current state
    AlreadyExistsError       write-once data already present
    ConcurrencyError         optimistic check failed against a fresh read
    NotAuthorizedError       actor is not allowed to act on the entity
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

__all__ = [
    "AlreadyExistsError",
    "ConcurrencyError",
    "ConflictError",
    "InvalidStateError",
    "InvalidTransitionError",
    "NotAuthorizedError",
    "NotFoundError",
    "ValidationError",
]


class _CarriesMessages:
    def __init__(self, messages, **kwargs):
        super().__init__(messages, **kwargs)
        self.messages = messages

    def __str__(self):
        return str(self.messages)


class InvalidTransitionError(_CarriesMessages, ValidationError):
    pass


class NotFoundError(_CarriesMessages, ObjectNotFoundError):
    pass


class ConflictError(_CarriesMessages, InvalidOperationError):
    pass


class InvalidStateError(_CarriesMessages, InvalidOperationError):
    pass


class AlreadyExistsError(_CarriesMessages, InvalidOperationError):
    pass


class ConcurrencyError(_CarriesMessages, InvalidOperationError):
    pass


class NotAuthorizedError(_CarriesMessages, InvalidOperationError):
    pass
