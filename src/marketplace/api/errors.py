"""HTTP mapping for marketplace errors.

Protean's own handlers cover its base exceptions; the marketplace kinds are
registered on top so each one gets its specific status code.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from marketplace.errors import (
    AlreadyExistsError,
    ConcurrencyError,
    ConflictError,
    InvalidStateError,
    InvalidTransitionError,
    NotAuthorizedError,
    NotFoundError,
)

_STATUS_CODES = {
    InvalidTransitionError: 400,
    NotAuthorizedError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    InvalidStateError: 409,
    AlreadyExistsError: 409,
    ConcurrencyError: 409,
}


def _handler_for(status_code):
    async def handle(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=status_code, content={"error": exc.messages})

    return handle


def register_marketplace_exception_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    for exc_class, status_code in _STATUS_CODES.items():
        app.add_exception_handler(exc_class, _handler_for(status_code))
