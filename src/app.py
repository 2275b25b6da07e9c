"""Event planning marketplace FastAPI application.

Web server that processes commands synchronously via HTTP. Every request is
wrapped in the marketplace domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → event_processing = "sync"  (handlers fire in UoW)
#   - "production" → event_processing = "async" (handlers fire via Engine)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from marketplace.domain import marketplace  # noqa: E402
from marketplace.utils.logging import (  # noqa: E402
    ACTOR_ID_HEADER,
    REQUEST_ID_HEADER,
    bind_request_context,
    clear_context,
)

marketplace.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Event Marketplace API",
    description="Organizers publish event packages; requesters book them and leave feedback",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the marketplace domain context and bind request details to the logs."""
    request_id = bind_request_context(
        method=request.method,
        path=request.url.path,
        actor_id=request.headers.get(ACTOR_ID_HEADER),
        request_id=request.headers.get(REQUEST_ID_HEADER),
    )
    try:
        with marketplace.domain_context():
            response = await call_next(request)
    finally:
        clear_context()
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from marketplace.api import (  # noqa: E402
    event_package_router,
    event_request_router,
    event_type_router,
    organizer_router,
    user_router,
)
from marketplace.api.errors import register_marketplace_exception_handlers  # noqa: E402

app.include_router(user_router)
app.include_router(organizer_router)
app.include_router(event_type_router)
app.include_router(event_package_router)
app.include_router(event_request_router)
register_marketplace_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": marketplace.name}})
