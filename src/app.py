"""OpinaLocal FastAPI application.

Processes commands synchronously per request inside the opinalocal domain
context. Notification side effects run after each command commits.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the config overlay:
#   - "test" / unset → event_processing = "sync"  (handlers fire after commit)
#   - "production"   → event_processing = "async" (handlers fire via Engine)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from opinalocal.domain import opinalocal
from opinalocal.utils.logging import add_context, clear_context

opinalocal.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="OpinaLocal API",
    description="Restaurant reviews with community rating categories",
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
    """Push the opinalocal domain context for each request."""
    if request.url.path == "/health":
        return await call_next(request)
    add_context(method=request.method, path=request.url.path)
    try:
        with opinalocal.domain_context():
            response = await call_next(request)
    finally:
        clear_context()
    return response


# ---------------------------------------------------------------------------
# Routers and error mapping
# ---------------------------------------------------------------------------
from opinalocal.api import (  # noqa: E402
    category_router,
    comment_router,
    restaurant_router,
    review_router,
    user_router,
)
from opinalocal.api.errors import register_error_handlers  # noqa: E402

app.include_router(user_router)
app.include_router(restaurant_router)
app.include_router(category_router)
app.include_router(review_router)
app.include_router(comment_router)

register_exception_handlers(app)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": opinalocal.name})
