"""HTTP mapping for domain errors.

Installed after Protean's own handlers so that every failure reaches the
client as ``{"error": {field: [messages]}}`` with a status that tells a bad
request, a missing record, a duplicate and a forbidden action apart.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from opinalocal.shared.errors import CategoryConflictError, ForbiddenError

logger = structlog.get_logger(__name__)


def _request_validation_messages(exc: RequestValidationError) -> dict:
    messages = {}
    for error in exc.errors():
        # Drop the "body"/"query" prefix from the location
        location = [str(part) for part in error.get("loc", ())[1:]] or ["request"]
        messages.setdefault(".".join(location), []).append(error.get("msg", "Invalid value"))
    return messages


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": exc.messages})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _request_validation_messages(exc)})

    @app.exception_handler(ObjectNotFoundError)
    async def handle_not_found(request: Request, exc: ObjectNotFoundError):
        return JSONResponse(status_code=404, content={"error": {"_entity": [str(exc)]}})

    @app.exception_handler(CategoryConflictError)
    async def handle_conflict(request: Request, exc: CategoryConflictError):
        logger.info("Duplicate category rejected", name=exc.name, existing_id=exc.existing_id)
        return JSONResponse(status_code=409, content={"error": exc.messages})

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        logger.info("Forbidden request", path=request.url.path)
        return JSONResponse(status_code=403, content={"error": exc.messages})
