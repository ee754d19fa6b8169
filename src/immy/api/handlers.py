"""Exception handlers that render every failure as an envelope.

Routes and services raise; nothing below the app catches. Each handler
logs the internal reason and returns {"status": false, "message": ...}
with the matching HTTP status.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from immy.errors import ImmyError, StorageError, Unauthenticated, ValidationFailed
from immy.schemas.envelope import failure

logger = structlog.get_logger()

_HTTP_MESSAGES = {
    404: "Not found",
    405: "Method not allowed",
}


def validation_message(errors: list[dict]) -> str:
    """Collapse pydantic errors into one client-facing sentence."""
    if any(e.get("type") in ("missing", "string_too_short") for e in errors):
        return "Missing required fields"
    for e in errors:
        if "email" in e.get("loc", ()):
            return "Invalid email format"
    for e in errors:
        fields = [
            part for part in e.get("loc", ())
            if isinstance(part, str) and part not in ("body", "query", "path")
        ]
        if fields:
            return f"Invalid {fields[-1]}"
    return "Invalid request body"


async def immy_error_handler(request: Request, exc: ImmyError) -> JSONResponse:
    logger.info(
        "request.failed",
        error=type(exc).__name__,
        reason=exc.reason,
        path=request.url.path,
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(
        status_code=exc.status_code, content=failure(exc.message), headers=headers
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return await immy_error_handler(
        request,
        ValidationFailed(validation_message(exc.errors()), reason="request_validation"),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    message = _HTTP_MESSAGES.get(exc.status_code, str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=failure(message),
        headers=getattr(exc, "headers", None),
    )


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("storage.error", error=str(exc), path=request.url.path)
    return await immy_error_handler(request, StorageError(reason=type(exc).__name__))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.unhandled_error", path=request.url.path)
    return JSONResponse(status_code=500, content=failure("Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ImmyError, immy_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
