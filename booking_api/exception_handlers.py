"""
Exception handlers for the FastAPI application.

Every failure leaves the API as ``{"error": true, "message": <str>}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException

from .exceptions import BookingError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": True, "message": message},
        headers=headers,
    )


async def booking_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle typed service failures."""
    assert isinstance(exc, BookingError)
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} - {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle HTTPException (unknown routes, wrong methods) with the same body shape."""
    http_exc = exc if isinstance(exc, HTTPException) else HTTPException(status_code=500, detail=str(exc))
    return error_response(http_exc.status_code, str(http_exc.detail), headers=http_exc.headers)


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Request payload failed schema validation: report the first problem as a 400."""
    if not isinstance(exc, RequestValidationError) or not exc.errors():
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request")

    messages = []
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" segment from the location
        loc = [str(part) for part in error.get("loc", ())[1:]]
        field = ".".join(loc)
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])

    logger.warning(f"Validation error on {request.url.path}: {messages}")
    return error_response(status.HTTP_400_BAD_REQUEST, "; ".join(messages))


async def integrity_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """A unique constraint fired at commit time (e.g. a concurrent duplicate email)."""
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc}")
    return error_response(status.HTTP_409_CONFLICT, "Duplicate key error")


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all unhandled exceptions.

    Logs the full exception with traceback and returns a generic body.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc!s}",
        exc_info=True,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookingError, booking_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("Exception handlers registered")
