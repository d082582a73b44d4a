"""
FastAPI exception handlers for custom exceptions.

WHY: Services fold their own failures into envelopes, so these handlers
only see what escapes a route: request parsing errors, unknown paths and
unexpected exceptions. The JSON they return uses the same
{status, error, payload} envelope as the services.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from records_api.core.exceptions import AppException


logger = logging.getLogger(__name__)


def _envelope(status: int, error: str) -> dict:
    return {"status": status, "error": error, "payload": None}


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Handle custom AppException and its subclasses.

    Args:
        request: The FastAPI request object
        exc: The custom exception instance

    Returns:
        JSONResponse with error details
    """
    logger.warning(
        f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}",
        extra={"details": exc.to_dict()["details"]},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(exc.status_code, exc.message),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors raised by FastAPI itself.

    Args:
        request: The FastAPI request object
        exc: The Pydantic validation error

    Returns:
        JSONResponse with validation error details
    """
    messages = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        messages.append(f"{field}: {error['msg']}")

    return JSONResponse(
        status_code=400,
        content=_envelope(400, "; ".join(messages) or "Request validation failed"),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Handle Starlette HTTP exceptions (404 for unknown paths, 405, ...).

    Args:
        request: The FastAPI request object
        exc: The HTTP exception

    Returns:
        JSONResponse with error details
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(exc.status_code, str(exc.detail)),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all handler for unexpected exceptions.

    Logs the traceback and returns a generic message so implementation
    details stay out of the response.

    Args:
        request: The FastAPI request object
        exc: The unexpected exception

    Returns:
        JSONResponse with generic error message
    """
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=_envelope(500, "An unexpected error occurred"),
    )
