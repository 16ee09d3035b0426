"""
Error normalization.

Every failure that reaches the client passes through here and leaves as
`{"success": false, "error": "..."}` with the mapped status. Domain errors
already carry their status; storage, validation and framework failures
are translated first. Only request validation is a client error; a model
that fails to load from a stored document is a server fault. Anything
unrecognized becomes a 500 "Server Error" and is logged, never echoed.
"""

import logging
from typing import Any, Iterable

from bson.errors import InvalidId
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.exceptions import (
    ConflictError,
    DevCamperError,
    NotFoundError,
    ServerError,
    ValidationError,
)
from shared.models import ErrorEnvelope

logger = logging.getLogger(__name__)


SERVER_ERROR_MESSAGE = "Server Error"


def _validation_messages(errors: Iterable[dict[str, Any]]) -> list[str]:
    """One message per failing field, in the order they were reported."""
    messages = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        message = error.get("msg", "Invalid value")
        messages.append(f"{'.'.join(location)}: {message}" if location else message)
    return messages


def normalize_exception(exc: Exception) -> DevCamperError:
    """
    Map any exception onto the domain error hierarchy.

    Args:
        exc: Exception raised while handling a request

    Returns:
        DevCamperError carrying the status and client-visible message
    """
    if isinstance(exc, DevCamperError):
        return exc

    if isinstance(exc, InvalidId):
        return NotFoundError(f"Resource not found with id of {exc}", code="MALFORMED_ID")

    if isinstance(exc, DuplicateKeyError):
        return ConflictError(details={"key": (exc.details or {}).get("keyValue")})

    if isinstance(exc, RequestValidationError):
        messages = _validation_messages(exc.errors())
        return ValidationError(", ".join(messages), code="VALIDATION_ERROR", details={"errors": messages})

    if isinstance(exc, StarletteHTTPException):
        return DevCamperError(str(exc.detail), code="HTTP_ERROR", status_code=exc.status_code)

    return ServerError(SERVER_ERROR_MESSAGE, code="SERVER_ERROR")


def error_response(error: DevCamperError) -> JSONResponse:
    headers = None
    if error.status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorEnvelope(error=error.message).model_dump(),
        headers=headers,
    )


async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
    """Exception handler installed for every exception type."""
    error = normalize_exception(exc)
    if error.status_code >= 500:
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
    else:
        logger.info("%s %s -> %d %s", request.method, request.url.path, error.status_code, error.code)
    return error_response(error)


def register_exception_handlers(app: FastAPI) -> None:
    """Route every failure through the normalizer."""
    for exc_class in (
        DevCamperError,
        RequestValidationError,
        StarletteHTTPException,
        DuplicateKeyError,
        InvalidId,
        Exception,
    ):
        app.add_exception_handler(exc_class, handle_exception)
