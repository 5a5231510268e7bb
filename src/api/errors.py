"""
Error responses - Domain exceptions to JSON error bodies.

Every error the API returns has the shape ``{"error", "code"[, "fields"]}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.models import ErrorResponse
from src.domain.exceptions import DuplicateRegistrant, MissingField, RegistrationError

logger = logging.getLogger(__name__)

SERVER_ERROR = "SERVER_ERROR"


def _json(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def registration_error_response(exc: RegistrationError) -> JSONResponse:
    """Build the HTTP response for a domain error."""
    if isinstance(exc, DuplicateRegistrant):
        return _json(
            status.HTTP_409_CONFLICT,
            ErrorResponse(error=exc.code, code=exc.code, fields=list(exc.fields)),
        )
    return _json(status.HTTP_400_BAD_REQUEST, ErrorResponse(error=exc.message, code=exc.code))


def server_error_response() -> JSONResponse:
    """Generic 500 body; the underlying cause is only logged."""
    return _json(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(error=SERVER_ERROR, code=SERVER_ERROR),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Answer malformed bodies (not JSON, not an object, non-string fields)
    with the missing-field error instead of FastAPI's 422.
    """
    logger.debug("Rejected malformed request body: %s", exc.errors())
    return registration_error_response(MissingField("body"))


def install_error_handlers(app: FastAPI) -> None:
    """Register the API's exception handlers on ``app``."""
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
