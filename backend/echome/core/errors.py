"""
Error types and FastAPI exception handlers.

Two kinds of failure reach the caller: validation errors (400, fixed reason)
and everything else (500, fixed generic message). Internal detail is only
ever written to the log.
"""
import logging
from typing import Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

VALIDATION_ERROR_MESSAGE = "Message field is required."
SERVER_ERROR_MESSAGE = "An unexpected server error occurred. Please try again later."


class EchoError(Exception):
    """Base class for errors raised by the echo service."""


class EchoValidationError(EchoError):
    """Raised when the request body has no usable `message` field."""

    status_code = 400

    def __init__(self, message: str = VALIDATION_ERROR_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class BodyParseError(EchoError):
    """Raised when the raw request body cannot be turned into JSON."""


def error_payload(message: str) -> Dict[str, str]:
    return {"error": message}


async def validation_error_handler(request: Request, exc: EchoValidationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_payload(exc.message))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "An unhandled server error occurred on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content=error_payload(SERVER_ERROR_MESSAGE))


async def catch_unexpected_errors(request: Request, call_next):
    """
    HTTP middleware turning any unhandled exception into the generic 500.

    Registered inside CORSMiddleware so error responses still carry CORS headers.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return await unexpected_error_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EchoValidationError, validation_error_handler)
    app.add_exception_handler(BodyParseError, unexpected_error_handler)
