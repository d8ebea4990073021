"""
Application error taxonomy and the FastAPI handlers that render it.

Services raise the exceptions defined here; they never build HTTP
responses themselves.  ``register_error_handlers`` maps every error to
a JSON body of the form ``{"error": <label>, "message": <text>}``
so that clients always receive the same payload shape, whichever
layer failed.
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "InternalError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "ValidationError"


class ConflictError(AppError):
    """Slug collision or overlapping booking dates."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "ConflictError"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "NotFoundError"


class UnauthorizedError(AppError):
    """Admin credentials were missing or wrong."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"


class ForbiddenError(AppError):
    """The operation is never allowed, whoever asks."""

    status_code = status.HTTP_403_FORBIDDEN
    error = "ForbiddenError"


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "InternalError"


def _summarize_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # Drop the "body"/"query" prefix FastAPI puts in front of field names.
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc)
    message = first.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


def register_error_handlers(app: FastAPI, debug: bool = False) -> None:
    """Attach handlers translating errors into ``{error, message}`` bodies.

    ``debug`` adds a ``stack`` field to 500 responses; it should only be
    enabled in development.
    """

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.error, "message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": ValidationError.error, "message": _summarize_validation_error(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        label = "Not Found" if exc.status_code == status.HTTP_404_NOT_FOUND else "HTTPError"
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": label, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        content = {"error": InternalError.error, "message": str(exc) or "Internal Server Error"}
        if debug:
            content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)
