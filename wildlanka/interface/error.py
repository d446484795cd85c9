"""Interface layer errors and their HTTP rendering."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from wildlanka.config import Settings
from wildlanka.domain.error import AuthenticationRequiredError, NotFoundError

logger = logging.getLogger(__name__)

REDACTED_ERROR = "An unexpected error occurred"


class InterfaceError(Exception):
    """Base interface error."""

    pass


class APIError(InterfaceError):
    """Error rendered as ``{"message": ..., "error": ...}``."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        cause: Exception | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.cause = cause
        super().__init__(message)


def _error_detail(request: Request, error: Exception | None) -> str:
    """Underlying error message, redacted outside development and test."""
    settings: Settings = request.app.state.settings
    if error is not None and settings.expose_error_details:
        return str(error)
    return REDACTED_ERROR


async def authentication_required_handler(
    request: Request, exc: AuthenticationRequiredError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"message": "Authentication required"},
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": "User not found"},
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.message} on {request.url.path}: {exc.cause}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "error": _error_detail(request, exc.cause)},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "message": "Internal server error",
            "error": _error_detail(request, exc),
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    """Map domain and interface errors to JSON error bodies.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(
        AuthenticationRequiredError, authentication_required_handler
    )
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
