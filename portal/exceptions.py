"""
Global exception handlers and custom exception classes.

Every failure leaves the API in the error envelope:
``{"success": false, "error": "<message>"}``.
"""
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from .core.responses import error_response

# Set up logging
logger = logging.getLogger(__name__)

VALUE_ERROR_PREFIX = "Value error, "

class AppException(Exception):
    """
    Base exception class for application-specific exceptions.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, detail: str = None, status_code: int = None):
        self.detail = detail or self.default_detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.detail)


class AuthenticationError(AppException):
    """Missing, invalid or expired credentials, token or session."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"


class AuthorizationError(AppException):
    """Authenticated user's role does not permit the operation."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class NotFoundError(AppException):
    """Requested entity does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ValidationError(AppException):
    """Malformed input detected by a handler."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Validation error"


class ConflictError(AppException):
    """Unique value (email) already owned by another user."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Email is already in use"


class InternalError(AppException):
    """Unexpected store or codec failure."""


def format_validation_errors(errors) -> str:
    """
    Join pydantic error messages into a single line.

    Pydantic prefixes messages raised by our own validators with
    "Value error, "; the prefix is dropped.
    """
    messages = []
    for error in errors:
        message = error.get("msg", "Invalid value")
        if message.startswith(VALUE_ERROR_PREFIX):
            message = message[len(VALUE_ERROR_PREFIX):]
        messages.append(message)
    return f"Validation error: {', '.join(messages)}"


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: Error envelope
    """
    if exc.status_code >= 500:
        logger.error(f"Application error: {exc.detail}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return error_response(exc.detail, exc.status_code)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Args:
        request: The request that caused the exception
        exc: The validation exception instance

    Returns:
        JSONResponse: 400 error envelope listing every validation message
    """
    message = format_validation_errors(exc.errors())
    logger.warning(f"{request.method} {request.url.path}: {message}")
    return error_response(message, status.HTTP_400_BAD_REQUEST)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Framework-raised HTTP errors (unknown route, wrong method)."""
    return error_response(str(exc.detail), exc.status_code)


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last resort: log the fault and hide it behind a generic 500."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!r}")
    return error_response("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
