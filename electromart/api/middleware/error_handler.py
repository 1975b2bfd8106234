"""
Error Handling Middleware for ElectroMart

Centralized error handling:
- Structured error responses ({"error", "details", "errors"})
- Logging of errors
- Exception translation (request binding, routing, unexpected failures)
"""

import traceback
from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException


INVALID_JSON_MESSAGE = "Invalid JSON data"
VALIDATION_MESSAGE = "Validation error"
UNKNOWN_ROUTE_MESSAGE = "endpoint not found or method not allowed"
METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed"


class ElectroMartException(Exception):
    """Base exception for ElectroMart errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        detail: Optional[str] = None,
        errors: Optional[list[str]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.detail = detail
        self.errors = errors
        super().__init__(message)


class NotFoundError(ElectroMartException):
    """Resource not found (or an empty search)."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class ValidationError(ElectroMartException):
    """Input validation failed."""

    def __init__(
        self,
        message: str = VALIDATION_MESSAGE,
        detail: Optional[str] = None,
        errors: Optional[list[str]] = None,
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            errors=errors,
        )


class AuthenticationError(ElectroMartException):
    """Missing or rejected credentials."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
        )


class StoreError(ElectroMartException):
    """The relational store failed while serving a request."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )


def create_error_response(
    error: str,
    status_code: int,
    detail: Optional[str] = None,
    errors: Optional[list[str]] = None,
) -> JSONResponse:
    """Create standardized error response."""
    content = {"error": error}
    if detail is not None:
        content["details"] = detail
    if errors:
        content["errors"] = errors

    return JSONResponse(status_code=status_code, content=content)


def _describe_binding_error(exc: RequestValidationError) -> Optional[str]:
    """First binding problem as a short human-readable string."""
    errors = exc.errors()
    if not errors:
        return None

    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "")
    return f"{location}: {message}" if location else message


def setup_exception_handlers(app):
    """Register exception handlers with FastAPI app."""

    @app.exception_handler(ElectroMartException)
    async def electromart_exception_handler(request: Request, exc: ElectroMartException):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.message} ({exc.detail})")
        else:
            logger.warning(f"{request.method} {request.url.path}: {exc.message}")
        return create_error_response(
            error=exc.message,
            status_code=exc.status_code,
            detail=exc.detail,
            errors=exc.errors,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        detail = _describe_binding_error(exc)
        logger.warning(f"Malformed body for {request.method} {request.url.path}: {detail}")
        return create_error_response(
            error=INVALID_JSON_MESSAGE,
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = UNKNOWN_ROUTE_MESSAGE
        elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            message = METHOD_NOT_ALLOWED_MESSAGE
        else:
            message = str(exc.detail)
        return create_error_response(error=message, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}\n{traceback.format_exc()}"
        )
        return create_error_response(
            error="Internal Server Error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
        )
