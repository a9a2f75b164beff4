"""Error Handlers — global exception handlers for the bookstore API.

Invariants:
    - Every error body is {"error": <message>, "code", "category", "severity", ...}
    - BookstoreError → that body at exc.http_status
    - UnauthenticatedError responses carry WWW-Authenticate: Bearer
    - RequestValidationError → 400 with field-level error details (bad ids included)
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (BookstoreError), validation (Pydantic), catch-all (Exception)
    - Client errors logged at WARNING, server errors at ERROR: 4xx are expected traffic
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from bookstore.core.errors import BookstoreError, ErrorSeverity, UnauthenticatedError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_bookstore_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_bookstore_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(BookstoreError)
    async def bookstore_error_handler(request: Request, exc: BookstoreError):
        """Handle all bookstore domain/infrastructure errors."""
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"BookstoreError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "account_id": exc.context.account_id,
            },
        )
        headers = (
            {"WWW-Authenticate": "Bearer"}
            if isinstance(exc, UnauthenticatedError) else None
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
            headers=headers,
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": "Invalid input data",
        "code": "VALIDATION_ERROR",
        "category": "validation",
        "severity": ErrorSeverity.WARNING.value,
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }
