"""Error Hierarchy — typed, categorized exceptions for every bookstore failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries the HTTP status it maps to; the API layer never re-derives it
    - to_response() produces {"error": <message>} with code, category, severity and
      timestamp as sibling keys, so clients reading body["error"] get the message string
    - No internal details leaked in user-facing messages (driver errors stay in logs)

Design Decisions:
    - Single hierarchy with BookstoreError base: one FastAPI handler catches all
      (ADR: uniform error shape)
    - AuthError split into UnauthenticatedError (401) and ForbiddenError (403):
      the handler needs no branching, the subclass carries the status
    - ConfigError is raised at startup only, never per request
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    account_id: int | None = None
    book_id: int | None = None
    debug_info: dict[str, Any] | None = None


class BookstoreError(Exception):
    """Base exception for all bookstore errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": self.message,
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(BookstoreError):
    """Malformed or missing input."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class InvalidCredentialsError(BookstoreError):
    """Email found but the password does not match."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Incorrect password",
            "INVALID_CREDENTIALS", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class AuthError(BookstoreError):
    """Base for identity and role failures."""


class UnauthenticatedError(AuthError):
    """Missing, malformed, mis-signed or expired identity token."""
    def __init__(
        self, message: str = "Missing or invalid credentials",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(AuthError):
    """Valid identity whose role does not permit the operation."""
    def __init__(
        self, message: str = "Admin privileges required",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(BookstoreError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type


class ConflictError(BookstoreError):
    """A uniqueness rule would be violated."""
    def __init__(
        self, message: str, code: str = "CONFLICT",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class EmailTakenError(ConflictError):
    """Another account already owns this email."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("User already exists", "EMAIL_TAKEN", context)


class DuplicateReviewError(ConflictError):
    """The account already reviewed this book."""
    def __init__(self, account_id: int, book_id: int):
        super().__init__(
            f"Account {account_id} has already reviewed book {book_id}",
            "DUPLICATE_REVIEW",
            ErrorContext(account_id=account_id, book_id=book_id),
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class InternalError(BookstoreError):
    """Unclassified server-side failure."""
    def __init__(
        self, message: str = "An unexpected error occurred",
        code: str = "INTERNAL_ERROR", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class HashingError(InternalError):
    """Password hashing backend failed or digest is unreadable."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Cannot hash password", "HASHING_ERROR", context)


class DatabaseError(InternalError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}", "DATABASE_ERROR", context,
        )
        self.category = ErrorCategory.DATABASE
        self.operation = operation


class ConfigError(BookstoreError):
    """Process configuration is unusable. Raised at startup."""
    def __init__(self, message: str, setting: str):
        super().__init__(
            message, "CONFIG_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, None, 500,
        )
        self.setting = setting
