"""Error Hierarchy — typed, categorized exceptions for Clean Crud failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every error response
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CleanCrudError base: FastAPI global handler catches all
    - Expected failures travel as Result (core/result.py); RequestFailedError
      is only the bridge from a failed Result to the HTTP envelope
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from cleancrud.core.result import Error, ErrorKind


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    DATABASE = "database"
    INTERNAL = "internal"


# ErrorKind (Result failures) -> (category, HTTP status)
_KIND_MAPPING: dict[ErrorKind, tuple[ErrorCategory, int]] = {
    ErrorKind.VALIDATION: (ErrorCategory.VALIDATION, 400),
    ErrorKind.BUSINESS_RULE: (ErrorCategory.BUSINESS_RULE, 400),
    ErrorKind.NOT_FOUND: (ErrorCategory.RESOURCE_NOT_FOUND, 404),
    ErrorKind.CONFLICT: (ErrorCategory.CONFLICT, 409),
    ErrorKind.UNAUTHORIZED: (ErrorCategory.UNAUTHORIZED, 401),
    ErrorKind.FORBIDDEN: (ErrorCategory.FORBIDDEN, 403),
}


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    request_id: str | None = None
    user_id: str | None = None
    request_type: str | None = None
    debug_info: dict[str, Any] | None = None


class CleanCrudError(Exception):
    """Base exception for all Clean Crud errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: list[dict] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details or []

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "details": self.details,
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class RequestFailedError(CleanCrudError):
    """A mediator request returned a failed Result."""
    def __init__(self, errors: tuple[Error, ...] | list[Error], context: ErrorContext | None = None):
        if not errors:
            raise ValueError("RequestFailedError requires at least one error")
        first = errors[0]
        category, http_status = _KIND_MAPPING[first.kind]
        super().__init__(
            first.message, first.code, category,
            ErrorSeverity.ERROR, context, http_status,
            details=[
                {"field": e.field, "message": e.message, "code": e.code}
                for e in errors
            ],
        )
        self.errors = tuple(errors)


class UnauthorizedError(CleanCrudError):
    """Missing, expired or revoked credentials."""
    def __init__(self, message: str = "Authentication required", context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.UNAUTHORIZED,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(CleanCrudError):
    """Authenticated caller lacks permission for the action."""
    def __init__(self, message: str = "Not allowed", context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(CleanCrudError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
