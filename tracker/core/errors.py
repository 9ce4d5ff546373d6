"""Error Hierarchy: typed, categorized exceptions for all tracker failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors are 400-level; infrastructure errors are 500-level
    - to_response() produces the REST envelope rendered by the global handlers
    - No internal details leaked in user-facing messages (details are opt-in)

Design Decisions:
    - Single hierarchy with TrackerError base: FastAPI global handler catches all
    - Registration conflicts surface as a generic 400 so the response does not
      confirm which emails are registered
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
    PERSISTENCE = "persistence"
    DATABASE = "database"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    resource: str | None = None
    debug_info: dict[str, Any] | None = None


class TrackerError(Exception):
    """Base exception for all tracker errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "context": {
                "user_id": self.context.user_id,
                "resource": self.context.resource,
            },
        }
        if self.details is not None:
            body["details"] = self.details
        return {"error": body}


# ─── Request Errors (400-level) ─────────────────────────────────

class ValidationError(TrackerError):
    """Request input is missing or malformed."""
    def __init__(
        self, message: str, fields: list[str] | None = None,
        details: Any = None, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400, details,
        )
        self.fields = fields or []

    def to_response(self) -> dict:
        """Envelope plus the names of the offending fields."""
        response = super().to_response()
        response["error"]["fields"] = self.fields
        return response


class AuthError(TrackerError):
    """Login credentials did not match a user."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid credentials", "INVALID_CREDENTIALS",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 400,
        )


class ConflictError(TrackerError):
    """Registration rejected because the email is already in use."""
    def __init__(self, details: Any = None, context: ErrorContext | None = None):
        super().__init__(
            "User registration failed", "REGISTRATION_FAILED",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, context, 400, details,
        )


class PersistenceError(TrackerError):
    """The store rejected a create/delete operation."""
    def __init__(
        self, message: str, details: Any = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "PERSISTENCE_ERROR", ErrorCategory.PERSISTENCE,
            ErrorSeverity.ERROR, context, 400, details,
        )


class TokenError(TrackerError):
    """Bearer token missing, malformed, expired or badly signed."""
    def __init__(self, message: str = "Authentication required", context: ErrorContext | None = None):
        super().__init__(
            message, "AUTHENTICATION_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(TrackerError):
    """Request targets records owned by another user."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Not allowed to access another user's records", "FORBIDDEN",
            ErrorCategory.AUTHORIZATION, ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(TrackerError):
    """Requested resource does not exist for this owner."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TrackerError):
    """Database connection or driver failure."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
