"""Error Hierarchy — typed, categorized exceptions for every social API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error knows its HTTP status; handlers map 1:1 without inspecting messages
    - Store-layer errors are always one of ConflictError / UnavailableError / InternalError
    - No driver or backend text in user-facing messages

Design Decisions:
    - Single hierarchy with SocialError base: FastAPI global handler catches all
    - ConfigurationError shares the base so startup failures log the same way
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Extra context surfaced in logs and, where safe, in the response."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    field_name: str | None = None
    operation: str | None = None
    retry_after_seconds: int | None = None
    debug_info: dict[str, Any] | None = None


class SocialError(Exception):
    """Base exception for all social API errors."""

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
        """Convert to standardized REST error response (debug_info never included)."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "field": self.context.field_name,
                    "retry_after_seconds": self.context.retry_after_seconds,
                },
            }
        }


# ─── Startup Errors ─────────────────────────────────────────────

class ConfigurationError(SocialError):
    """Configuration could not be resolved; the process must not start."""
    def __init__(self, message: str, keys: list[str] | None = None):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, None, 500,
        )
        self.keys = keys or []


# ─── Request Errors (400-level) ─────────────────────────────────

class RouteNotFoundError(SocialError):
    """No route registered for (method, path)."""
    def __init__(self, method: str, path: str):
        super().__init__(
            f"No route for {method} {path}",
            "ROUTE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, None, 404,
        )
        self.method = method
        self.path = path


class ConflictError(SocialError):
    """Unique constraint violated (username or email already taken)."""
    def __init__(self, field: str | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = field
        message = (
            f"{field} already exists" if field
            else "username or email already exists"
        )
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class UnavailableError(SocialError):
    """Backing store unreachable, exhausted, or too slow."""
    def __init__(
        self,
        operation: str,
        retry_after_seconds: int = 1,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        ctx.retry_after_seconds = retry_after_seconds
        super().__init__(
            "Service temporarily unavailable, retry later",
            "SERVICE_UNAVAILABLE", ErrorCategory.UNAVAILABLE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation


class InternalError(SocialError):
    """Unexpected backend failure (malformed query, schema mismatch), a bug signal."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            "An unexpected error occurred",
            "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
