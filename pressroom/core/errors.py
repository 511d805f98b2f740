"""Error Hierarchy — typed, categorized exceptions for all Pressroom failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; upstream errors (500-level) are critical
    - to_response() produces the REST envelope; to_action_error() the write-action envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PressroomError base: the global handler catches all of it
    - DatabaseError is an UpstreamFailureError: read paths treat both as a hard failure
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
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    post_id: str | None = None
    slug: str | None = None
    user_id: str | None = None
    debug_info: dict[str, Any] | None = None


class PressroomError(Exception):
    """Base exception for all Pressroom errors."""

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
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "post_id": self.context.post_id,
                    "slug": self.context.slug,
                },
            }
        }

    def to_action_error(self) -> dict:
        """Convert to the error payload carried by a write-action result."""
        return {"code": self.code, "message": self.message}


# ─── Domain Errors (400-level) ──────────────────────────────────

class UnauthenticatedError(PressroomError):
    """No valid session is present."""
    def __init__(
        self, message: str = "Authentication required",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message,
            "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(PressroomError):
    """Session present, but the actor does not own the resource."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        super().__init__(
            f"You can only {action} your own posts",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.action = action


class ValidationError(PressroomError):
    """Required input is missing or malformed."""
    def __init__(self, message: str, fields: list[str], context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.fields = fields


class ResourceNotFoundError(PressroomError):
    """Requested resource does not exist (or is not visible to the caller)."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class SlugConflictError(PressroomError):
    """A post with the requested slug already exists."""
    def __init__(self, slug: str, context: ErrorContext | None = None):
        super().__init__(
            "A post with this slug already exists",
            "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.slug = slug


class ConcurrencyError(PressroomError):
    """Post was modified by another request since it was read."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Upstream Errors (500-level) ────────────────────────────────

class UpstreamFailureError(PressroomError):
    """A store or asset-upload call failed."""
    def __init__(
        self,
        message: str,
        service: str,
        category: ErrorCategory = ErrorCategory.EXTERNAL_API,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UPSTREAM_FAILURE", category,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.service = service


class DatabaseError(UpstreamFailureError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "database", ErrorCategory.DATABASE, context,
        )
        self.operation = operation
