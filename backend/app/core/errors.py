"""Error Hierarchy — typed, categorized exceptions for all project failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Errors carry no transport concerns: the API layer maps category -> HTTP status
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with BoonkosangError base: one global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    """High-level error categories — the boundary switches on these."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    project_id: str | None = None
    field: str | None = None
    current_status: str | None = None
    debug_info: dict[str, Any] | None = None


class BoonkosangError(Exception):
    """Base exception for all project service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

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
                    "project_id": self.context.project_id,
                    "field": self.context.field,
                    "current_status": self.context.current_status,
                },
            }
        }


# ─── Domain Errors ──────────────────────────────────────────────

class ProjectValidationError(BoonkosangError):
    """Project fields missing or malformed."""
    def __init__(self, message: str, field: str | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx,
        )
        self.field = field


class ResourceNotFoundError(BoonkosangError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.project_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ProjectConflictError(BoonkosangError):
    """Operation not legal for the project's current status."""
    def __init__(
        self, project_id: str, status: str, action: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.project_id = project_id
        ctx.current_status = status
        super().__init__(
            f"Cannot {action} project '{project_id}': project is {status}",
            "PROJECT_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx,
        )
        self.status = status
        self.action = action


# ─── Infrastructure Errors ──────────────────────────────────────

class DatabaseError(BoonkosangError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation
