"""Error Hierarchy — typed, categorized exceptions for all PizzaSplit failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input errors (400-level) are recoverable; engine defects and infrastructure
      errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PizzaSplitError base: FastAPI global handler catches all
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
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    order_id: str | None = None
    participant_id: str | None = None
    scheme_id: str | None = None
    debug_info: dict[str, Any] | None = None


class PizzaSplitError(Exception):
    """Base exception for all PizzaSplit errors."""

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
                    "order_id": self.context.order_id,
                    "participant_id": self.context.participant_id,
                    "scheme_id": self.context.scheme_id,
                },
            }
        }


# ─── Input Errors (400-level) ───────────────────────────────────

class InvalidParticipantError(PizzaSplitError):
    """Participant slice bounds out of range or inverted."""
    def __init__(
        self, message: str, participant_id: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.participant_id = participant_id
        super().__init__(
            message, "INVALID_PARTICIPANT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )


class InvalidSettingsError(PizzaSplitError):
    """Order settings cannot drive a calculation."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_SETTINGS", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class UnknownSchemeError(PizzaSplitError):
    """Requested cost-splitting scheme is not registered."""
    def __init__(self, scheme_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.scheme_id = scheme_id
        super().__init__(
            f"Unknown calculation scheme '{scheme_id}'",
            "UNKNOWN_SCHEME", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.scheme_id = scheme_id


class ResourceNotFoundError(PizzaSplitError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Engine Defects & Infrastructure (500-level) ────────────────

class InsufficientSupplyError(PizzaSplitError):
    """Plan delivers fewer slices than the participants' combined minimum."""
    def __init__(self, available: int, required: int, context: ErrorContext | None = None):
        super().__init__(
            f"Plan supplies {available} slice(s) but participants require {required}",
            "INSUFFICIENT_SUPPLY", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.available = available
        self.required = required


class DatabaseError(PizzaSplitError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
