"""Error Hierarchy — typed, categorized exceptions for all QuoteDesk failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - SequenceGenerationError is WARNING: the caller continues with a fallback number
    - to_response() produces the base REST envelope (api/error_handlers.py adds
      per-type fields such as violations)
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with QuoteDeskError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from quotedesk.core.validation import format_violations


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    SEQUENCE = "sequence"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity_kind: str | None = None
    record_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class QuoteDeskError(Exception):
    """Base exception for all QuoteDesk errors."""

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

    @property
    def recoverable(self) -> bool:
        return self.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "entity_kind": self.context.entity_kind,
                    "record_id": self.context.record_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class RecordValidationError(QuoteDeskError):
    """One or more field rules failed; message lists every violation."""
    def __init__(self, violations: list[str], context: ErrorContext | None = None):
        super().__init__(
            format_violations(violations), "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, context, 400,
        )
        self.violations = list(violations)


class ResourceNotFoundError(QuoteDeskError):
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
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class PersistenceError(QuoteDeskError):
    """Store operation failed. retryable marks transient (connection-level) faults."""
    def __init__(
        self,
        message: str,
        operation: str,
        context: ErrorContext | None = None,
        retryable: bool = False,
    ):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
        self.retryable = retryable


class SequenceGenerationError(QuoteDeskError):
    """Counter collaborator failed; a fallback number was issued instead."""
    def __init__(
        self, kind: str, fallback: str, cause: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity_kind = kind
        super().__init__(
            f"Sequence number generation for {kind} failed ({cause}); "
            f"falling back to {fallback}",
            "SEQUENCE_GENERATION_ERROR", ErrorCategory.SEQUENCE,
            ErrorSeverity.WARNING, ctx, 500,
        )
        self.fallback = fallback
