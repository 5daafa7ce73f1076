"""Error Hierarchy — typed, categorized exceptions for all AMP checker failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - UnsupportedMethodError is fatal: never converted into a verdict
    - PageFetchError and ValidatorError are recovered by the service into verdicts
    - to_response() produces the REST error envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with AmpCheckError base: FastAPI global handler catches all
    - PageFetchError carries a FetchFailure tag instead of one subclass per cause,
      so the verdict table can be checked for exhaustiveness
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from ampcheck.core.domain_types import FetchFailure


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    EXTERNAL_API = "external_api"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    target_url: str | None = None
    http_method: str | None = None
    debug_info: dict[str, Any] | None = None


class AmpCheckError(Exception):
    """Base exception for all AMP checker errors."""

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
                    "target_url": self.context.target_url,
                    "http_method": self.context.http_method,
                },
            }
        }


# ─── Caller-Contract Errors (fatal) ─────────────────────────────

class UnsupportedMethodError(AmpCheckError):
    """Trigger invoked with a method other than GET."""
    def __init__(self, method: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.http_method = method
        super().__init__(
            f"This function only accepts GET method, you tried: {method}",
            "UNSUPPORTED_METHOD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 405,
        )
        self.method = method


# ─── Infrastructure Errors (recovered into verdicts) ────────────

class PageFetchError(AmpCheckError):
    """Outbound fetch of the target page failed."""
    def __init__(
        self,
        message: str,
        reason: FetchFailure,
        context: ErrorContext | None = None,
    ):
        category = (
            ErrorCategory.TIMEOUT if reason is FetchFailure.TIMEOUT
            else ErrorCategory.EXTERNAL_API
        )
        super().__init__(
            f"Page fetch failed ({reason.value}): {message}",
            "PAGE_FETCH_ERROR", category,
            ErrorSeverity.WARNING, context, 502,
        )
        self.reason = reason


class ValidatorError(AmpCheckError):
    """AMP validator could not be initialized or did not produce a result."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"AMP validator failed: {message}",
            "VALIDATOR_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 503,
        )
