"""Error Hierarchy — typed, categorized exceptions for all storefront failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input errors (400-level) carry no side effects; store/export errors (500-level) imply rollback
    - to_response() produces the REST envelope; `details` holds what the client can act on
    - No internal details leaked in user-facing messages
    - ErrorContext is logged, never serialized beyond order_group_id / product_id

Design Decisions:
    - Single hierarchy with StorefrontError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    FILESYSTEM = "filesystem"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    order_group_id: int | None = None
    product_id: int | None = None
    url: str | None = None
    debug_info: dict[str, Any] | None = None


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

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
    def details(self) -> dict[str, Any]:
        """Error-specific fields for the response and the log record."""
        return {}

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "context": {
                "order_group_id": self.context.order_group_id,
                "product_id": self.context.product_id,
            },
        }
        if self.details:
            body["details"] = self.details
        return {"error": body}


# ─── Input Errors (400-level) ───────────────────────────────────

class OrderValidationError(StorefrontError):
    """Order form is incomplete or malformed. Raised before any store access."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field

    @property
    def details(self) -> dict[str, Any]:
        return {"field": self.field}


# ─── Infrastructure Errors (500-level) ──────────────────────────

class UpstreamFetchError(StorefrontError):
    """Catalog source call failed (page or item detail)."""
    def __init__(
        self, message: str, url: str, status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.url = url
        super().__init__(
            f"Catalog fetch failed for {url}: {message}",
            "UPSTREAM_FETCH_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, ctx, 502,
        )
        self.url = url
        self.status_code = status_code

    @property
    def details(self) -> dict[str, Any]:
        return {"url": self.url, "upstream_status": self.status_code}


class PersistenceError(StorefrontError):
    """Store operation failed inside a transaction (always rolled back)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "PERSISTENCE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation

    @property
    def details(self) -> dict[str, Any]:
        return {"operation": self.operation, "rolled_back": True}


class ExportError(StorefrontError):
    """Order export file could not be written."""
    def __init__(self, message: str, path: str, context: ErrorContext | None = None):
        super().__init__(
            f"Order export failed: {message}",
            "EXPORT_ERROR", ErrorCategory.FILESYSTEM,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.path = path
