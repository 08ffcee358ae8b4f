"""Error Hierarchy: typed, categorized exceptions for SchoolDesk failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() produces the failure envelope {success: false, message, error}
    - TransportError.response mirrors the decoded HTTP response (None on network failure)
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SchoolDeskError base: FastAPI global handler catches all
    - Client-side code never branches on subclasses; describe_error() flattens
      every failure into ErrorInfo(message)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    CONFLICT = "conflict"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """When and where a failure happened (method/url set for outbound calls)."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    method: str | None = None
    url: str | None = None


class SchoolDeskError(Exception):
    """Base exception for all SchoolDesk errors."""

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
        """Convert to the failure envelope."""
        return {
            "success": False,
            "message": self.message,
            "error": {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(SchoolDeskError):
    """Requested record does not exist."""
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


class QueryDisposedError(SchoolDeskError):
    """Query or mutation used after dispose()."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"'{name}' has been disposed",
            "DISPOSED", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.name = name


class InvalidStateError(SchoolDeskError):
    """Action not allowed in the record's current status."""
    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        action: str,
        status: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' cannot be {action} while {status}",
            "INVALID_STATE", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.status = status


# ─── Infrastructure Errors (500-level) ──────────────────────────

class TransportError(SchoolDeskError):
    """Outbound HTTP call failed (network, timeout, status, decode)."""
    def __init__(
        self,
        message: str,
        response: Any = None,
        category: ErrorCategory = ErrorCategory.EXTERNAL_API,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "TRANSPORT_ERROR", category,
            ErrorSeverity.ERROR, context, 502,
        )
        self.response = response

    @property
    def status_code(self) -> int | None:
        return getattr(self.response, "status_code", None)
