"""Error Hierarchy: typed, categorized exceptions for every gateway failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are raised before any database call
    - ExecutionError (500) carries the engine's message text verbatim
    - to_response() produces the failure envelope {success: false, error: message}

Design Decisions:
    - Single hierarchy with GatewayError base: one FastAPI handler maps all of them
      (ADR: uniform error shape)
    - Messages are part of the public contract: clients match on them, so they are
      fixed strings, not formatted with request data
"""

from enum import Enum
from typing import Any, Iterable

from sql_gateway.core.envelope import failure


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        meta: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.meta = meta

    def to_response(self) -> dict:
        """Convert to the failure envelope."""
        return failure(self.message, meta=self.meta)


# ─── Request Errors (400-level) ─────────────────────────────────

class UnauthorizedError(GatewayError):
    """Credential header missing, empty or not matching the configured secret."""
    def __init__(self):
        super().__init__(
            "Unauthorized: Invalid or missing API key",
            "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 401,
        )


class InvalidTableNameError(GatewayError):
    """Table name failed the identifier allow-list."""
    def __init__(self, table: str):
        super().__init__(
            "Invalid table name", "INVALID_TABLE_NAME",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, 400,
        )
        self.table = table


class MissingBodyError(GatewayError):
    """Write request arrived without a non-empty JSON object."""
    def __init__(self):
        super().__init__(
            "Request body is required", "BODY_REQUIRED",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, 400,
        )


class MissingQueryError(GatewayError):
    """Raw query request without SQL text."""
    def __init__(self):
        super().__init__(
            "Query is required", "QUERY_REQUIRED",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, 400,
        )


class InvalidRequestDataError(GatewayError):
    """Body is malformed JSON or has the wrong shape."""
    def __init__(self, details: list[dict]):
        super().__init__(
            "Invalid request data", "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, 400,
            meta={"details": details},
        )


class RecordNotFoundError(GatewayError):
    """No row matched the id (read) or no row was affected (update/delete)."""
    def __init__(self, table: str, record_id: str):
        super().__init__(
            "Record not found", "RECORD_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO, 404,
        )
        self.table = table
        self.record_id = record_id


class RouteNotFoundError(GatewayError):
    """No entry of the route table matched method + path."""
    def __init__(self):
        super().__init__(
            "Route not found", "ROUTE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ExecutionError(GatewayError):
    """Database rejected or failed the statement."""
    def __init__(self, message: str):
        super().__init__(
            message or "Internal server error", "EXECUTION_ERROR",
            ErrorCategory.DATABASE, ErrorSeverity.ERROR, 500,
        )


def validation_details(errors: Iterable[dict]) -> list[dict]:
    """Flatten pydantic error dicts into {field, message, type} entries."""
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in errors
    ]
