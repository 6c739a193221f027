"""Error handling utilities for Spruthub MCP.

Provides structured error types and utilities for consistent error handling
across the MCP server with actionable recovery suggestions.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling."""

    TIMEOUT = "timeout"
    UPSTREAM_FAILURE = "upstream_failure"
    MISSING_CONNECTION = "missing_connection_parameters"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    API_ERROR = "api_error"
    INTERNAL_ERROR = "internal_error"


@dataclass
class ToolError:
    """Structured error response for MCP tools."""

    category: ErrorCategory
    message: str
    request_id: str | None = None
    recovery: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to response dict."""
        result: dict[str, Any] = {
            "error": self.message,
            "error_category": self.category.value,
        }
        if self.request_id:
            result["request_id"] = self.request_id
        if self.recovery:
            result["recovery"] = self.recovery
        if self.details:
            result["details"] = self.details
        return result


# Recovery suggestions for different error types
RECOVERY_SUGGESTIONS = {
    ErrorCategory.TIMEOUT: "The hub may be unresponsive. Check network connectivity and try again.",
    ErrorCategory.UPSTREAM_FAILURE: "The hub rejected the request. Check parameters and hub status.",
    ErrorCategory.MISSING_CONNECTION: (
        "Set SPRUTHUB_WS_URL, SPRUTHUB_EMAIL, SPRUTHUB_PASSWORD and SPRUTHUB_SERIAL."
    ),
    ErrorCategory.NOT_FOUND: "Use 'spruthub_list_accessories' to see available accessories.",
    ErrorCategory.INVALID_INPUT: "Check parameter values and try again.",
    ErrorCategory.API_ERROR: "Connection to the hub failed. Try again in a moment.",
    ErrorCategory.INTERNAL_ERROR: "An unexpected error occurred. Please try again.",
}


def get_recovery_suggestion(category: ErrorCategory) -> str:
    """Get recovery suggestion for an error category."""
    return RECOVERY_SUGGESTIONS.get(category, "Please try again.")


class UpstreamFailure(Exception):
    """Raised when the hub reports a non-success status or the call fails."""

    def __init__(self, operation: str, cause: Any):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Failed to {operation}: {cause}")


class MissingConnectionParameters(Exception):
    """Raised when the hub connection cannot be built from configuration."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            "Not connected and missing required connection parameters. "
            f"Set environment variables: {', '.join(missing)}"
        )


class BadInput(ValueError):
    """Raised when a tool is called with malformed or missing parameters."""


class NotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, kind: str, identifier: Any):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")


def generate_request_id() -> str:
    """Generate a short unique request ID for tracing."""
    return str(uuid.uuid4())[:8]


def classify_exception(e: Exception) -> ToolError:
    """Classify an exception into a structured error.

    Args:
        e: The exception to classify

    Returns:
        ToolError with appropriate category and recovery suggestion
    """
    details: dict[str, Any] = {}

    if isinstance(e, asyncio.TimeoutError):
        category = ErrorCategory.TIMEOUT
        message = "Operation timed out"
    elif isinstance(e, MissingConnectionParameters):
        category = ErrorCategory.MISSING_CONNECTION
        message = str(e)
        details["missing"] = e.missing
    elif isinstance(e, UpstreamFailure):
        category = ErrorCategory.UPSTREAM_FAILURE
        message = str(e)
    elif isinstance(e, NotFoundError):
        category = ErrorCategory.NOT_FOUND
        message = str(e)
    elif isinstance(e, ValueError):
        category = ErrorCategory.INVALID_INPUT
        message = str(e)
    elif isinstance(e, ConnectionError):
        category = ErrorCategory.API_ERROR
        message = f"Connection error: {e}"
    else:
        category = ErrorCategory.INTERNAL_ERROR
        message = f"Unexpected error: {e}"

    return ToolError(
        category=category,
        message=message,
        recovery=get_recovery_suggestion(category),
        details=details,
    )


# Default timeouts
DEFAULT_HANDLER_TIMEOUT = 30.0  # Total time for handler execution
DEFAULT_CONNECT_TIMEOUT = 15.0  # Time for opening the hub websocket
DEFAULT_REQUEST_TIMEOUT = 20.0  # Time for a single JSON-RPC round trip
