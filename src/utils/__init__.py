"""Utility modules for Spruthub MCP."""

from utils.errors import (
    BadInput,
    ErrorCategory,
    MissingConnectionParameters,
    NotFoundError,
    ToolError,
    UpstreamFailure,
    classify_exception,
)
from utils.retry import RetryExhausted, retry_async

__all__ = [
    "BadInput",
    "ErrorCategory",
    "MissingConnectionParameters",
    "NotFoundError",
    "RetryExhausted",
    "ToolError",
    "UpstreamFailure",
    "classify_exception",
    "retry_async",
]
