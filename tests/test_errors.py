"""Tests for error classification and retry."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from utils.errors import (
    BadInput,
    ErrorCategory,
    MissingConnectionParameters,
    NotFoundError,
    ToolError,
    UpstreamFailure,
    classify_exception,
    generate_request_id,
)
from utils.retry import RetryExhausted, retry_async


class TestErrorMessages:
    """Tests for exception wording."""

    def test_upstream_failure(self):
        e = UpstreamFailure("list rooms", "List failed")
        assert str(e) == "Failed to list rooms: List failed"
        assert e.cause == "List failed"

    def test_missing_connection(self):
        e = MissingConnectionParameters(["SPRUTHUB_EMAIL", "SPRUTHUB_SERIAL"])
        assert str(e) == (
            "Not connected and missing required connection parameters. "
            "Set environment variables: SPRUTHUB_EMAIL, SPRUTHUB_SERIAL"
        )

    def test_not_found(self):
        assert str(NotFoundError("Accessory", 7)) == "Accessory not found: 7"


class TestClassifyException:
    """Tests for classify_exception."""

    def test_timeout(self):
        assert classify_exception(asyncio.TimeoutError()).category == ErrorCategory.TIMEOUT

    def test_missing_connection(self):
        error = classify_exception(MissingConnectionParameters(["SPRUTHUB_WS_URL"]))
        assert error.category == ErrorCategory.MISSING_CONNECTION
        assert error.details == {"missing": ["SPRUTHUB_WS_URL"]}

    def test_upstream(self):
        error = classify_exception(UpstreamFailure("get version", "boom"))
        assert error.category == ErrorCategory.UPSTREAM_FAILURE
        assert error.message == "Failed to get version: boom"

    def test_bad_input(self):
        assert classify_exception(BadInput("nope")).category == ErrorCategory.INVALID_INPUT

    def test_not_found(self):
        assert classify_exception(NotFoundError("Accessory", 1)).category == ErrorCategory.NOT_FOUND

    def test_connection_error(self):
        error = classify_exception(ConnectionError("reset"))
        assert error.category == ErrorCategory.API_ERROR
        assert "reset" in error.message

    def test_unexpected(self):
        error = classify_exception(KeyError("x"))
        assert error.category == ErrorCategory.INTERNAL_ERROR
        assert error.recovery


class TestToolError:
    """Tests for the serialized error shape."""

    def test_to_dict_minimal(self):
        error = ToolError(category=ErrorCategory.INVALID_INPUT, message="bad")
        assert error.to_dict() == {"error": "bad", "error_category": "invalid_input"}

    def test_to_dict_full(self):
        error = ToolError(
            category=ErrorCategory.TIMEOUT,
            message="slow",
            request_id="abc12345",
            recovery="retry",
            details={"tool": "x"},
        )
        data = error.to_dict()
        assert data["request_id"] == "abc12345"
        assert data["recovery"] == "retry"
        assert data["details"] == {"tool": "x"}

    def test_request_ids_unique(self):
        assert generate_request_id() != generate_request_id()


class TestRetryAsync:
    """Tests for retry_async."""

    @pytest.mark.asyncio
    async def test_succeeds_after_retry(self):
        func = AsyncMock(side_effect=[OSError("refused"), "ok"])
        with patch("utils.retry.asyncio.sleep", new=AsyncMock()):
            result = await retry_async(func, max_attempts=3, retryable_exceptions=(OSError,))
        assert result == "ok"
        assert func.await_count == 2

    @pytest.mark.asyncio
    async def test_exhausted(self):
        func = AsyncMock(side_effect=OSError("refused"))
        with patch("utils.retry.asyncio.sleep", new=AsyncMock()):
            with pytest.raises(RetryExhausted) as exc_info:
                await retry_async(func, max_attempts=2, retryable_exceptions=(OSError,))
        assert exc_info.value.attempts == 2
        assert isinstance(exc_info.value.last_exception, OSError)

    @pytest.mark.asyncio
    async def test_non_retryable_propagates(self):
        func = AsyncMock(side_effect=KeyError("x"))
        with pytest.raises(KeyError):
            await retry_async(func, max_attempts=3, retryable_exceptions=(OSError,))
        assert func.await_count == 1
