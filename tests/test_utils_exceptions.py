"""Tests for wirecall.utils.exceptions module."""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from wirecall.utils.exceptions import (
    CodecError,
    ErrorCategory,
    InputValidationError,
    MalformedInputError,
    MissingInputError,
    RoutingError,
    RpcClientError,
    WirecallError,
    is_validation_error,
    sanitize_error_message,
    validation_details,
)


class _Strict(BaseModel):
    name: str


def _pydantic_error():
    try:
        _Strict.model_validate({"name": 1})
    except Exception as exc:
        return exc
    raise AssertionError("expected a validation error")


class TestExceptionClasses:
    """Test custom exception classes."""

    def test_wirecall_error_defaults(self) -> None:
        exc = WirecallError("test message", code="TEST_CODE")
        assert exc.message == "test message"
        assert exc.category == ErrorCategory.INTERNAL
        assert exc.details is None
        assert str(exc) == "[TEST_CODE] test message"

    def test_routing_error(self) -> None:
        exc = RoutingError("unknown endpoint")
        assert exc.code == "BAD_REQUEST"
        assert exc.category == ErrorCategory.ROUTING

    def test_missing_input_error(self) -> None:
        exc = MissingInputError("getUser")
        assert isinstance(exc, RoutingError)
        assert exc.code == "MISSING_INPUT"
        assert "getUser" in exc.message
        assert "'input'" in exc.message

    def test_malformed_input_error(self) -> None:
        exc = MalformedInputError("getUser")
        assert exc.code == "MALFORMED_INPUT"
        assert exc.message == "Malformed input for getUser"

    def test_input_validation_error(self) -> None:
        exc = InputValidationError("details here")
        assert exc.message == "Invalid request data"
        assert exc.details == "details here"
        assert exc.category == ErrorCategory.VALIDATION

    def test_codec_error(self) -> None:
        exc = CodecError("bad token")
        assert exc.code == "CODEC_ERROR"

    def test_rpc_client_error_message_is_plain(self) -> None:
        exc = RpcClientError("Not found", status_code=404)
        assert str(exc) == "Not found"
        assert exc.code == "REQUEST_FAILED"
        assert exc.category == ErrorCategory.TRANSPORT


class TestSanitizeErrorMessage:
    """Test sanitize_error_message function."""

    def test_no_sensitive_info(self) -> None:
        assert sanitize_error_message("Operation failed") == "Operation failed"

    def test_sanitize_api_key(self) -> None:
        result = sanitize_error_message("API key: sk-1234567890abcdefghijklmnop")
        assert "sk-1234567890" not in result
        assert "[REDACTED]" in result

    def test_sanitize_bearer(self) -> None:
        result = sanitize_error_message("header Bearer abc.def-ghi")
        assert "abc.def-ghi" not in result

    def test_custom_replacement(self) -> None:
        result = sanitize_error_message("password=hunter2", replacement="[HIDDEN]")
        assert "hunter2" not in result
        assert "[HIDDEN]" in result


class TestValidationDetection:
    def test_pydantic_error_detected(self) -> None:
        exc = _pydantic_error()
        assert is_validation_error(exc)
        details = validation_details(exc)
        assert "name" in details
        assert "https://errors.pydantic.dev" not in details

    def test_issues_marker_detected(self) -> None:
        exc = ValueError("bad")
        exc.issues = [{"path": ["id"]}]  # type: ignore[attr-defined]
        assert is_validation_error(exc)
        assert validation_details(exc) == "bad"

    def test_plain_errors_not_detected(self) -> None:
        assert not is_validation_error(RuntimeError("boom"))

    @pytest.mark.parametrize("exc", [KeyError("x"), TypeError("y")])
    def test_builtin_errors_not_detected(self, exc: Exception) -> None:
        assert not is_validation_error(exc)
