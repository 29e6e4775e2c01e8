"""
Exception hierarchy and error helpers for wirecall.

Provides:
- Custom exception classes with error codes
- Error categorization (routing, validation, internal, transport)
- Safe error message formatting (no sensitive data leak)
- Structural detection of validator errors
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import ValidationError as PydanticValidationError


class ErrorCategory(Enum):
    """Error categories for classification."""
    ROUTING = "routing"
    VALIDATION = "validation"
    INTERNAL = "internal"
    TRANSPORT = "transport"


class WirecallError(Exception):
    """Base exception for all wirecall errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.INTERNAL,
        details: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class RoutingError(WirecallError):
    """Request could not be routed to a procedure. Safe to expose to callers."""

    def __init__(self, message: str, code: str = "BAD_REQUEST"):
        super().__init__(message, code=code, category=ErrorCategory.ROUTING)


class MissingInputError(RoutingError):
    """Procedure declares an input contract but the request carries no input token."""

    def __init__(self, procedure: str, param: str = "input"):
        super().__init__(
            f"Missing input: {procedure} expects an '{param}' query parameter",
            code="MISSING_INPUT",
        )
        self.procedure = procedure


class MalformedInputError(RoutingError):
    """Input token is present but cannot be decoded."""

    def __init__(self, procedure: str):
        super().__init__(f"Malformed input for {procedure}", code="MALFORMED_INPUT")
        self.procedure = procedure


class InputValidationError(WirecallError):
    """Decoded input was rejected by the procedure's contract."""

    def __init__(self, details: str):
        super().__init__(
            "Invalid request data",
            code="VALIDATION_ERROR",
            category=ErrorCategory.VALIDATION,
            details=details,
        )


class CodecError(WirecallError):
    """Value cannot be encoded to, or decoded from, a wire token."""

    def __init__(self, message: str):
        super().__init__(message, code="CODEC_ERROR", category=ErrorCategory.VALIDATION)


class RpcClientError(RuntimeError):
    """Remote call failed: non-ok response or transport failure."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "REQUEST_FAILED",
        status_code: int | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = ErrorCategory.TRANSPORT
        self.status_code = status_code
        self.details = details


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"[a-zA-Z0-9]{32,}"),
    re.compile(r"sk-[a-zA-Z0-9]{20,}"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove sensitive information from error messages."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def is_validation_error(exc: BaseException) -> bool:
    """True for pydantic validation errors and any error carrying an ``issues`` list."""
    if isinstance(exc, PydanticValidationError):
        return True
    return hasattr(exc, "issues")


def validation_details(exc: BaseException) -> str:
    """Render a validator error as the ``details`` string of an error envelope."""
    if isinstance(exc, PydanticValidationError):
        return exc.json(include_url=False)
    message = str(exc)
    if message:
        return message
    return str(getattr(exc, "issues", "")) or exc.__class__.__name__
