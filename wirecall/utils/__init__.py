"""Utility functions for wirecall."""

from wirecall.utils.exceptions import (
    CodecError,
    ErrorCategory,
    InputValidationError,
    MalformedInputError,
    MissingInputError,
    RoutingError,
    RpcClientError,
    WirecallError,
    sanitize_error_message,
)

__all__ = [
    "CodecError",
    "ErrorCategory",
    "InputValidationError",
    "MalformedInputError",
    "MissingInputError",
    "RoutingError",
    "RpcClientError",
    "WirecallError",
    "sanitize_error_message",
]
