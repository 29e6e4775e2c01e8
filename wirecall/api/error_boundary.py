"""Error-boundary helpers mapping dispatch failures to envelopes."""

from __future__ import annotations

from typing import Callable

from wirecall.api.envelope import (
    INTERNAL_ERROR_MESSAGE,
    RpcResponse,
    error_envelope,
)
from wirecall.utils.exceptions import (
    InputValidationError,
    RoutingError,
    sanitize_error_message,
)


def routing_error_result(
    *,
    procedure: str | None,
    exc: RoutingError,
    log_info: Callable[..., None],
) -> RpcResponse:
    """Routing failures are client errors; the message is safe to expose."""
    log_info("RPC routing failed procedure={} code={}: {}", procedure, exc.code, exc.message)
    return RpcResponse(status_code=400, body=error_envelope(exc.message))


def validation_error_result(
    *,
    procedure: str,
    exc: InputValidationError,
    log_warning: Callable[..., None],
) -> RpcResponse:
    """Map a contract rejection to the generic message plus validator details."""
    log_warning("RPC input rejected procedure={}", procedure)
    return RpcResponse(status_code=400, body=error_envelope(exc.message, exc.details))


def unhandled_exception_result(
    *,
    procedure: str,
    exc: BaseException,
    log_exception: Callable[..., None],
) -> RpcResponse:
    """Action and context failures never leak into the response body."""
    sanitized = sanitize_error_message(str(exc))
    log_exception("RPC procedure {} failed with {}: {}", procedure, exc.__class__.__name__, sanitized)
    return RpcResponse(status_code=500, body=error_envelope(INTERNAL_ERROR_MESSAGE))
