"""Response envelope shapes shared by the dispatcher and the client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


@dataclass(slots=True)
class RpcResponse:
    """Dispatcher outcome: HTTP status plus the JSON envelope."""

    status_code: int
    body: dict[str, Any]


def success_envelope(data: Any) -> dict[str, Any]:
    return {"data": data}


def error_envelope(error: str, details: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"data": None, "error": error}
    if details is not None:
        body["details"] = details
    return body
