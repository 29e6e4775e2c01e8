"""Single-token input codec.

A whole input value travels as one base64 token in the ``input`` query parameter.
NaN is carried as the ``"__NAN__"`` sentinel string; undefined members are dropped
the way JSON.stringify drops them.
"""

from __future__ import annotations

import base64
import binascii
import json
import math
from typing import Any

from wirecall.utils.exceptions import CodecError

INPUT_PARAM = "input"
NAN_SENTINEL = "__NAN__"


class _Undefined:
    """Marker for a member that is absent rather than null."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED: Any = _Undefined()


def _to_wire(value: Any) -> Any:
    if isinstance(value, float):
        if math.isnan(value):
            return NAN_SENTINEL
        if math.isinf(value):
            return None
        return value
    if isinstance(value, dict):
        out: dict[str, Any] = {}
        for key, item in value.items():
            if item is UNDEFINED:
                continue
            if not isinstance(key, str):
                raise CodecError(f"object keys must be strings, got {type(key).__name__}")
            out[key] = _to_wire(item)
        return out
    if isinstance(value, (list, tuple)):
        return [None if item is UNDEFINED else _to_wire(item) for item in value]
    return value


def _from_wire(value: Any) -> Any:
    if isinstance(value, str) and value == NAN_SENTINEL:
        return math.nan
    if isinstance(value, dict):
        return {key: _from_wire(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_from_wire(item) for item in value]
    return value


def encode(value: Any) -> str:
    """Encode a JSON-compatible value (plus NaN) into a base64 token."""
    if value is UNDEFINED:
        raise CodecError("cannot encode an undefined value")
    try:
        text = json.dumps(_to_wire(value), ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise CodecError(f"value is not JSON-compatible: {exc}") from exc
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-JSON constant {name}; NaN travels as {NAN_SENTINEL!r}")


def decode(token: str) -> Any:
    """Decode a token produced by :func:`encode`."""
    try:
        raw = base64.b64decode(token, validate=True)
        text = raw.decode("utf-8")
        parsed = json.loads(text, parse_constant=_reject_constant)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError, ValueError) as exc:
        raise CodecError(f"invalid input token: {exc}") from exc
    return _from_wire(parsed)
