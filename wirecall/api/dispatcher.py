"""Dynamic RPC endpoint: resolves ``{trpc}`` to a procedure and runs it.

The handler is framework-neutral. It needs a request exposing ``query_params``
(a mapping with ``.get``) and the path parameters of the route; it returns an
:class:`RpcResponse` that a host (see :mod:`wirecall.api.server`) renders.
"""

from __future__ import annotations

import inspect
import math
from typing import Any, Awaitable, Callable, Mapping

from fastapi.encoders import jsonable_encoder
from loguru import logger

from wirecall.api.envelope import RpcResponse, success_envelope
from wirecall.api.error_boundary import (
    routing_error_result,
    unhandled_exception_result,
    validation_error_result,
)
from wirecall.codec import INPUT_PARAM, UNDEFINED, decode
from wirecall.core import Endpoint, Router, parse_with_contract
from wirecall.naming import to_identifier_form
from wirecall.utils.exceptions import (
    CodecError,
    InputValidationError,
    MalformedInputError,
    MissingInputError,
    RoutingError,
    is_validation_error,
    validation_details,
)

PATH_PARAM = "trpc"

ContextFactory = Callable[[Any], Awaitable[Mapping[str, Any]] | Mapping[str, Any]]
RpcHandler = Callable[[Any, Mapping[str, Any]], Awaitable[RpcResponse]]


async def _maybe_await(value: Any) -> Any:
    return await value if inspect.isawaitable(value) else value


def to_json_result(value: Any) -> Any:
    """Render an action result the way JSON.stringify would.

    Non-finite floats become ``None``; ``UNDEFINED`` members are dropped from
    objects and become ``None`` in arrays. Anything else (models, dataclasses,
    dates) goes through ``jsonable_encoder`` first.
    """
    if value is UNDEFINED or value is None:
        return None
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, (str, int)):
        return value
    if isinstance(value, Mapping):
        return {key: to_json_result(item) for key, item in value.items() if item is not UNDEFINED}
    if isinstance(value, (list, tuple)):
        return [to_json_result(item) for item in value]
    return to_json_result(jsonable_encoder(value))


def resolve_endpoint(router: Router, params: Mapping[str, Any]) -> tuple[str, Endpoint]:
    """Map the path segment to a registered procedure or raise :class:`RoutingError`."""
    if PATH_PARAM not in params:
        raise RoutingError(f"You must mount the handler on a route with a {{{PATH_PARAM}}} path parameter.")
    segment = params[PATH_PARAM]
    if not segment:
        raise RoutingError(f"You must pass a procedure name in the {{{PATH_PARAM}}} path segment.")
    name = to_identifier_form(str(segment))
    found = router.get(name)
    if found is None:
        raise RoutingError(f"No {name} endpoints found in the router object.", code="UNKNOWN_ENDPOINT")
    return name, found


def read_input(request: Any, procedure: str) -> Any:
    """Decode the single ``input`` token from the request query string."""
    query = getattr(request, "query_params", None) or {}
    token = query.get(INPUT_PARAM)
    if token is None:
        raise MissingInputError(procedure, INPUT_PARAM)
    try:
        return decode(token)
    except CodecError as exc:
        raise MalformedInputError(procedure) from exc


def validate_input(procedure: Endpoint, value: Any) -> Any:
    try:
        return parse_with_contract(procedure.input, value)
    except Exception as exc:
        if is_validation_error(exc):
            raise InputValidationError(validation_details(exc)) from exc
        raise


async def build_context(request: Any, ctx: ContextFactory | None) -> dict[str, Any]:
    fields = await _maybe_await(ctx(request)) if ctx is not None else {}
    if not isinstance(fields, Mapping):
        raise TypeError(f"context factory must return a mapping, got {type(fields).__name__}")
    return {**fields, "request": request}


def create_rpc_api(*, router: Router, ctx: ContextFactory | None = None) -> RpcHandler:
    """Build the request handler serving every procedure in ``router``."""

    async def handler(request: Any, params: Mapping[str, Any]) -> RpcResponse:
        procedure_name: str | None = None
        try:
            procedure_name, procedure = resolve_endpoint(router, params)
            logger.debug("RPC dispatch procedure={}", procedure_name)
            if procedure.has_input:
                validated = validate_input(procedure, read_input(request, procedure_name))
                context = await build_context(request, ctx)
                result = await _maybe_await(procedure.action(validated, context))
            else:
                context = await build_context(request, ctx)
                result = await _maybe_await(procedure.action(context))
            return RpcResponse(status_code=200, body=success_envelope(to_json_result(result)))
        except RoutingError as exc:
            return routing_error_result(procedure=procedure_name, exc=exc, log_info=logger.info)
        except InputValidationError as exc:
            return validation_error_result(procedure=str(procedure_name), exc=exc, log_warning=logger.warning)
        except Exception as exc:
            if is_validation_error(exc):
                return validation_error_result(
                    procedure=str(procedure_name),
                    exc=InputValidationError(validation_details(exc)),
                    log_warning=logger.warning,
                )
            return unhandled_exception_result(
                procedure=str(procedure_name),
                exc=exc,
                log_exception=logger.exception,
            )

    return handler
