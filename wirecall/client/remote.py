"""HTTP client for wirecall procedures.

``create_rpc_client(url=...)`` returns an object whose attributes are procedure
callers: ``await client.getUser.fetch()`` issues ``GET <url>/get-user`` and
returns the ``data`` member of the response envelope.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping
from urllib.parse import urlencode

import httpx
from loguru import logger

from wirecall.codec import INPUT_PARAM, UNDEFINED, encode
from wirecall.naming import to_wire_form
from wirecall.utils.exceptions import RpcClientError

DEFAULT_HEADERS = {"Content-Type": "application/json"}

HeadersOption = Mapping[str, str] | Callable[[], Mapping[str, str] | Awaitable[Mapping[str, str]]] | None
Transport = Callable[..., Awaitable[Any]]
Fetch = Callable[..., Awaitable[Any]]


async def _maybe_await(value: Any) -> Any:
    return await value if inspect.isawaitable(value) else value


def httpx_transport(timeout: float = 20.0) -> Transport:
    """Default transport: one ``httpx.AsyncClient`` request per call."""

    async def _transport(url: str, *, method: str, headers: Mapping[str, str]) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                return await client.request(method, url, headers=headers)
        except httpx.TimeoutException as exc:
            raise RpcClientError(f"request timed out: {method} {url}", code="TIMEOUT") from exc
        except httpx.RequestError as exc:
            raise RpcClientError(f"network error: {method} {url}: {exc}", code="NETWORK_ERROR") from exc

    return _transport


def _response_ok(response: Any) -> bool:
    ok = getattr(response, "ok", None)
    if isinstance(ok, bool):
        return ok
    is_success = getattr(response, "is_success", None)
    if isinstance(is_success, bool):
        return is_success
    status_code = int(getattr(response, "status_code", 0) or 0)
    return 200 <= status_code < 300


async def _read_json(response: Any) -> Any:
    return await _maybe_await(response.json())


async def resolve_headers(headers: HeadersOption) -> httpx.Headers:
    """Merge static or factory-produced headers over the JSON default, case-insensitively."""
    extra = headers() if callable(headers) else headers
    merged = httpx.Headers(DEFAULT_HEADERS)
    merged.update(await _maybe_await(extra) or {})
    return merged


def build_request_url(url: str, endpoint_slug: str, input: Any = UNDEFINED) -> str:
    request_url = f"{url.rstrip('/')}/{to_wire_form(endpoint_slug)}"
    if input is not UNDEFINED:
        request_url += "?" + urlencode({INPUT_PARAM: encode(input)})
    return request_url


def get_rpc_fetch(
    *,
    endpoint_slug: str,
    url: str,
    headers: HeadersOption = None,
    transport: Transport | None = None,
) -> Fetch:
    """Build the fetch coroutine for one procedure."""
    send = transport or httpx_transport()

    async def fetch(input: Any = UNDEFINED) -> Any:
        request_url = build_request_url(url, endpoint_slug, input)
        request_headers = await resolve_headers(headers)
        logger.debug("RPC call {} -> {}", endpoint_slug, request_url)
        response = await send(request_url, method="GET", headers=request_headers)

        if not _response_ok(response):
            status_code = getattr(response, "status_code", None)
            try:
                body = await _read_json(response)
            except Exception:
                body = None
            message = body.get("error") if isinstance(body, dict) else None
            details = body.get("details") if isinstance(body, dict) else None
            raise RpcClientError(
                message if isinstance(message, str) and message else "Request failed",
                status_code=status_code,
                details=details if isinstance(details, str) else None,
            )

        body = await _read_json(response)
        if not isinstance(body, dict):
            raise RpcClientError("Request failed: response is not an envelope", code="BAD_RESPONSE")
        return body.get("data")

    return fetch


@dataclass(frozen=True, slots=True)
class EndpointClient:
    """Caller bound to one procedure name."""

    name: str
    fetch: Fetch


class RpcClient:
    """Procedure callers by name: ``client.getUser`` or ``client.procedure("getUser")``.

    Every public attribute is a procedure caller except ``procedure`` itself;
    use ``client.procedure("procedure")`` to reach a procedure of that name.
    """

    def __init__(
        self,
        *,
        url: str,
        headers: HeadersOption = None,
        transport: Transport | None = None,
    ) -> None:
        self._url = url.rstrip("/")
        self._headers = headers
        self._transport = transport or httpx_transport()

    def _fetch_for(self, name: str) -> Fetch:
        return get_rpc_fetch(endpoint_slug=name, url=self._url, headers=self._headers, transport=self._transport)

    def procedure(self, name: str) -> EndpointClient:
        return EndpointClient(name=name, fetch=self._fetch_for(name))

    def __getattr__(self, name: str) -> EndpointClient:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.procedure(name)


def create_rpc_client(
    *,
    url: str,
    headers: HeadersOption = None,
    transport: Transport | None = None,
) -> RpcClient:
    return RpcClient(url=url, headers=headers, transport=transport)
