"""Query-cache aware client.

Adds ``use_query`` to each procedure caller. The cache primitive itself is
supplied by the caller; this layer only owns ``queryKey`` and ``queryFn``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from wirecall.client.remote import Fetch, HeadersOption, RpcClient, Transport
from wirecall.codec import UNDEFINED
from wirecall.naming import to_wire_form

UseQuery = Callable[..., Any]


def query_key(procedure: str) -> list[str]:
    return [to_wire_form(procedure)]


@dataclass(frozen=True, slots=True)
class QueryEndpointClient:
    name: str
    fetch: Fetch
    _use_query: UseQuery

    def use_query(self, input: Any = UNDEFINED, **options: Any) -> Any:
        """Run the cache primitive keyed by the procedure's wire name."""
        fetch = self.fetch

        async def query_fn(*_args: Any, **_kwargs: Any) -> Any:
            return await fetch(input)

        return self._use_query(**{**options, "queryKey": query_key(self.name), "queryFn": query_fn})


class RpcQueryClient(RpcClient):
    def __init__(
        self,
        *,
        url: str,
        use_query: UseQuery,
        headers: HeadersOption = None,
        transport: Transport | None = None,
    ) -> None:
        super().__init__(url=url, headers=headers, transport=transport)
        self._use_query = use_query

    def procedure(self, name: str) -> QueryEndpointClient:
        return QueryEndpointClient(name=name, fetch=self._fetch_for(name), _use_query=self._use_query)


def create_rpc_query_client(
    *,
    url: str,
    use_query: UseQuery,
    headers: HeadersOption = None,
    transport: Transport | None = None,
) -> RpcQueryClient:
    return RpcQueryClient(url=url, use_query=use_query, headers=headers, transport=transport)
