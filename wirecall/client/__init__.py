"""Client side: remote caller and query-cache caller."""

from wirecall.client.query import RpcQueryClient, create_rpc_query_client
from wirecall.client.remote import RpcClient, create_rpc_client, get_rpc_fetch, httpx_transport

__all__ = [
    "RpcClient",
    "RpcQueryClient",
    "create_rpc_client",
    "create_rpc_query_client",
    "get_rpc_fetch",
    "httpx_transport",
]
