"""Server side: dispatcher, envelopes and the FastAPI binding."""

from wirecall.api.dispatcher import create_rpc_api
from wirecall.api.envelope import RpcResponse

__all__ = ["RpcResponse", "create_rpc_api"]
