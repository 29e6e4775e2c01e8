"""
wirecall - typed RPC over a single dynamic endpoint.
"""

__version__ = "0.1.0"

from wirecall.codec import UNDEFINED, decode, encode
from wirecall.core import CtxRouter, Endpoint, endpoint, router
from wirecall.naming import to_identifier_form, to_wire_form

__all__ = [
    "__version__",
    "UNDEFINED",
    "CtxRouter",
    "Endpoint",
    "decode",
    "encode",
    "endpoint",
    "router",
    "to_identifier_form",
    "to_wire_form",
]
