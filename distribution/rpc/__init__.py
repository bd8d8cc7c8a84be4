from . import entries
from .query_provider import ProviderError, RPCError, RPCQueryProvider

__all__ = [
    "entries",
    "ProviderError",
    "RPCError",
    "RPCQueryProvider",
]
