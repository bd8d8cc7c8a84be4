from .entry import RPCEntry
from .receipt import TransactionReceipt

__all__ = [
    "RPCEntry",
    "TransactionReceipt",
]
