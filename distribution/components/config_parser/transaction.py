from dataclasses import dataclass

from .base_classes import ExplicitParams


@dataclass(init=False)
class TransactionParams(ExplicitParams):
    sender: str = ""
    gas: int = 6000000
