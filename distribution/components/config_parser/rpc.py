from dataclasses import dataclass

from .base_classes import ExplicitParams


@dataclass(init=False)
class RPCParams(ExplicitParams):
    url: str
    timeout: float = 30.0
    receipt_timeout: float = 60.0
    poll_interval: float = 0.5
