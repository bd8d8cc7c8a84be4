from dataclasses import dataclass

from .base_classes import ExplicitParams


@dataclass(init=False)
class ContractParams(ExplicitParams):
    artifact: str
    name: str = "DistributionERC20"
    address: str = ""
