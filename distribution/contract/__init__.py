from .artifact import Artifact
from .contract import Contract
from .distribution_erc20 import DistributionERC20
from .errors import AbiError, ArtifactError, ContractError, NotDeployedError, TransactionReverted

__all__ = [
    "AbiError",
    "Artifact",
    "ArtifactError",
    "Contract",
    "ContractError",
    "DistributionERC20",
    "NotDeployedError",
    "TransactionReverted",
]
