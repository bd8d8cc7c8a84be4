from .contract import ContractParams
from .inspection import InspectionParams
from .loader import ConfigLoader, load_config
from .organization import OrganizationParams
from .parameters import Parameters
from .rpc import RPCParams
from .transaction import TransactionParams

__all__ = [
    "Parameters",
    "ConfigLoader",
    "ContractParams",
    "InspectionParams",
    "load_config",
    "OrganizationParams",
    "RPCParams",
    "TransactionParams",
]
