from dataclasses import dataclass

from .base_classes import ExplicitParams
from .contract import ContractParams
from .inspection import InspectionParams
from .organization import OrganizationParams
from .rpc import RPCParams
from .transaction import TransactionParams


@dataclass(init=False)
class Parameters(ExplicitParams):
    rpc: RPCParams
    contract: ContractParams
    transaction: TransactionParams
    organizations: list[OrganizationParams]
    inspection: InspectionParams
    start_time: str = "now"

    def load_env(self):
        self.rpc.set_attribute_from_env("url", "RPC_URL")
        self.contract.set_attribute_from_env("address", "CONTRACT_ADDRESS")
        self.transaction.set_attribute_from_env("sender", "SENDER_ADDRESS")
