from typing import Optional

from ..rpc.entries import TransactionReceipt


class ContractError(Exception):
    pass


class AbiError(ContractError):
    pass


class ArtifactError(ContractError):
    pass


class NotDeployedError(ContractError):
    pass


class TransactionReverted(ContractError):
    def __init__(
        self,
        method: str,
        reason: Optional[str] = None,
        receipt: Optional[TransactionReceipt] = None,
    ):
        message = f"{method} reverted"
        if reason:
            message += f": {reason}"

        super().__init__(message)
        self.method = method
        self.reason = reason
        self.receipt = receipt
