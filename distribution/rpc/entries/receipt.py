from typing import Optional

from .entry import RPCEntry


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    return int(value, 16)


class TransactionReceipt(RPCEntry):
    def __init__(
        self,
        transaction_hash: str,
        block_number: Optional[int],
        gas_used: Optional[int],
        status: Optional[int],
        revert_reason: Optional[str] = None,
    ):
        self.transaction_hash = transaction_hash
        self.block_number = block_number
        self.gas_used = gas_used
        self.status = status
        self.revert_reason = revert_reason

    @property
    def succeeded(self) -> bool:
        # pre-byzantium receipts carry no status
        return self.status is None or self.status == 1

    @classmethod
    def from_dict(cls, data: dict) -> "TransactionReceipt":
        return cls(
            transaction_hash=data.get("transactionHash"),
            block_number=_to_int(data.get("blockNumber")),
            gas_used=_to_int(data.get("gasUsed")),
            status=_to_int(data.get("status")),
            revert_reason=data.get("revertReason"),
        )
