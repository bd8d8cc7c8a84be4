import logging
from typing import Any, Optional

from ..components.address import Address
from ..components.logs import configure_logging
from ..components.metrics import CONTRACT_CALLS
from ..rpc import ProviderError, RPCError, RPCQueryProvider
from ..rpc.entries import TransactionReceipt
from .abi import decode_output, encode_call, find_function, revert_reason
from .errors import ContractError, TransactionReverted

configure_logging()
logger = logging.getLogger(__name__)


class Contract:
    """
    Handle on a deployed contract. Read-only functions go through eth_call, state-mutating
    ones are sent with eth_sendTransaction from an account unlocked on the node.
    """

    fallback_abi: list[dict] = []

    def __init__(
        self,
        provider: RPCQueryProvider,
        address: str,
        abi: Optional[list[dict]] = None,
        sender: Optional[str] = None,
        gas: Optional[int] = None,
        receipt_timeout: float = 60,
        poll_interval: float = 0.5,
    ):
        self.provider = provider
        self.address = Address(address)
        self.abi = self.merged_abi(abi or [])
        self.sender = Address(sender) if sender else None
        self.gas = gas
        self.receipt_timeout = receipt_timeout
        self.poll_interval = poll_interval

    @classmethod
    def merged_abi(cls, abi: list[dict]) -> list[dict]:
        known = {entry.get("name") for entry in abi if entry.get("type", "function") == "function"}
        return list(abi) + [entry for entry in cls.fallback_abi if entry["name"] not in known]

    async def default_sender(self) -> Address:
        if self.sender is None:
            accounts = await self.provider.accounts()
            if not accounts:
                raise ContractError("Node exposes no unlocked account to send transactions from")

            self.sender = Address(accounts[0])
            logger.debug("Using first node account as sender", {"sender": self.sender.native})

        return self.sender

    def encode(self, name: str, *args) -> str:
        return encode_call(find_function(self.abi, name, len(args)), args)

    async def call(self, name: str, *args) -> Any:
        """
        Calls a read-only function.
        :param name: the function name
        :returns: the decoded value, unwrapped when the function has a single output
        """
        fn = find_function(self.abi, name, len(args))
        data = encode_call(fn, args)

        try:
            result = await self.provider.call(self.address.native, data)
        except RPCError as err:
            CONTRACT_CALLS.labels(name, "failed").inc()
            if err.is_revert:
                raise TransactionReverted(name, revert_reason(err))
            raise

        values = decode_output(fn, result)
        CONTRACT_CALLS.labels(name, "success").inc()

        return values[0] if len(values) == 1 else values

    async def transact(self, name: str, *args) -> TransactionReceipt:
        """
        Sends a transaction calling a state-mutating function and waits for it to be mined.
        :param name: the function name
        :returns: the mined receipt
        """
        data = self.encode(name, *args)
        sender = await self.default_sender()

        transaction = {"from": sender.native, "to": self.address.native, "data": data}
        if self.gas:
            transaction["gas"] = hex(self.gas)

        try:
            tx_hash = await self.provider.send_transaction(transaction)
        except RPCError as err:
            CONTRACT_CALLS.labels(name, "failed").inc()
            if err.is_revert:
                raise TransactionReverted(name, revert_reason(err))
            raise

        logger.debug("Transaction sent", {"method": name, "hash": tx_hash})

        receipt = await self.provider.wait_for_receipt(
            tx_hash, self.receipt_timeout, self.poll_interval
        )

        if not receipt.succeeded:
            CONTRACT_CALLS.labels(name, "reverted").inc()
            reason = receipt.revert_reason or await self._replay(transaction, receipt)
            raise TransactionReverted(name, reason, receipt)

        CONTRACT_CALLS.labels(name, "success").inc()
        logger.info(
            "Transaction mined",
            {
                "method": name,
                "hash": tx_hash,
                "block": receipt.block_number,
                "gas": receipt.gas_used,
            },
        )

        return receipt

    async def _replay(self, transaction: dict, receipt: TransactionReceipt) -> Optional[str]:
        """
        Replays a reverted transaction as a call on the parent block to recover its reason.
        """
        block = hex(receipt.block_number - 1) if receipt.block_number else "latest"

        try:
            await self.provider.call(
                transaction["to"], transaction["data"], transaction["from"], block
            )
        except RPCError as err:
            return revert_reason(err)
        except ProviderError as err:
            logger.warning(
                "Could not replay reverted transaction",
                {"hash": receipt.transaction_hash, "error": str(err)},
            )

        return None

    def __repr__(self):
        return f"{self.__class__.__name__}({self.address.native})"
