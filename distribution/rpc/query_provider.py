import asyncio
import logging
import time
from typing import Any, Optional

import aiohttp

from ..components.logs import configure_logging
from .entries.receipt import TransactionReceipt

RETRY_DELAY: float = 0.2

configure_logging()
logger = logging.getLogger(__name__)


class ProviderError(Exception):
    pass


class RPCError(ProviderError):
    def __init__(self, code: Optional[int], message: str, data: Any = None):
        super().__init__(f"RPC error {code}: {message}")
        self.code = code
        self.message = message
        self.data = data

    @property
    def is_revert(self) -> bool:
        return self.code == 3 or "revert" in str(self.message).lower()


class RPCQueryProvider:
    def __init__(self, url: str, timeout: float = 30):
        self.url = url
        self.timeout = timeout
        self._request_id = 0

    #### PRIVATE METHODS ####
    async def _execute(self, payload: dict) -> tuple[dict, int]:
        while True:
            try:
                async with (
                    aiohttp.ClientSession() as session,
                    session.post(self.url, json=payload) as response,
                ):
                    return await response.json(content_type=None), response.status
            except (asyncio.TimeoutError, aiohttp.ClientConnectionError) as err:
                logger.warning(
                    "Transient RPC error, retrying",
                    {"method": payload["method"], "error": str(err)},
                )
                await asyncio.sleep(RETRY_DELAY)

    def _payload(self, method: str, params: list) -> dict:
        self._request_id += 1
        return {"jsonrpc": "2.0", "method": method, "params": params, "id": self._request_id}

    #### PUBLIC METHODS ####
    def convert_result(self, result: Any, status: int) -> Any:
        if isinstance(result, dict) and result.get("error"):
            error = result["error"]
            if not isinstance(error, dict):
                raise RPCError(None, str(error))
            raise RPCError(error.get("code"), error.get("message", ""), error.get("data"))

        if status != 200:
            raise ProviderError(f"Unexpected HTTP status {status} from {self.url}")

        if not isinstance(result, dict) or "result" not in result:
            raise ProviderError("Invalid response format: 'result' key not found")

        return result["result"]

    async def request(self, method: str, params: Optional[list] = None) -> Any:
        payload = self._payload(method, params or [])

        try:
            res = await asyncio.wait_for(self._execute(payload), self.timeout)
        except asyncio.TimeoutError:
            raise ProviderError(f"Request {method} to {self.url} timed out after {self.timeout}s")
        except (aiohttp.ClientError, ValueError) as err:
            raise ProviderError(f"Request {method} to {self.url} failed: {err}")

        return self.convert_result(*res)

    async def accounts(self) -> list[str]:
        return await self.request("eth_accounts")

    async def net_version(self) -> str:
        return str(await self.request("net_version"))

    async def chain_id(self) -> int:
        return int(await self.request("eth_chainId"), 16)

    async def get_code(self, address: str, block: str = "latest") -> str:
        return await self.request("eth_getCode", [address, block])

    async def call(
        self, to: str, data: str, sender: Optional[str] = None, block: str = "latest"
    ) -> str:
        transaction = {"to": to, "data": data}
        if sender:
            transaction["from"] = sender

        result = await self.request("eth_call", [transaction, block])

        if not isinstance(result, str):
            raise ProviderError("Invalid response format: 'result' should be a hex string")

        return result

    async def send_transaction(self, transaction: dict) -> str:
        return await self.request("eth_sendTransaction", [transaction])

    async def get_transaction_receipt(self, tx_hash: str) -> Optional[TransactionReceipt]:
        if result := await self.request("eth_getTransactionReceipt", [tx_hash]):
            return TransactionReceipt.from_dict(result)
        return None

    async def wait_for_receipt(
        self, tx_hash: str, timeout: float = 60, poll_interval: float = 0.5
    ) -> TransactionReceipt:
        """
        Polls the node until the transaction is mined.
        :param tx_hash: the transaction hash
        :param timeout: seconds to wait before giving up
        :param poll_interval: seconds between two polls
        :returns: the mined receipt
        """
        deadline = time.monotonic() + timeout

        while True:
            if receipt := await self.get_transaction_receipt(tx_hash):
                return receipt

            if time.monotonic() >= deadline:
                raise ProviderError(f"Transaction {tx_hash} not mined after {timeout}s")

            await asyncio.sleep(poll_interval)
