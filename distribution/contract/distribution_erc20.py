import logging
from decimal import Decimal
from typing import Sequence, Union

from ..components.address import Address
from ..components.balance import Balance, parse_ether
from ..components.logs import configure_logging
from ..components.metrics import READ_VALUE, START_TIME
from ..rpc.entries import TransactionReceipt
from .contract import Contract

configure_logging()
logger = logging.getLogger(__name__)


def _function(name: str, inputs: list[str], outputs: list[str], mutability: str) -> dict:
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": f"arg{i}", "type": t} for i, t in enumerate(inputs)],
        "outputs": [{"name": "", "type": t} for t in outputs],
        "stateMutability": mutability,
    }


def _to_wei(amount: Union[int, str, Decimal]) -> int:
    if isinstance(amount, int) and not isinstance(amount, bool):
        return amount
    return parse_ether(amount)


class DistributionERC20(Contract):
    fallback_abi: list[dict] = [
        _function("setOrganization", ["uint256", "address[]", "uint256[]"], [], "nonpayable"),
        _function("setStartTime", ["uint256"], [], "nonpayable"),
        _function("lockNum", ["address"], ["uint256"], "view"),
        _function("test", ["address"], ["uint256"], "view"),
        _function("testA", [], ["uint256"], "view"),
        _function("name", [], ["string"], "view"),
        _function("symbol", [], ["string"], "view"),
        _function("decimals", [], ["uint8"], "view"),
        _function("totalSupply", [], ["uint256"], "view"),
        _function("balanceOf", ["address"], ["uint256"], "view"),
    ]

    #### STATE-MUTATING ####
    async def set_organization(
        self,
        org_type: int,
        accounts: Sequence[str],
        amounts: Sequence[Union[int, str, Decimal]],
    ) -> TransactionReceipt:
        """
        Registers the locked allocations of an organization batch.
        :param org_type: the organization type
        :param accounts: the beneficiaries
        :param amounts: token amounts, integers are taken as wei, anything else as tokens
        """
        if len(accounts) != len(amounts):
            raise ValueError(
                f"setOrganization needs one amount per account, got {len(accounts)} accounts "
                + f"and {len(amounts)} amounts"
            )

        addresses = [Address(account).native for account in accounts]
        amounts_wei = [_to_wei(amount) for amount in amounts]

        logger.info(
            "Setting organization",
            {
                "type": org_type,
                "accounts": addresses,
                "amounts": [str(a) for a in amounts_wei],
                "total": Balance.from_wei(sum(amounts_wei), "tokens").as_str,
            },
        )
        return await self.transact("setOrganization", org_type, addresses, amounts_wei)

    async def set_start_time(self, timestamp: int) -> TransactionReceipt:
        logger.info("Setting start time", {"timestamp": timestamp})

        receipt = await self.transact("setStartTime", timestamp)
        START_TIME.set(timestamp)

        return receipt

    #### READ-ONLY ####
    async def lock_num(self, account: str) -> int:
        address = Address(account).native
        value = await self.call("lockNum", address)
        READ_VALUE.labels("lockNum", address).set(value)

        return value

    async def test(self, account: str) -> int:
        address = Address(account).native
        value = await self.call("test", address)
        READ_VALUE.labels("test", address).set(value)

        return value

    async def test_a(self) -> int:
        value = await self.call("testA")
        READ_VALUE.labels("testA", "").set(value)

        return value

    async def name(self) -> str:
        return await self.call("name")

    async def symbol(self) -> str:
        return await self.call("symbol")

    async def decimals(self) -> int:
        return await self.call("decimals")

    async def total_supply(self) -> int:
        return await self.call("totalSupply")

    async def balance_of(self, account: str) -> int:
        return await self.call("balanceOf", Address(account).native)
