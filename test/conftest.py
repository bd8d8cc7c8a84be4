import json
from pathlib import Path
from typing import Any, Callable, Union

import pytest
from eth_abi import decode, encode
from eth_utils import decode_hex, encode_hex, function_abi_to_4byte_selector
from pytest_mock import MockerFixture

from distribution.components.config_parser import Parameters
from distribution.contract import Artifact, DistributionERC20
from distribution.contract.abi import input_types, output_types
from distribution.rpc import RPCQueryProvider

NETWORK_ID: str = "5777"
CONTRACT_ADDRESS: str = "0x" + "ab" * 20


def account(index: int) -> str:
    return "0x" + f"{index + 1:02d}" * 20


def revert_data(reason: str) -> str:
    return encode_hex(bytes.fromhex("08c379a0") + encode(["string"], [reason]))


class FakeNode:
    """
    JSON-RPC node answering from canned values, recording every request.
    """

    def __init__(self, accounts: list[str], abi: list[dict]):
        self.accounts = accounts
        self.network_id = NETWORK_ID
        self.code = "0x6080604052"

        self.functions = {encode_hex(function_abi_to_4byte_selector(fn)): fn for fn in abi}
        self.views: dict[str, Union[int, str, Callable]] = {}
        self.send_errors: dict[str, dict] = {}
        self.failing: dict[str, str] = {}
        self.pending_polls: int = 0

        self.requests: list[dict] = []
        self.transactions: list[tuple[str, tuple]] = []
        self.receipts: dict[str, dict] = {}

    def decode_call(self, data: str) -> tuple[dict, tuple]:
        fn = self.functions[data[:10]]
        return fn, tuple(decode(input_types(fn), decode_hex(data)[4:]))

    #### JSON-RPC METHODS ####
    def eth_accounts(self) -> list[str]:
        return self.accounts

    def net_version(self) -> str:
        return self.network_id

    def eth_chainId(self) -> str:
        return hex(1337)

    def eth_getCode(self, address: str, block: str) -> str:
        return self.code

    def eth_call(self, transaction: dict, block: str) -> str:
        fn, args = self.decode_call(transaction["data"])

        if fn["name"] in self.failing:
            raise FakeRevert(self.failing[fn["name"]])

        value = self.views.get(fn["name"], 0)
        if callable(value):
            value = value(*args)

        return encode_hex(encode(output_types(fn), [value]))

    def eth_sendTransaction(self, transaction: dict) -> str:
        fn, args = self.decode_call(transaction["data"])

        if fn["name"] in self.send_errors:
            raise FakeError(self.send_errors[fn["name"]])

        self.transactions.append((fn["name"], args))
        tx_hash = "0x" + f"{len(self.transactions):064x}"
        self.receipts[tx_hash] = {
            "transactionHash": tx_hash,
            "blockNumber": hex(len(self.transactions) + 10),
            "gasUsed": hex(21000),
            "status": "0x0" if fn["name"] in self.failing else "0x1",
        }
        return tx_hash

    def eth_getTransactionReceipt(self, tx_hash: str) -> Any:
        if self.pending_polls > 0:
            self.pending_polls -= 1
            return None

        return self.receipts.get(tx_hash)

    async def execute(self, payload: dict) -> tuple[dict, int]:
        self.requests.append(payload)
        response = {"jsonrpc": "2.0", "id": payload["id"]}

        try:
            response["result"] = getattr(self, payload["method"])(*payload["params"])
        except FakeRevert as err:
            response["error"] = {
                "code": 3,
                "message": f"execution reverted: {err.reason}",
                "data": revert_data(err.reason),
            }
        except FakeError as err:
            response["error"] = err.error

        return response, 200

    def methods(self) -> list[str]:
        return [request["method"] for request in self.requests]


class FakeRevert(Exception):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class FakeError(Exception):
    def __init__(self, error: dict):
        super().__init__(error.get("message"))
        self.error = error


@pytest.fixture
def accounts() -> list[str]:
    return [account(index) for index in range(5)]


@pytest.fixture
def node(accounts: list[str]) -> FakeNode:
    return FakeNode(accounts, DistributionERC20.fallback_abi)


@pytest.fixture
def provider(mocker: MockerFixture, node: FakeNode) -> RPCQueryProvider:
    provider = RPCQueryProvider("http://localhost:8545", timeout=5)
    mocker.patch.object(provider, "_execute", side_effect=node.execute)
    return provider


@pytest.fixture
def artifact_data() -> dict:
    return {
        "contractName": "DistributionERC20",
        "abi": DistributionERC20.fallback_abi,
        "networks": {NETWORK_ID: {"address": CONTRACT_ADDRESS}},
    }


@pytest.fixture
def artifact_path(tmp_path: Path, artifact_data: dict) -> Path:
    path = tmp_path / "DistributionERC20.json"
    path.write_text(json.dumps(artifact_data))
    return path


@pytest.fixture
def artifact(artifact_path: Path) -> Artifact:
    return Artifact.load(str(artifact_path))


@pytest.fixture
async def contract(provider: RPCQueryProvider, artifact: Artifact) -> DistributionERC20:
    return await artifact.deployed(
        provider, contract_cls=DistributionERC20, receipt_timeout=1, poll_interval=0
    )


@pytest.fixture
def config(artifact_path: Path) -> dict:
    return {
        "rpc": {
            "url": "http://localhost:8545",
            "timeout": 5,
            "receipt_timeout": 1,
            "poll_interval": 0,
        },
        "contract": {"name": "DistributionERC20", "artifact": str(artifact_path)},
        "transaction": {"gas": 6000000},
        "organizations": [
            {"type": 2, "beneficiaries": ["1", "2"], "amounts": ["10000000", "5000000"]},
            {"type": 2, "beneficiaries": ["3"], "amounts": ["5000000"]},
        ],
        "inspection": {"lock_accounts": ["1", "3"], "test_accounts": ["3"]},
        "start_time": "now",
    }


@pytest.fixture
def params(config: dict) -> Parameters:
    return Parameters(config)
