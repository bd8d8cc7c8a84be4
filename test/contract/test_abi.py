import pytest
from eth_abi import decode, encode
from eth_utils import decode_hex, encode_hex

from distribution.contract import AbiError, DistributionERC20
from distribution.contract.abi import (
    decode_output,
    decode_revert,
    encode_call,
    find_function,
    revert_reason,
    signature,
)
from distribution.rpc import RPCError

ABI: list[dict] = DistributionERC20.fallback_abi


def test_find_function():
    fn = find_function(ABI, "setOrganization", 3)

    assert signature(fn) == "setOrganization(uint256,address[],uint256[])"
    assert signature(find_function(ABI, "testA")) == "testA()"

    with pytest.raises(AbiError):
        find_function(ABI, "setOrganization", 2)

    with pytest.raises(AbiError):
        find_function(ABI, "unknown")


def test_find_overloaded_function():
    abi = ABI + [
        {
            "type": "function",
            "name": "lockNum",
            "inputs": [{"name": "a", "type": "address"}, {"name": "i", "type": "uint256"}],
            "outputs": [{"name": "", "type": "uint256"}],
        }
    ]

    assert signature(find_function(abi, "lockNum", 1)) == "lockNum(address)"
    assert signature(find_function(abi, "lockNum", 2)) == "lockNum(address,uint256)"

    with pytest.raises(AbiError):
        find_function(abi, "lockNum")


def test_encode_set_organization():
    accounts = ["0x" + "02" * 20, "0x" + "03" * 20]
    amounts = [10**25, 5 * 10**24]

    calldata = encode_call(find_function(ABI, "setOrganization", 3), [2, accounts, amounts])
    raw = decode_hex(calldata)

    # keccak("setOrganization(uint256,address[],uint256[])")[:4]
    assert len(raw[:4]) == 4
    org_type, decoded_accounts, decoded_amounts = decode(
        ["uint256", "address[]", "uint256[]"], raw[4:]
    )
    assert org_type == 2
    assert [a.lower() for a in decoded_accounts] == accounts
    assert list(decoded_amounts) == amounts


def test_encode_known_selector():
    calldata = encode_call(find_function(ABI, "balanceOf", 1), ["0x" + "00" * 20])

    assert calldata.startswith("0x70a08231")


def test_encode_invalid_arguments():
    fn = find_function(ABI, "setOrganization", 3)

    with pytest.raises(AbiError):
        encode_call(fn, [2, ["not_an_address"], [1]])

    with pytest.raises(AbiError):
        encode_call(fn, [-1, [], []])


def test_decode_output():
    fn = find_function(ABI, "lockNum", 1)

    assert decode_output(fn, encode_hex(encode(["uint256"], [3]))) == (3,)

    with pytest.raises(AbiError):
        decode_output(fn, "0x")

    with pytest.raises(AbiError):
        decode_output(fn, "0x1234")

    assert decode_output(find_function(ABI, "setStartTime", 1), "0x") == ()


def test_decode_revert():
    error = encode_hex(bytes.fromhex("08c379a0") + encode(["string"], ["not an organization"]))
    panic = encode_hex(bytes.fromhex("4e487b71") + encode(["uint256"], [0x11]))

    assert decode_revert(error) == "not an organization"
    assert decode_revert(panic) == "panic code 0x11"
    assert decode_revert("0x") is None
    assert decode_revert(None) is None
    assert decode_revert("0xdeadbeef") is None


def test_revert_reason_from_node_errors():
    data = encode_hex(bytes.fromhex("08c379a0") + encode(["string"], ["only owner"]))

    assert revert_reason(RPCError(3, "execution reverted: only owner", data)) == "only owner"
    assert (
        revert_reason(RPCError(-32000, "VM Exception while processing transaction: revert nope"))
        == "nope"
    )
    assert revert_reason(RPCError(-32000, "execution reverted")) is None

    ganache_data = {"0xabc": {"error": "revert", "reason": "start time set"}, "stack": "..."}
    assert revert_reason(RPCError(-32000, "revert", ganache_data)) == "start time set"
