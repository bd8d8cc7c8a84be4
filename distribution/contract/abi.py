import re
from typing import Any, Optional, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import collapse_if_tuple, decode_hex, encode_hex, function_abi_to_4byte_selector

from ..rpc import RPCError
from .errors import AbiError

ERROR_SELECTOR: bytes = bytes.fromhex("08c379a0")
PANIC_SELECTOR: bytes = bytes.fromhex("4e487b71")


def find_function(abi: list[dict], name: str, arity: Optional[int] = None) -> dict:
    """
    Looks a function up in a contract ABI.
    :param abi: the contract ABI
    :param name: the function name
    :param arity: the number of arguments, to pick between overloads
    :returns: the ABI entry of the function
    """
    candidates = [
        entry
        for entry in abi
        if entry.get("type", "function") == "function" and entry.get("name") == name
    ]
    if arity is not None:
        candidates = [entry for entry in candidates if len(entry.get("inputs", [])) == arity]

    if not candidates:
        raise AbiError(f"No function {name} with {arity} argument(s) in ABI")
    if len(candidates) > 1:
        raise AbiError(f"Ambiguous function {name}, {len(candidates)} overloads match")

    return candidates[0]


def signature(fn: dict) -> str:
    return f"{fn['name']}({','.join(input_types(fn))})"


def input_types(fn: dict) -> list[str]:
    return [collapse_if_tuple(item) for item in fn.get("inputs", [])]


def output_types(fn: dict) -> list[str]:
    return [collapse_if_tuple(item) for item in fn.get("outputs", [])]


def encode_call(fn: dict, args: Sequence[Any]) -> str:
    try:
        arguments = encode(input_types(fn), list(args))
    except (EncodingError, TypeError, ValueError) as err:
        raise AbiError(f"Cannot encode arguments for {signature(fn)}: {err}")

    return encode_hex(function_abi_to_4byte_selector(fn) + arguments)


def decode_output(fn: dict, data: str) -> tuple:
    types = output_types(fn)
    raw = decode_hex(data) if data else b""

    if not types:
        return ()
    if not raw:
        raise AbiError(f"Empty return data for {signature(fn)}, is the contract deployed?")

    try:
        return tuple(decode(types, raw))
    except DecodingError as err:
        raise AbiError(f"Cannot decode return data of {signature(fn)}: {err}")


def decode_revert(data: Optional[str]) -> Optional[str]:
    """
    Decodes an Error(string) or Panic(uint256) revert payload.
    """
    if not isinstance(data, str) or not data.startswith("0x"):
        return None

    try:
        raw = decode_hex(data)
    except ValueError:
        return None

    try:
        if raw[:4] == ERROR_SELECTOR:
            return decode(["string"], raw[4:])[0]
        if raw[:4] == PANIC_SELECTOR:
            return f"panic code {hex(decode(['uint256'], raw[4:])[0])}"
    except DecodingError:
        return None

    return None


def revert_reason(err: RPCError) -> Optional[str]:
    """
    Extracts the revert reason from a node error, whichever way the node reports it.
    """
    if reason := decode_revert(err.data):
        return reason

    if isinstance(err.data, dict):
        for value in err.data.values():
            if not isinstance(value, dict):
                continue
            if value.get("reason"):
                return value["reason"]
            if reason := decode_revert(value.get("return")):
                return reason

    if match := re.search(r"revert(?:ed)?:?\s*(.*)$", str(err.message)):
        return match.group(1).strip() or None

    return None
