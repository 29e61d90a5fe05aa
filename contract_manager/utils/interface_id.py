"""
Interface Identifiers

Keccak-256 based selectors and ERC-165 interface ids, computed the same way
the EVM toolchain does: the selector of a function is the first 4 bytes of
keccak256 of its canonical signature, and an interface id is the XOR of the
selectors of its functions.
"""

from collections.abc import Iterable
from functools import reduce

from Crypto.Hash import keccak


def keccak256(data: bytes) -> bytes:
    """
    Keccak-256 digest (the pre-standard SHA-3 variant used by Ethereum)

    Args:
        data: Bytes to hash

    Returns:
        32-byte digest
    """
    h = keccak.new(digest_bits=256)
    h.update(data)
    return h.digest()


def function_selector(signature: str) -> bytes:
    """
    Get the 4-byte selector for a canonical function signature

    Args:
        signature: e.g. "addContract(address,string)"

    Returns:
        First 4 bytes of keccak256(signature)
    """
    return keccak256(signature.encode("ascii"))[:4]


def calculate_interface_id(signatures: Iterable[str]) -> str:
    """
    Calculate the ERC-165 interface id for a list of function signatures

    Args:
        signatures: Canonical function signatures of the interface

    Returns:
        Interface id as a "0x"-prefixed 8 hex digit string
    """
    selectors = [int.from_bytes(function_selector(sig), "big") for sig in signatures]
    return f"0x{reduce(lambda acc, cur: acc ^ cur, selectors, 0):08x}"


def role_id(name: str) -> str:
    """Derive a bytes32 role id from its name, as "0x" + 64 hex digits"""
    return "0x" + keccak256(name.encode("utf-8")).hex()


def normalize_interface_id(interface_id: str | bytes | int) -> int:
    """
    Convert an interface id given as hex string, raw bytes or int to an int

    Raises:
        ValueError: If the value is not a 4-byte identifier
    """
    if isinstance(interface_id, (bytes, bytearray)):
        if len(interface_id) != 4:
            raise ValueError(f"Interface id must be 4 bytes, got {len(interface_id)}")
        return int.from_bytes(interface_id, "big")
    if isinstance(interface_id, str):
        text = interface_id.lower()
        if text.startswith("0x"):
            text = text[2:]
        if len(text) != 8:
            raise ValueError(f"Interface id must be 8 hex digits: {interface_id}")
        return int(text, 16)
    if isinstance(interface_id, int) and 0 <= interface_id <= 0xFFFFFFFF:
        return interface_id
    raise ValueError(f"Invalid interface id: {interface_id!r}")
