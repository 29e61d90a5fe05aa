"""
Address Helpers

Addresses are 20-byte identifiers written as "0x" followed by 40 hex digits.
They are compared case-insensitively and stored lowercase.
"""

import re

from contract_manager.exceptions import InvalidAddress


ZERO_ADDRESS = "0x" + "0" * 40

_ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_address(value: object) -> bool:
    """Check whether a value is a well-formed address string"""
    return isinstance(value, str) and _ADDRESS_PATTERN.match(value.strip()) is not None


def normalize_address(value: str) -> str:
    """
    Normalize an address to its canonical lowercase form

    Args:
        value: Address string, any hex case, surrounding whitespace allowed

    Returns:
        Lowercase address

    Raises:
        InvalidAddress: If the value is not a well-formed address
    """
    if not is_address(value):
        raise InvalidAddress(str(value))
    return value.strip().lower()
