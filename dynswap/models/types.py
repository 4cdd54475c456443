"""Shared type definitions and address helpers.

Addresses are compared and hashed in their canonical lower-case form.
Mixed-case (checksummed) input is accepted everywhere but never compared
as text.
"""

import re
from typing import Annotated

from pydantic import AfterValidator, Field

from dynswap.errors import InvalidAddressError

ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"
_ADDRESS_RE = re.compile(ADDRESS_PATTERN)

# Pool identifiers are 32-byte Keccak digests
POOL_ID_PATTERN = r"^0x[a-fA-F0-9]{64}$"


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an Ethereum address to lowercase.

    Args:
        address: An Ethereum address (with or without 0x prefix)
        validate: If True, raises InvalidAddressError for invalid addresses.
                  If False (default), returns normalized form without validation.

    Returns:
        Lowercase address with 0x prefix

    Raises:
        InvalidAddressError: If validate=True and address is not a valid Ethereum address
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise InvalidAddressError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid Ethereum address (0x + 40 hex chars, any case)."""
    if not isinstance(address, str):
        return False
    return _ADDRESS_RE.fullmatch(address) is not None


def address_to_bytes(address: str) -> bytes:
    """Return the raw 20-byte value of an address.

    Raises:
        InvalidAddressError: If address is not 0x + 40 hex chars
    """
    if not is_valid_address(address):
        raise InvalidAddressError(f"Invalid address: {address}")
    return bytes.fromhex(address[2:])


# Ethereum address, normalized to lowercase after pattern validation
Address = Annotated[
    str,
    Field(pattern=ADDRESS_PATTERN),
    AfterValidator(lambda value: value.lower()),
]

# 32-byte pool identifier as 0x-prefixed hex
PoolId = Annotated[str, Field(pattern=POOL_ID_PATTERN)]

__all__ = [
    "ADDRESS_PATTERN",
    "POOL_ID_PATTERN",
    "Address",
    "PoolId",
    "normalize_address",
    "is_valid_address",
    "address_to_bytes",
]
