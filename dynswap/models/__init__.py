"""Pydantic types for dynswap."""

from dynswap.models.types import Address, PoolId, is_valid_address, normalize_address

__all__ = [
    "Address",
    "PoolId",
    "is_valid_address",
    "normalize_address",
]
