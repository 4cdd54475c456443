"""ABI encoding and identifier derivation for pool keys.

The pool manager derives a pool's id as keccak256(abi.encode(key)): five
32-byte words for (address currency0, address currency1, uint24 fee,
int24 tickSpacing, address hooks). Any difference from that layout yields
an id for a pool that does not exist, so this module only ever uses the
standard ABI encoder.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from eth_utils import function_signature_to_4byte_selector, keccak

from dynswap.constants import MAX_SQRT_PRICE, MIN_SQRT_PRICE
from dynswap.errors import SqrtPriceOutOfRangeError
from dynswap.models.types import address_to_bytes, normalize_address

if TYPE_CHECKING:
    from dynswap.pool.key import PoolKey

# PoolKey field types in declaration order
POOL_KEY_ABI_TYPES = ["address", "address", "uint24", "int24", "address"]
POOL_KEY_TUPLE_TYPE = "(address,address,uint24,int24,address)"

# initialize((address,address,uint24,int24,address),uint160)
INITIALIZE_SIGNATURE = f"initialize({POOL_KEY_TUPLE_TYPE},uint160)"
INITIALIZE_SELECTOR = function_signature_to_4byte_selector(INITIALIZE_SIGNATURE)

POOL_KEY_COMPONENTS = [
    {"name": "currency0", "type": "address"},
    {"name": "currency1", "type": "address"},
    {"name": "fee", "type": "uint24"},
    {"name": "tickSpacing", "type": "int24"},
    {"name": "hooks", "type": "address"},
]

# PoolManager ABI - minimal, just the functions we need
POOL_MANAGER_ABI = [
    {
        "name": "initialize",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "key", "type": "tuple", "components": POOL_KEY_COMPONENTS},
            {"name": "sqrtPriceX96", "type": "uint160"},
        ],
        "outputs": [{"name": "tick", "type": "int24"}],
    },
]


def _pool_key_values(pool_key: PoolKey) -> tuple[bytes, bytes, int, int, bytes]:
    currency0, currency1, fee, tick_spacing, hooks = pool_key.to_tuple()
    return (
        address_to_bytes(currency0),
        address_to_bytes(currency1),
        fee,
        tick_spacing,
        address_to_bytes(hooks),
    )


def encode_pool_key(pool_key: PoolKey) -> bytes:
    """ABI-encode a pool key as abi.encode(currency0, currency1, fee, tickSpacing, hooks).

    Returns:
        160 bytes: one left-padded 32-byte word per field, int24 sign-extended
    """
    from eth_abi import encode  # type: ignore[attr-defined]

    return encode(POOL_KEY_ABI_TYPES, list(_pool_key_values(pool_key)))


def get_pool_id(pool_key: PoolKey) -> str:
    """Derive the pool id: Keccak-256 of the ABI-encoded key.

    Args:
        pool_key: Key with currencies already in canonical order

    Returns:
        32-byte id as 0x-prefixed lowercase hex
    """
    return "0x" + keccak(encode_pool_key(pool_key)).hex()


def encode_initialize(
    pool_key: PoolKey,
    sqrt_price_x96: int,
    pool_manager: str,
) -> tuple[str, str]:
    """Encode PoolManager.initialize(key, sqrtPriceX96).

    Args:
        pool_key: Key of the pool to create
        sqrt_price_x96: Starting price (see price_to_sqrt_price_x96)
        pool_manager: PoolManager contract address

    Returns:
        Tuple of (pool_manager_address, calldata_hex)

    Raises:
        SqrtPriceOutOfRangeError: If sqrt_price_x96 is outside [MIN_SQRT_PRICE, MAX_SQRT_PRICE)
    """
    from eth_abi import encode  # type: ignore[attr-defined]

    if sqrt_price_x96 < MIN_SQRT_PRICE or sqrt_price_x96 >= MAX_SQRT_PRICE:
        raise SqrtPriceOutOfRangeError(
            f"sqrtPriceX96 {sqrt_price_x96} outside [{MIN_SQRT_PRICE}, {MAX_SQRT_PRICE})"
        )

    encoded_params = encode(
        [POOL_KEY_TUPLE_TYPE, "uint160"],
        [_pool_key_values(pool_key), sqrt_price_x96],
    )

    calldata = INITIALIZE_SELECTOR + encoded_params
    return normalize_address(pool_manager, validate=True), "0x" + calldata.hex()


__all__ = [
    "POOL_KEY_ABI_TYPES",
    "POOL_KEY_TUPLE_TYPE",
    "POOL_KEY_COMPONENTS",
    "INITIALIZE_SIGNATURE",
    "INITIALIZE_SELECTOR",
    "POOL_MANAGER_ABI",
    "encode_pool_key",
    "get_pool_id",
    "encode_initialize",
]
