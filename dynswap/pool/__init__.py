"""Pool identity package.

This package provides everything keyed on a pool's identity:
- PoolKey value type and token-pair canonicalization
- ABI encoding and Keccak-256 pool id derivation
- PoolManager.initialize calldata
- Decoding of on-chain state into PoolData
- State readers (Mock and Web3-based) and the hook's current fee
"""

from .encoding import (
    INITIALIZE_SELECTOR,
    POOL_MANAGER_ABI,
    encode_initialize,
    encode_pool_key,
    get_pool_id,
)
from .key import PoolKey, sort_tokens
from .reader import (
    DYNAMIC_FEE_HOOK_ABI,
    STATE_VIEW_ABI,
    DynamicFee,
    MockPoolStateReader,
    PoolStateReader,
    Web3PoolStateReader,
    fetch_dynamic_fee,
    fetch_pool_data,
)
from .state import PoolData, Slot0, build_pool_data

__all__ = [
    # Key
    "PoolKey",
    "sort_tokens",
    # Encoding
    "INITIALIZE_SELECTOR",
    "POOL_MANAGER_ABI",
    "encode_pool_key",
    "encode_initialize",
    "get_pool_id",
    # State
    "Slot0",
    "PoolData",
    "build_pool_data",
    # Readers
    "PoolStateReader",
    "MockPoolStateReader",
    "Web3PoolStateReader",
    "STATE_VIEW_ABI",
    "DYNAMIC_FEE_HOOK_ABI",
    "DynamicFee",
    "fetch_dynamic_fee",
    "fetch_pool_data",
]
