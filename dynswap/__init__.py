"""DynamicSwap - pool identity and price math for dynamic-fee pools."""

__version__ = "0.1.0"

from dynswap.config import ChainConfig, default_chain_configs, get_chain_config
from dynswap.fees import format_fee, get_tick_spacing, is_dynamic_fee, parse_fee
from dynswap.math import (
    estimate_liquidity_for_amounts,
    get_full_range_ticks,
    nearest_usable_tick,
    price_to_sqrt_price_x96,
    price_to_tick,
    sqrt_price_x96_to_price,
    tick_to_price,
)
from dynswap.pool import PoolData, PoolKey, encode_pool_key, get_pool_id, sort_tokens

__all__ = [
    "__version__",
    # Pool identity
    "PoolKey",
    "PoolData",
    "sort_tokens",
    "encode_pool_key",
    "get_pool_id",
    # Price math
    "price_to_sqrt_price_x96",
    "sqrt_price_x96_to_price",
    "tick_to_price",
    "price_to_tick",
    "nearest_usable_tick",
    "get_full_range_ticks",
    "estimate_liquidity_for_amounts",
    # Fees
    "format_fee",
    "parse_fee",
    "is_dynamic_fee",
    "get_tick_spacing",
    # Config
    "ChainConfig",
    "default_chain_configs",
    "get_chain_config",
]
