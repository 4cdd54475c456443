"""Price math for dynamic-fee pools.

This package provides the conversions between human prices, Q64.96
sqrt-prices and ticks, plus tick-range helpers.
"""

from dynswap.math.price import (
    estimate_liquidity_for_amounts,
    get_full_range_ticks,
    nearest_usable_tick,
    price_to_sqrt_price_x96,
    price_to_tick,
    sqrt_price_x96_to_price,
    tick_to_price,
)

__all__ = [
    "price_to_sqrt_price_x96",
    "sqrt_price_x96_to_price",
    "tick_to_price",
    "price_to_tick",
    "nearest_usable_tick",
    "get_full_range_ticks",
    "estimate_liquidity_for_amounts",
]
