"""Protocol constants for the dynamic-fee pool manager.

Tick domain, fixed-point scaling and fee encoding parameters shared by
the pool key, price math and fee modules.
"""

# Tick domain: 1.0001^MAX_TICK is the largest price a sqrt-price can hold
MIN_TICK = -887272
MAX_TICK = 887272

# Tick spacing is stored as int24 but the pool manager caps it at int16
MIN_TICK_SPACING = 1
MAX_TICK_SPACING = 32767

# sqrt(price) is stored as a Q64.96 fixed-point number
Q96 = 2**96

# sqrt-price values at MIN_TICK and MAX_TICK (upper bound is exclusive)
MIN_SQRT_PRICE = 4295128739
MAX_SQRT_PRICE = 1461446703485210103287273052203988822378723970342

# Fees are in hundredths of a basis point: 1 unit = 0.0001%, 10_000 units = 1%
FEE_UNITS_PER_PERCENT = 10_000
MAX_LP_FEE = 1_000_000  # 100%
UINT24_MAX = 2**24 - 1

# Bit 23 of the fee field: the hook supplies the fee at swap time
DYNAMIC_FEE_FLAG = 0x800000

# Recommended tick spacings by pool volatility
TICK_SPACINGS = {
    "LOW": 1,  # stable pairs
    "MEDIUM": 60,  # standard
    "HIGH": 200,  # volatile pairs
}

# Native currency and "no hook" are both the zero address
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

__all__ = [
    "MIN_TICK",
    "MAX_TICK",
    "MIN_TICK_SPACING",
    "MAX_TICK_SPACING",
    "Q96",
    "MIN_SQRT_PRICE",
    "MAX_SQRT_PRICE",
    "FEE_UNITS_PER_PERCENT",
    "MAX_LP_FEE",
    "UINT24_MAX",
    "DYNAMIC_FEE_FLAG",
    "TICK_SPACINGS",
    "ZERO_ADDRESS",
]
