"""Price, sqrt-price and tick conversions.

A pool's price is always token1 per token0. It has three views:
- human price: decimal-adjusted float (e.g. 2500.0 USDC per WETH)
- sqrtPriceX96: floor(sqrt(raw_price) * 2^96), the pool manager's storage format
- tick: signed index where tick t is raw price 1.0001^t

Price -> sqrtPriceX96 and price -> tick run in a 78-digit decimal context.
The reverse directions return floats, so round trips agree only within a small relative
tolerance; that is expected precision loss, not an error.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_FLOOR, ROUND_HALF_EVEN, Decimal, InvalidOperation

from dynswap.constants import (
    MAX_SQRT_PRICE,
    MAX_TICK,
    MAX_TICK_SPACING,
    MIN_SQRT_PRICE,
    MIN_TICK,
    MIN_TICK_SPACING,
    Q96,
)
from dynswap.errors import (
    InvalidArgumentError,
    InvalidPriceError,
    InvalidTickSpacingError,
    SqrtPriceOutOfRangeError,
    TickOutOfRangeError,
)

__all__ = [
    # Constants
    "TICK_BASE",
    "DECIMAL_HIGH_PREC_CONTEXT",
    # Conversions
    "price_to_sqrt_price_x96",
    "sqrt_price_x96_to_price",
    "tick_to_price",
    "price_to_tick",
    # Tick helpers
    "nearest_usable_tick",
    "get_full_range_ticks",
    "check_tick",
    "check_tick_spacing",
    # Liquidity
    "estimate_liquidity_for_amounts",
]

TICK_BASE = 1.0001
_TICK_BASE_DECIMAL = Decimal("1.0001")

# 78 digits of precision: enough for uint256 values (up to ~10^77)
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)

# log ratios closer than this to an integer are checked against the exact tick price
_TICK_BOUNDARY_MARGIN = Decimal("1e-40")

# ERC-20 decimals are a uint8
_MAX_TOKEN_DECIMALS = 255


# =============================================================================
# Validation
# =============================================================================


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_tick(tick: int) -> int:
    """Return tick if it lies in [MIN_TICK, MAX_TICK].

    Raises:
        TickOutOfRangeError: If tick is not an integer in the tick domain
    """
    if not _is_int(tick):
        raise TickOutOfRangeError(f"Tick must be an integer, got {type(tick).__name__}")
    if tick < MIN_TICK or tick > MAX_TICK:
        raise TickOutOfRangeError(f"Tick {tick} outside [{MIN_TICK}, {MAX_TICK}]")
    return tick


def check_tick_spacing(tick_spacing: int) -> int:
    """Return tick_spacing if it lies in [MIN_TICK_SPACING, MAX_TICK_SPACING].

    Raises:
        InvalidTickSpacingError: If tick_spacing is not a valid spacing
    """
    if not _is_int(tick_spacing):
        raise InvalidTickSpacingError(
            f"Tick spacing must be an integer, got {type(tick_spacing).__name__}"
        )
    if tick_spacing < MIN_TICK_SPACING or tick_spacing > MAX_TICK_SPACING:
        raise InvalidTickSpacingError(
            f"Tick spacing {tick_spacing} outside [{MIN_TICK_SPACING}, {MAX_TICK_SPACING}]"
        )
    return tick_spacing


def _check_decimals(decimals0: int, decimals1: int) -> int:
    """Validate token decimals and return decimals0 - decimals1."""
    for decimals in (decimals0, decimals1):
        if not _is_int(decimals) or decimals < 0 or decimals > _MAX_TOKEN_DECIMALS:
            raise InvalidArgumentError(f"Token decimals must be in [0, 255], got {decimals!r}")
    return decimals0 - decimals1


def _to_positive_decimal(price: float | int | str | Decimal) -> Decimal:
    if isinstance(price, bool):
        raise InvalidPriceError(f"Price must be numeric, got {price!r}")
    try:
        # str() keeps human-entered floats as typed (0.0004, not its binary expansion)
        value = price if isinstance(price, Decimal) else Decimal(str(price))
    except InvalidOperation as err:
        raise InvalidPriceError(f"Price must be numeric, got {price!r}") from err
    if not value.is_finite() or value <= 0:
        raise InvalidPriceError(f"Price must be positive and finite, got {price!r}")
    return value


# =============================================================================
# Conversions
# =============================================================================


def price_to_sqrt_price_x96(price: float | int | str | Decimal) -> int:
    """Convert a raw price (token1/token0) to floor(sqrt(price) * 2^96).

    Args:
        price: Strictly positive price. Strings are parsed as decimals.

    Returns:
        sqrtPriceX96 suitable for pool initialization

    Raises:
        InvalidPriceError: If price is not a positive finite number
        SqrtPriceOutOfRangeError: If the result is outside [MIN_SQRT_PRICE, MAX_SQRT_PRICE)
    """
    value = _to_positive_decimal(price)
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        scaled = value.sqrt() * Q96
        sqrt_price_x96 = int(scaled.to_integral_value(rounding=ROUND_FLOOR))

    if sqrt_price_x96 < MIN_SQRT_PRICE or sqrt_price_x96 >= MAX_SQRT_PRICE:
        raise SqrtPriceOutOfRangeError(
            f"sqrtPriceX96 {sqrt_price_x96} for price {price} outside "
            f"[{MIN_SQRT_PRICE}, {MAX_SQRT_PRICE})"
        )
    return sqrt_price_x96


def sqrt_price_x96_to_price(sqrt_price_x96: int, decimals0: int, decimals1: int) -> float:
    """Convert sqrtPriceX96 to a human price of token1 per token0.

    The raw ratio (sqrtPriceX96 / 2^96)^2 is scaled by 10^(decimals0 - decimals1).
    A zero sqrt-price (uninitialized pool) gives 0.0.

    Raises:
        InvalidPriceError: If sqrt_price_x96 is negative or not an integer
    """
    if not _is_int(sqrt_price_x96) or sqrt_price_x96 < 0:
        raise InvalidPriceError(f"sqrtPriceX96 must be a non-negative integer, got {sqrt_price_x96!r}")
    exponent = _check_decimals(decimals0, decimals1)

    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        sqrt_price = Decimal(sqrt_price_x96) / Q96
        price = sqrt_price * sqrt_price * Decimal(10) ** exponent
    return float(price)


def tick_to_price(tick: int, decimals0: int, decimals1: int) -> float:
    """Human price at a tick: 1.0001^tick * 10^(decimals0 - decimals1).

    Raises:
        TickOutOfRangeError: If tick is outside [MIN_TICK, MAX_TICK]
    """
    check_tick(tick)
    exponent = _check_decimals(decimals0, decimals1)
    return TICK_BASE**tick * 10.0**exponent


def _at_or_above_tick(value: Decimal, tick: int) -> bool:
    """Exact test of value >= 1.0001^tick in integer arithmetic."""
    numerator, denominator = value.as_integer_ratio()
    if tick >= 0:
        return numerator * 10 ** (4 * tick) >= 10001**tick * denominator
    return numerator * 10001 ** (-tick) >= 10 ** (-4 * tick) * denominator


def price_to_tick(price: float | int | str | Decimal) -> int:
    """Tick at or below a raw price: floor(log(price) / log(1.0001)).

    The result is not clamped; callers must check it against the tick domain
    (see check_tick). The logarithms are taken in decimal arithmetic, and a
    ratio within _TICK_BOUNDARY_MARGIN of an integer is settled by comparing
    against the exact power of 1.0001, so "1.00050010001000050001" maps to
    tick 5. A float produced by tick_to_price can still land one tick lower.

    Raises:
        InvalidPriceError: If price is not a positive finite number
    """
    value = _to_positive_decimal(price)
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        ratio = value.ln() / _TICK_BASE_DECIMAL.ln()
        tick = int(ratio.to_integral_value(rounding=ROUND_FLOOR))
        nearest = int(ratio.to_integral_value(rounding=ROUND_HALF_EVEN))
        if abs(ratio - nearest) >= _TICK_BOUNDARY_MARGIN:
            return tick
    return nearest if _at_or_above_tick(value, nearest) else nearest - 1


# =============================================================================
# Tick helpers
# =============================================================================


def nearest_usable_tick(tick: int, tick_spacing: int) -> int:
    """Round tick to the nearest multiple of tick_spacing.

    Ties round toward positive infinity (-30 with spacing 60 -> 0, 30 -> 60).
    If the rounded tick leaves [MIN_TICK, MAX_TICK] it moves one spacing back
    inside, so the result is always a usable range boundary.

    Raises:
        TickOutOfRangeError: If tick is outside the tick domain
        InvalidTickSpacingError: If tick_spacing is not a valid spacing
    """
    check_tick(tick)
    check_tick_spacing(tick_spacing)

    quotient, remainder = divmod(tick, tick_spacing)
    if 2 * remainder >= tick_spacing:
        quotient += 1
    rounded = quotient * tick_spacing

    if rounded < MIN_TICK:
        rounded += tick_spacing
    elif rounded > MAX_TICK:
        rounded -= tick_spacing
    return rounded


def get_full_range_ticks(tick_spacing: int) -> tuple[int, int]:
    """Widest (lower, upper) tick pair aligned to tick_spacing.

    The lower bound rounds up and the upper bound rounds down, so the range
    never leaves [MIN_TICK, MAX_TICK] even when tick_spacing does not divide
    MAX_TICK (spacing 200 gives (-887200, 887200)).

    Raises:
        InvalidTickSpacingError: If tick_spacing is not a valid spacing
    """
    check_tick_spacing(tick_spacing)
    lower = -(-MIN_TICK // tick_spacing) * tick_spacing
    upper = (MAX_TICK // tick_spacing) * tick_spacing
    return lower, upper


# =============================================================================
# Liquidity
# =============================================================================


def estimate_liquidity_for_amounts(
    sqrt_price_x96: int,
    sqrt_price_a_x96: int,
    sqrt_price_b_x96: int,
    amount0: int,
    amount1: int,
) -> int:
    """Estimate the liquidity a deposit of (amount0, amount1) provides in a range.

    This is an estimate for display and for sizing mint calls. It evaluates the
    range formulas on real-valued sqrt-prices and floors the result; it does not
    reproduce the pool manager's integer rounding, so the on-chain liquidity for
    the same deposit can differ in the last units.

    Args:
        sqrt_price_x96: Current pool sqrt-price
        sqrt_price_a_x96: One range bound as sqrt-price
        sqrt_price_b_x96: Other range bound as sqrt-price
        amount0: Max token0 to deposit (raw units)
        amount1: Max token1 to deposit (raw units)

    Returns:
        Liquidity limited by whichever token binds; a zero amount on one side
        is ignored, and 0 is returned when no token contributes.

    Raises:
        InvalidPriceError: If any sqrt-price is not positive or the bounds are equal
        InvalidArgumentError: If an amount is negative
    """
    for value in (sqrt_price_x96, sqrt_price_a_x96, sqrt_price_b_x96):
        if not _is_int(value) or value <= 0:
            raise InvalidPriceError(f"sqrtPriceX96 must be a positive integer, got {value!r}")
    for amount in (amount0, amount1):
        if not _is_int(amount) or amount < 0:
            raise InvalidArgumentError(f"Amounts must be non-negative integers, got {amount!r}")

    if sqrt_price_a_x96 > sqrt_price_b_x96:
        sqrt_price_a_x96, sqrt_price_b_x96 = sqrt_price_b_x96, sqrt_price_a_x96
    if sqrt_price_a_x96 == sqrt_price_b_x96:
        raise InvalidPriceError("Range bounds must differ")

    liquidity0 = Decimal(0)
    liquidity1 = Decimal(0)
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        current = Decimal(sqrt_price_x96) / Q96
        lower = Decimal(sqrt_price_a_x96) / Q96
        upper = Decimal(sqrt_price_b_x96) / Q96

        if current <= lower:
            # Range above the price: only token0
            liquidity0 = amount0 * lower * upper / (upper - lower)
        elif current < upper:
            liquidity0 = amount0 * current * upper / (upper - current)
            liquidity1 = amount1 / (current - lower)
        else:
            # Range below the price: only token1
            liquidity1 = amount1 / (upper - lower)

        candidates = [value for value in (liquidity0, liquidity1) if value > 0]
        if not candidates:
            return 0
        return int(min(candidates).to_integral_value(rounding=ROUND_FLOOR))
