"""Fee encoding for dynamic-fee pools.

Pool fees are stored as uint24 in hundredths of a basis point
(1 unit = 0.0001%, so 3000 = 0.30%). Bit 23 (DYNAMIC_FEE_FLAG) marks a pool
whose fee is supplied by its hook at swap time; when it is set the remaining
bits carry no meaningful fee and must be ignored.

Usage:
    from dynswap.fees import format_fee, parse_fee, is_dynamic_fee

    format_fee(3000)      # "0.30%"
    format_fee(0x800000)  # "Dynamic"
    parse_fee("0.30")     # 3000
"""

from __future__ import annotations

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation

from dynswap.constants import (
    DYNAMIC_FEE_FLAG,
    FEE_UNITS_PER_PERCENT,
    MAX_LP_FEE,
    TICK_SPACINGS,
    UINT24_MAX,
)
from dynswap.errors import InvalidFeeError

DYNAMIC_FEE_LABEL = "Dynamic"

# Upper fee bounds (in percent) for each recommended tick spacing
_LOW_FEE_PERCENT = Decimal("0.05")
_MEDIUM_FEE_PERCENT = Decimal("0.30")


def _check_fee_units(fee: int) -> None:
    if isinstance(fee, bool) or not isinstance(fee, int):
        raise InvalidFeeError(f"Fee must be an integer, got {type(fee).__name__}")
    if fee < 0 or fee > UINT24_MAX:
        raise InvalidFeeError(f"Fee must fit in uint24, got {fee}")


def _to_decimal(value: float | int | str | Decimal) -> Decimal:
    if isinstance(value, bool):
        raise InvalidFeeError(f"Fee percentage must be numeric, got {value!r}")
    try:
        # str() of a float is its shortest repr, so 0.29 stays 0.29
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as err:
        raise InvalidFeeError(f"Fee percentage must be numeric, got {value!r}") from err
    if not result.is_finite():
        raise InvalidFeeError(f"Fee percentage must be finite, got {value!r}")
    return result


def is_dynamic_fee(fee: int) -> bool:
    """True iff the dynamic-fee flag is set, whatever the other bits hold."""
    return (fee & DYNAMIC_FEE_FLAG) != 0


def strip_dynamic_fee_flag(fee: int) -> int:
    """Return the literal fee bits with the dynamic flag cleared."""
    return fee & ~DYNAMIC_FEE_FLAG & UINT24_MAX


def format_fee(fee: int) -> str:
    """Format a fee in contract units as a percentage string.

    Two decimal places, rounded half-up (3000 -> "0.30%", 50 -> "0.01%").
    Dynamic fees are reported as "Dynamic" instead of a bogus percentage.

    Raises:
        InvalidFeeError: If fee is not a uint24
    """
    _check_fee_units(fee)
    if is_dynamic_fee(fee):
        return DYNAMIC_FEE_LABEL
    percent = (Decimal(fee) / FEE_UNITS_PER_PERCENT).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )
    return f"{percent}%"


def parse_fee(fee_percent: float | int | str | Decimal) -> int:
    """Convert a fee percentage to contract units, truncating to whole units.

    The multiplication happens in decimal arithmetic so human-entered values
    convert exactly (0.29 -> 2900, not 2899).

    Raises:
        InvalidFeeError: If the percentage is not numeric, negative, or above 100
    """
    percent = _to_decimal(fee_percent)
    if percent < 0:
        raise InvalidFeeError(f"Fee percentage cannot be negative: {fee_percent}")
    units = int((percent * FEE_UNITS_PER_PERCENT).to_integral_value(rounding=ROUND_DOWN))
    if units > MAX_LP_FEE:
        raise InvalidFeeError(f"Fee percentage cannot exceed 100%: {fee_percent}")
    return units


def fee_to_percent(fee: int) -> Decimal:
    """Literal fee as a Decimal percentage (3000 -> 0.3)."""
    _check_fee_units(fee)
    return Decimal(strip_dynamic_fee_flag(fee)) / FEE_UNITS_PER_PERCENT


def get_tick_spacing(fee_percent: float | int | str | Decimal) -> int:
    """Recommended tick spacing for a fee tier.

    <= 0.05% -> 1, <= 0.30% -> 60, otherwise 200. This is a convention, not a
    protocol rule; callers may pick any valid spacing.
    """
    percent = _to_decimal(fee_percent)
    if percent <= _LOW_FEE_PERCENT:
        return TICK_SPACINGS["LOW"]
    if percent <= _MEDIUM_FEE_PERCENT:
        return TICK_SPACINGS["MEDIUM"]
    return TICK_SPACINGS["HIGH"]


def validate_fee(fee: int) -> int:
    """Validate a PoolKey fee field.

    Any uint24 with the dynamic flag is accepted. A literal fee may not
    exceed MAX_LP_FEE.

    Raises:
        InvalidFeeError: If the fee is not a valid pool fee
    """
    _check_fee_units(fee)
    if not is_dynamic_fee(fee) and fee > MAX_LP_FEE:
        raise InvalidFeeError(f"Fee exceeds {MAX_LP_FEE} units (100%): {fee}")
    return fee


__all__ = [
    "DYNAMIC_FEE_LABEL",
    "is_dynamic_fee",
    "strip_dynamic_fee_flag",
    "format_fee",
    "parse_fee",
    "fee_to_percent",
    "get_tick_spacing",
    "validate_fee",
]
