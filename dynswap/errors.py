"""Error classes for pool identity and price math.

Invalid-argument errors reject inputs before any computation. Domain-range
errors report computed values that do not fit the pool manager's bounds.
Floating-point precision loss in price conversions is expected and is not
an error.
"""


class DynSwapError(ValueError):
    """Base error for dynswap operations."""

    pass


class InvalidArgumentError(DynSwapError):
    """An input was rejected before computation."""

    pass


class DomainRangeError(DynSwapError):
    """A computed value falls outside the representable bounds."""

    pass


class InvalidAddressError(InvalidArgumentError):
    """Address is not 0x followed by 40 hex characters."""

    pass


class IdenticalCurrenciesError(InvalidArgumentError):
    """Both sides of a token pair are the same address."""

    pass


class CurrencyOrderError(InvalidArgumentError):
    """PoolKey currencies are not in canonical (ascending) order."""

    pass


class InvalidFeeError(InvalidArgumentError):
    """Fee is negative, exceeds uint24, or exceeds 100% without the dynamic flag."""

    pass


class InvalidTickSpacingError(InvalidArgumentError):
    """Tick spacing must be in [1, 32767]."""

    pass


class InvalidPriceError(InvalidArgumentError):
    """Price must be strictly positive and finite."""

    pass


class TickOutOfRangeError(InvalidArgumentError):
    """Tick lies outside [MIN_TICK, MAX_TICK]."""

    pass


class SqrtPriceOutOfRangeError(DomainRangeError):
    """Computed sqrt-price lies outside [MIN_SQRT_PRICE, MAX_SQRT_PRICE)."""

    pass


class UnsupportedChainError(InvalidArgumentError):
    """No configuration is known for the requested chain id."""

    pass


__all__ = [
    "DynSwapError",
    "InvalidArgumentError",
    "DomainRangeError",
    "InvalidAddressError",
    "IdenticalCurrenciesError",
    "CurrencyOrderError",
    "InvalidFeeError",
    "InvalidTickSpacingError",
    "InvalidPriceError",
    "TickOutOfRangeError",
    "SqrtPriceOutOfRangeError",
    "UnsupportedChainError",
]
