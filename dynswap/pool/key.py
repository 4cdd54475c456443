"""PoolKey value type and token-pair canonicalization.

A pool is identified by (currency0, currency1, fee, tickSpacing, hooks) with
currency0 < currency1 by raw 20-byte value. Ordering compares bytes, never
display text: comparing checksummed (mixed-case) hex strings can order a pair
differently from the pool manager and produce the id of a pool that does not
exist.
"""

from __future__ import annotations

from dataclasses import dataclass

from dynswap.constants import ZERO_ADDRESS
from dynswap.errors import CurrencyOrderError, IdenticalCurrenciesError
from dynswap.fees import is_dynamic_fee, validate_fee
from dynswap.math.price import check_tick_spacing
from dynswap.models.types import address_to_bytes, normalize_address


def sort_tokens(token_a: str, token_b: str) -> tuple[str, str]:
    """Order two token addresses as (currency0, currency1).

    Args:
        token_a: Token address, any case
        token_b: Token address, any case

    Returns:
        Both addresses in lowercase, lower raw value first. The result does not
        depend on argument order or on the case of the inputs.

    Raises:
        InvalidAddressError: If either address is malformed
        IdenticalCurrenciesError: If both addresses are the same
    """
    bytes_a = address_to_bytes(token_a)
    bytes_b = address_to_bytes(token_b)

    if bytes_a == bytes_b:
        raise IdenticalCurrenciesError(f"Token pair uses the same address twice: {token_a}")

    if bytes_a < bytes_b:
        return normalize_address(token_a), normalize_address(token_b)
    return normalize_address(token_b), normalize_address(token_a)


@dataclass(frozen=True)
class PoolKey:
    """Identifies a pool in the pool manager.

    Attributes:
        currency0: Lower token address (zero address for the native currency)
        currency1: Higher token address
        fee: uint24 fee in hundredths of a bip, or DYNAMIC_FEE_FLAG for hook-set fees
        tick_spacing: Spacing between usable ticks
        hooks: Hook contract address (zero address for none)

    Addresses are stored lowercase, so two keys built from differently-cased
    input compare and hash equal. The key never re-sorts its currencies; use
    PoolKey.from_tokens for unordered input.
    """

    currency0: str
    currency1: str
    fee: int
    tick_spacing: int
    hooks: str = ZERO_ADDRESS

    def __post_init__(self) -> None:
        currency0 = address_to_bytes(self.currency0)
        currency1 = address_to_bytes(self.currency1)
        address_to_bytes(self.hooks)

        if currency0 >= currency1:
            raise CurrencyOrderError(
                f"currency0 must be < currency1, got {self.currency0} >= {self.currency1}"
            )
        validate_fee(self.fee)
        check_tick_spacing(self.tick_spacing)

        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "currency0", normalize_address(self.currency0))
        object.__setattr__(self, "currency1", normalize_address(self.currency1))
        object.__setattr__(self, "hooks", normalize_address(self.hooks))

    @classmethod
    def from_tokens(
        cls,
        token_a: str,
        token_b: str,
        fee: int,
        tick_spacing: int,
        hooks: str = ZERO_ADDRESS,
    ) -> PoolKey:
        """Build a key from a token pair in either order."""
        currency0, currency1 = sort_tokens(token_a, token_b)
        return cls(
            currency0=currency0,
            currency1=currency1,
            fee=fee,
            tick_spacing=tick_spacing,
            hooks=hooks,
        )

    @property
    def is_dynamic_fee(self) -> bool:
        """True if the hook supplies the fee at swap time."""
        return is_dynamic_fee(self.fee)

    @property
    def pool_id(self) -> str:
        """Keccak-256 pool identifier as 0x-prefixed hex."""
        from dynswap.pool.encoding import get_pool_id

        return get_pool_id(self)

    def has_token(self, token: str) -> bool:
        """Check if token is one side of this pool."""
        token_norm = normalize_address(token)
        return token_norm in (self.currency0, self.currency1)

    def to_tuple(self) -> tuple[str, str, int, int, str]:
        """Fields in ABI order: (currency0, currency1, fee, tickSpacing, hooks)."""
        return (self.currency0, self.currency1, self.fee, self.tick_spacing, self.hooks)

    def to_dict(self) -> dict[str, str | int]:
        """Fields keyed by their contract (camelCase) names."""
        return {
            "currency0": self.currency0,
            "currency1": self.currency1,
            "fee": self.fee,
            "tickSpacing": self.tick_spacing,
            "hooks": self.hooks,
        }


__all__ = ["PoolKey", "sort_tokens"]
