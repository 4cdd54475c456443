"""Decoding of raw pool state into display-ready PoolData."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

import structlog

from dynswap.fees import format_fee
from dynswap.math.price import sqrt_price_x96_to_price

from .key import PoolKey

if TYPE_CHECKING:
    from dynswap.config import ChainConfig

logger = structlog.get_logger()

# Fallbacks for tokens missing from the chain's token list
DEFAULT_TOKEN_DECIMALS = 18
DEFAULT_TOKEN0_SYMBOL = "Token0"
DEFAULT_TOKEN1_SYMBOL = "Token1"


class Slot0(NamedTuple):
    """StateView.getSlot0 result, in contract output order."""

    sqrt_price_x96: int
    tick: int
    protocol_fee: int
    lp_fee: int


@dataclass
class PoolData:
    """Pool state decoded for display.

    `price` is token1 per token0, adjusted for both tokens' decimals.
    """

    pool_id: str
    pool_key: PoolKey
    sqrt_price_x96: int
    tick: int
    liquidity: int
    lp_fee: int
    protocol_fee: int
    price: float
    token0_symbol: str
    token1_symbol: str
    token0_decimals: int
    token1_decimals: int

    @property
    def exists(self) -> bool:
        """A pool exists once initialized (non-zero sqrt-price)."""
        return self.sqrt_price_x96 > 0

    @property
    def lp_fee_formatted(self) -> str:
        return format_fee(self.lp_fee)

    @property
    def inverse_price(self) -> float:
        """token0 per token1 (0.0 for an uninitialized pool)."""
        return 1 / self.price if self.price else 0.0


def build_pool_data(
    pool_key: PoolKey,
    slot0: Slot0 | tuple[int, int, int, int],
    liquidity: int,
    chain: ChainConfig | None = None,
) -> PoolData:
    """Combine a pool key with its on-chain state.

    Args:
        pool_key: Key the state was read for
        slot0: (sqrtPriceX96, tick, protocolFee, lpFee) as returned by getSlot0
        liquidity: Active liquidity as returned by getLiquidity
        chain: Chain config used to resolve token symbols and decimals

    Returns:
        PoolData with a decimal-adjusted price. Tokens absent from the chain's
        token list fall back to 18 decimals and placeholder symbols.
    """
    sqrt_price_x96, tick, protocol_fee, lp_fee = (int(value) for value in slot0)

    token0 = chain.find_token(pool_key.currency0) if chain else None
    token1 = chain.find_token(pool_key.currency1) if chain else None

    if token0 is None or token1 is None:
        logger.debug(
            "pool_token_unknown",
            currency0=pool_key.currency0,
            currency1=pool_key.currency1,
            token0_known=token0 is not None,
            token1_known=token1 is not None,
        )

    decimals0 = token0.decimals if token0 else DEFAULT_TOKEN_DECIMALS
    decimals1 = token1.decimals if token1 else DEFAULT_TOKEN_DECIMALS

    return PoolData(
        pool_id=pool_key.pool_id,
        pool_key=pool_key,
        sqrt_price_x96=sqrt_price_x96,
        tick=tick,
        liquidity=int(liquidity),
        lp_fee=lp_fee,
        protocol_fee=protocol_fee,
        price=sqrt_price_x96_to_price(sqrt_price_x96, decimals0, decimals1),
        token0_symbol=token0.symbol if token0 else DEFAULT_TOKEN0_SYMBOL,
        token1_symbol=token1.symbol if token1 else DEFAULT_TOKEN1_SYMBOL,
        token0_decimals=decimals0,
        token1_decimals=decimals1,
    )


__all__ = [
    "DEFAULT_TOKEN_DECIMALS",
    "DEFAULT_TOKEN0_SYMBOL",
    "DEFAULT_TOKEN1_SYMBOL",
    "Slot0",
    "PoolData",
    "build_pool_data",
]
