"""Request and response models for the HTTP API."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from dynswap.constants import ZERO_ADDRESS
from dynswap.models.types import Address, PoolId
from dynswap.pool.key import PoolKey


class PoolKeyModel(BaseModel):
    """Serialized PoolKey using the contract's field names."""

    model_config = ConfigDict(populate_by_name=True)

    currency0: Address
    currency1: Address
    fee: int
    tick_spacing: int = Field(alias="tickSpacing")
    hooks: Address

    @classmethod
    def from_pool_key(cls, pool_key: PoolKey) -> PoolKeyModel:
        return cls(
            currency0=pool_key.currency0,
            currency1=pool_key.currency1,
            fee=pool_key.fee,
            tick_spacing=pool_key.tick_spacing,
            hooks=pool_key.hooks,
        )


class PoolIdRequest(BaseModel):
    """A token pair in any order plus the pool parameters."""

    model_config = ConfigDict(populate_by_name=True)

    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    fee: int
    tick_spacing: int = Field(alias="tickSpacing")
    hooks: Address = ZERO_ADDRESS


class PoolIdResponse(BaseModel):
    pool_id: PoolId = Field(serialization_alias="poolId")
    pool_key: PoolKeyModel = Field(serialization_alias="poolKey")
    is_dynamic_fee: bool = Field(serialization_alias="isDynamicFee")


class SqrtPriceRequest(BaseModel):
    """Raw price (token1 per token0). Sent as a string to keep every digit."""

    price: Decimal


class SqrtPriceResponse(BaseModel):
    # uint160 exceeds JSON's safe integer range, so it travels as a string
    sqrt_price_x96: str = Field(serialization_alias="sqrtPriceX96")
    tick: int


class TickPriceResponse(BaseModel):
    tick: int
    price: float


class TickRangeResponse(BaseModel):
    tick_spacing: int = Field(serialization_alias="tickSpacing")
    lower_tick: int = Field(serialization_alias="lowerTick")
    upper_tick: int = Field(serialization_alias="upperTick")


class FeeResponse(BaseModel):
    fee: int
    formatted: str
    is_dynamic: bool = Field(serialization_alias="isDynamic")


class KnownPoolsResponse(BaseModel):
    chain_id: int = Field(serialization_alias="chainId")
    pools: list[PoolIdResponse]


__all__ = [
    "PoolKeyModel",
    "PoolIdRequest",
    "PoolIdResponse",
    "SqrtPriceRequest",
    "SqrtPriceResponse",
    "TickPriceResponse",
    "TickRangeResponse",
    "FeeResponse",
    "KnownPoolsResponse",
]
