"""API endpoints for pool identity and price math."""

import structlog
from fastapi import APIRouter, Depends

from dynswap.config import ChainConfig, default_chain_configs, get_chain_config
from dynswap.fees import format_fee, is_dynamic_fee
from dynswap.math.price import (
    get_full_range_ticks,
    price_to_sqrt_price_x96,
    price_to_tick,
    tick_to_price,
)
from dynswap.models.api import (
    FeeResponse,
    KnownPoolsResponse,
    PoolIdRequest,
    PoolIdResponse,
    PoolKeyModel,
    SqrtPriceRequest,
    SqrtPriceResponse,
    TickPriceResponse,
    TickRangeResponse,
)
from dynswap.pool.key import PoolKey

logger = structlog.get_logger()

router = APIRouter()


def get_chains() -> dict[int, ChainConfig]:
    """Dependency provider for chain configuration.

    Override this in tests to inject custom chains:
        app.dependency_overrides[get_chains] = lambda: {1: my_chain}
    """
    return default_chain_configs()


def _pool_response(pool_key: PoolKey) -> PoolIdResponse:
    return PoolIdResponse(
        pool_id=pool_key.pool_id,
        pool_key=PoolKeyModel.from_pool_key(pool_key),
        is_dynamic_fee=pool_key.is_dynamic_fee,
    )


@router.post("/pools/id")
async def pool_id(request: PoolIdRequest) -> PoolIdResponse:
    """Sort a token pair into a PoolKey and derive its pool id."""
    pool_key = PoolKey.from_tokens(
        request.token_a,
        request.token_b,
        fee=request.fee,
        tick_spacing=request.tick_spacing,
        hooks=request.hooks,
    )
    response = _pool_response(pool_key)
    logger.info("pool_id_derived", pool_id=response.pool_id, fee=pool_key.fee)
    return response


@router.post("/prices/sqrt")
async def sqrt_price(request: SqrtPriceRequest) -> SqrtPriceResponse:
    """Convert a raw price to sqrtPriceX96 and the tick at or below it."""
    return SqrtPriceResponse(
        sqrt_price_x96=str(price_to_sqrt_price_x96(request.price)),
        tick=price_to_tick(request.price),
    )


@router.get("/prices/tick/{tick}")
async def tick_price(tick: int, decimals0: int = 18, decimals1: int = 18) -> TickPriceResponse:
    """Human price at a tick."""
    return TickPriceResponse(tick=tick, price=tick_to_price(tick, decimals0, decimals1))


@router.get("/ticks/full-range/{tick_spacing}")
async def full_range(tick_spacing: int) -> TickRangeResponse:
    """Widest usable tick range for a tick spacing."""
    lower, upper = get_full_range_ticks(tick_spacing)
    return TickRangeResponse(tick_spacing=tick_spacing, lower_tick=lower, upper_tick=upper)


@router.get("/fees/{fee}")
async def fee_info(fee: int) -> FeeResponse:
    """Format a fee in contract units."""
    return FeeResponse(fee=fee, formatted=format_fee(fee), is_dynamic=is_dynamic_fee(fee))


@router.get("/chains/{chain_id}/pools")
async def known_pools(
    chain_id: int,
    chains: dict[int, ChainConfig] = Depends(get_chains),
) -> KnownPoolsResponse:
    """Pool keys and ids of the hook's pools on a chain."""
    chain = get_chain_config(chain_id, chains)
    return KnownPoolsResponse(
        chain_id=chain.chain_id,
        pools=[_pool_response(pool_key) for pool_key in chain.known_pool_keys()],
    )
