"""Pytest configuration and fixtures."""

import pytest

from dynswap.config import ChainConfig, base_chain_config, celo_chain_config
from dynswap.constants import DYNAMIC_FEE_FLAG
from dynswap.pool import MockPoolStateReader, PoolKey, Slot0
from tests.helpers import BASE_HOOK, BASE_USDC, BASE_WETH

# Raw price of 2500 USDC per WETH: 2500 * 10^6 / 10^18
WETH_USDC_RAW_PRICE = "0.0000000025"


@pytest.fixture
def base_chain() -> ChainConfig:
    """Base config with a fixed RPC URL (ignores environment overrides)."""
    return base_chain_config(rpc_url="http://localhost:8545")


@pytest.fixture
def celo_chain() -> ChainConfig:
    """Celo config with a fixed RPC URL."""
    return celo_chain_config(rpc_url="http://localhost:8546")


@pytest.fixture
def weth_usdc_key() -> PoolKey:
    """The hook's dynamic-fee WETH/USDC pool on Base."""
    return PoolKey.from_tokens(
        BASE_WETH,
        BASE_USDC,
        fee=DYNAMIC_FEE_FLAG,
        tick_spacing=60,
        hooks=BASE_HOOK,
    )


@pytest.fixture
def weth_usdc_slot0() -> Slot0:
    """Slot0 for WETH/USDC priced at 2500 USDC per WETH with a 0.30% LP fee."""
    from dynswap.math.price import price_to_sqrt_price_x96, price_to_tick

    return Slot0(
        sqrt_price_x96=price_to_sqrt_price_x96(WETH_USDC_RAW_PRICE),
        tick=price_to_tick(WETH_USDC_RAW_PRICE),
        protocol_fee=0,
        lp_fee=3000,
    )


@pytest.fixture
def mock_reader(weth_usdc_key: PoolKey, weth_usdc_slot0: Slot0) -> MockPoolStateReader:
    """A mock reader that knows the WETH/USDC pool."""
    pool_id = weth_usdc_key.pool_id
    return MockPoolStateReader(
        slot0={pool_id: weth_usdc_slot0},
        liquidity={pool_id: 10**18},
        dynamic_fees={pool_id: 4500},
        volatilities={pool_id: 120},
    )
