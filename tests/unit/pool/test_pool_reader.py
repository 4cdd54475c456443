"""Tests for pool state readers."""

import pytest

from dynswap.constants import DYNAMIC_FEE_FLAG
from dynswap.pool import (
    DynamicFee,
    MockPoolStateReader,
    PoolKey,
    fetch_dynamic_fee,
    fetch_pool_data,
)
from tests.helpers import TOKEN_A, TOKEN_B


class TestMockPoolStateReader:
    """Tests for MockPoolStateReader."""

    def test_configured_pool(self, mock_reader, weth_usdc_key, weth_usdc_slot0):
        pool_id = weth_usdc_key.pool_id
        assert mock_reader.get_slot0(pool_id) == weth_usdc_slot0
        assert mock_reader.get_liquidity(pool_id) == 10**18
        assert mock_reader.get_dynamic_fee(weth_usdc_key) == 4500
        assert mock_reader.get_volatility(weth_usdc_key.pool_id) == 120

    def test_pool_id_lookup_is_case_insensitive(self, mock_reader, weth_usdc_key):
        assert mock_reader.get_liquidity(weth_usdc_key.pool_id.upper().replace("0X", "0x")) == 10**18

    def test_unknown_pool(self, mock_reader):
        key = PoolKey(TOKEN_A, TOKEN_B, 3000, 60)
        assert mock_reader.get_slot0(key.pool_id) is None
        assert mock_reader.get_dynamic_fee(key) is None
        assert mock_reader.get_volatility(key.pool_id) is None

    def test_tracks_calls(self, mock_reader, weth_usdc_key):
        mock_reader.get_slot0(weth_usdc_key.pool_id)
        mock_reader.get_dynamic_fee(weth_usdc_key)
        assert mock_reader.calls == [
            ("get_slot0", weth_usdc_key.pool_id),
            ("get_dynamic_fee", weth_usdc_key.pool_id),
        ]


class TestFetchDynamicFee:
    """Tests for fetch_dynamic_fee."""

    def test_formats_hook_fee(self, mock_reader, weth_usdc_key):
        result = fetch_dynamic_fee(mock_reader, weth_usdc_key)
        assert result == DynamicFee(fee=4500, formatted="0.45%")
        assert mock_reader.calls == [("get_dynamic_fee", weth_usdc_key.pool_id)]

    def test_upper_fee_bound(self, weth_usdc_key):
        reader = MockPoolStateReader(dynamic_fees={weth_usdc_key.pool_id: 10_000})
        assert fetch_dynamic_fee(reader, weth_usdc_key).formatted == "1.00%"

    def test_unknown_pool_returns_none(self, mock_reader):
        key = PoolKey(TOKEN_A, TOKEN_B, DYNAMIC_FEE_FLAG, 60)
        assert fetch_dynamic_fee(mock_reader, key) is None


class TestFetchPoolData:
    """Tests for fetch_pool_data."""

    def test_reads_and_decodes(self, mock_reader, weth_usdc_key, base_chain):
        data = fetch_pool_data(mock_reader, weth_usdc_key, base_chain)

        assert data is not None
        assert data.price == pytest.approx(2500, rel=1e-9)
        assert data.liquidity == 10**18
        assert [method for method, _ in mock_reader.calls] == ["get_slot0", "get_liquidity"]

    def test_missing_state_returns_none(self, weth_usdc_key, weth_usdc_slot0):
        """Both reads must succeed."""
        pool_id = weth_usdc_key.pool_id
        reader = MockPoolStateReader(slot0={pool_id: weth_usdc_slot0})
        assert fetch_pool_data(reader, weth_usdc_key) is None


class TestWeb3PoolStateReader:
    """Tests for Web3PoolStateReader without a live node."""

    def test_rpc_failure_returns_none(self, base_chain, weth_usdc_key):
        """Unreachable RPC endpoints are logged and reported as None."""
        pytest.importorskip("web3")
        from dynswap.pool import Web3PoolStateReader

        reader = Web3PoolStateReader(base_chain, web3_provider="http://127.0.0.1:9")
        assert reader.get_slot0(weth_usdc_key.pool_id) is None
        assert reader.get_dynamic_fee(weth_usdc_key) is None
        assert reader.get_volatility(weth_usdc_key.pool_id) is None
