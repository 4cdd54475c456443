"""Tests for pool key ABI encoding and pool id derivation."""

import pytest
from eth_utils import keccak

from dynswap.constants import DYNAMIC_FEE_FLAG, MAX_SQRT_PRICE, MIN_SQRT_PRICE, Q96, ZERO_ADDRESS
from dynswap.errors import SqrtPriceOutOfRangeError
from dynswap.pool import (
    INITIALIZE_SELECTOR,
    PoolKey,
    encode_initialize,
    encode_pool_key,
    get_pool_id,
    sort_tokens,
)
from tests.helpers import BASE_HOOK, BASE_USDC, BASE_WETH, CELO_HOOK

WORD = 32

# Ethereum mainnet USDC and the id of its native ETH pool (fee 500, spacing 10, no hook)
MAINNET_USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
MAINNET_ETH_USDC_POOL_ID = "0x21c67e77068de97969ba93d4aab21826d33ca12bb9f565d8496e8fda8a82ca27"


def _upper(address: str) -> str:
    return "0x" + address[2:].upper()


def _word(encoded: bytes, index: int) -> bytes:
    return encoded[index * WORD : (index + 1) * WORD]


@pytest.fixture
def key() -> PoolKey:
    return PoolKey.from_tokens(BASE_WETH, BASE_USDC, fee=3000, tick_spacing=60, hooks=BASE_HOOK)


class TestEncodePoolKey:
    """Tests for encode_pool_key."""

    def test_five_words(self, key):
        assert len(encode_pool_key(key)) == 5 * WORD

    def test_field_layout(self, key):
        """Each field is left-padded into its own 32-byte word."""
        encoded = encode_pool_key(key)
        assert _word(encoded, 0) == bytes(12) + bytes.fromhex(BASE_WETH[2:])
        assert _word(encoded, 1) == bytes(12) + bytes.fromhex(BASE_USDC[2:])
        assert _word(encoded, 2) == (3000).to_bytes(WORD, "big")
        assert _word(encoded, 3) == (60).to_bytes(WORD, "big")
        assert _word(encoded, 4) == bytes(12) + bytes.fromhex(BASE_HOOK[2:])

    def test_dynamic_fee_encoded_verbatim(self):
        key = PoolKey.from_tokens(BASE_WETH, BASE_USDC, fee=DYNAMIC_FEE_FLAG, tick_spacing=60)
        assert _word(encode_pool_key(key), 2) == DYNAMIC_FEE_FLAG.to_bytes(WORD, "big")


class TestGetPoolId:
    """Tests for get_pool_id."""

    def test_keccak_of_encoding(self, key):
        assert get_pool_id(key) == "0x" + keccak(encode_pool_key(key)).hex()

    def test_deployed_pool_id(self):
        """Native ETH/USDC 0.05% pool deployed on Ethereum mainnet."""
        key = PoolKey.from_tokens(
            MAINNET_USDC, ZERO_ADDRESS, fee=500, tick_spacing=10, hooks=ZERO_ADDRESS
        )
        assert key.pool_id == MAINNET_ETH_USDC_POOL_ID

    def test_format(self, key):
        pool_id = get_pool_id(key)
        assert pool_id.startswith("0x")
        assert len(pool_id) == 66
        assert pool_id == pool_id.lower()

    def test_property_matches_function(self, key):
        assert key.pool_id == get_pool_id(key)

    def test_deterministic(self, key):
        """Field-wise equal keys yield identical ids."""
        same = PoolKey.from_tokens(
            _upper(BASE_USDC), BASE_WETH, fee=3000, tick_spacing=60, hooks=_upper(BASE_HOOK)
        )
        assert get_pool_id(same) == get_pool_id(key)
        assert get_pool_id(key) == get_pool_id(key)

    def test_single_field_changes_change_id(self, key):
        """No collisions across single-field variants."""
        variants = [
            key,
            PoolKey.from_tokens(BASE_WETH, BASE_USDC, fee=500, tick_spacing=60, hooks=BASE_HOOK),
            PoolKey.from_tokens(BASE_WETH, BASE_USDC, fee=DYNAMIC_FEE_FLAG, tick_spacing=60, hooks=BASE_HOOK),
            PoolKey.from_tokens(BASE_WETH, BASE_USDC, fee=3000, tick_spacing=1, hooks=BASE_HOOK),
            PoolKey.from_tokens(BASE_WETH, BASE_USDC, fee=3000, tick_spacing=200, hooks=BASE_HOOK),
            PoolKey.from_tokens(BASE_WETH, BASE_USDC, fee=3000, tick_spacing=60),
            PoolKey.from_tokens(ZERO_ADDRESS, BASE_USDC, fee=3000, tick_spacing=60, hooks=BASE_HOOK),
            PoolKey.from_tokens(BASE_WETH, ZERO_ADDRESS, fee=3000, tick_spacing=60, hooks=BASE_HOOK),
        ]
        ids = {get_pool_id(variant) for variant in variants}
        assert len(ids) == len(variants)

    def test_end_to_end_scenario(self):
        """Sort, build, derive: stable across calls and sensitive to the hook."""
        token_a = "0x" + "AA" * 20
        token_b = "0x" + "11" * 20

        currency0, currency1 = sort_tokens(token_a, token_b)
        assert (currency0, currency1) == ("0x" + "11" * 20, "0x" + "aa" * 20)

        key = PoolKey(currency0, currency1, DYNAMIC_FEE_FLAG, 60, BASE_HOOK)
        first = get_pool_id(key)
        second = get_pool_id(PoolKey(currency0, currency1, DYNAMIC_FEE_FLAG, 60, BASE_HOOK))
        other_hook = get_pool_id(PoolKey(currency0, currency1, DYNAMIC_FEE_FLAG, 60, CELO_HOOK))

        assert first == second
        assert first != other_hook


class TestEncodeInitialize:
    """Tests for encode_initialize."""

    POOL_MANAGER = "0x498581ff718922c3f8e6a244956af099b2652b2b"

    def test_calldata_layout(self, key):
        target, calldata = encode_initialize(key, Q96, self.POOL_MANAGER)
        data = bytes.fromhex(calldata[2:])

        assert target == self.POOL_MANAGER
        assert data[:4] == INITIALIZE_SELECTOR
        # Static tuple is inlined: five key words then the sqrt-price word
        assert data[4 : 4 + 5 * WORD] == encode_pool_key(key)
        assert data[4 + 5 * WORD :] == Q96.to_bytes(WORD, "big")

    def test_pool_manager_is_normalized(self, key):
        target, _ = encode_initialize(key, Q96, "0x498581FF718922c3f8e6A244956aF099B2652b2b")
        assert target == self.POOL_MANAGER

    def test_sqrt_price_bounds(self, key):
        encode_initialize(key, MIN_SQRT_PRICE, self.POOL_MANAGER)
        with pytest.raises(SqrtPriceOutOfRangeError):
            encode_initialize(key, MIN_SQRT_PRICE - 1, self.POOL_MANAGER)
        with pytest.raises(SqrtPriceOutOfRangeError):
            encode_initialize(key, MAX_SQRT_PRICE, self.POOL_MANAGER)
