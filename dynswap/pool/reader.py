"""Chain reads for pool state and hook fees."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Protocol

import structlog

from dynswap.fees import format_fee

from .encoding import POOL_KEY_COMPONENTS
from .key import PoolKey
from .state import PoolData, Slot0, build_pool_data

if TYPE_CHECKING:
    from dynswap.config import ChainConfig

logger = structlog.get_logger()


class PoolStateReader(Protocol):
    """Protocol for pool state readers.

    This allows swapping between the RPC-based reader and a mock for testing.
    """

    def get_slot0(self, pool_id: str) -> Slot0 | None:
        """Get (sqrtPriceX96, tick, protocolFee, lpFee) for a pool, or None if the read fails."""
        ...

    def get_liquidity(self, pool_id: str) -> int | None:
        """Get active liquidity for a pool, or None if the read fails."""
        ...

    def get_dynamic_fee(self, pool_key: PoolKey) -> int | None:
        """Get the hook's current fee for a pool, or None if the read fails."""
        ...

    def get_volatility(self, pool_id: str) -> int | None:
        """Get the hook's volatility reading for a pool, or None if the read fails."""
        ...


class MockPoolStateReader:
    """Mock reader for testing without RPC calls.

    Configure with per-pool state, and track calls for assertions.
    """

    def __init__(
        self,
        slot0: dict[str, Slot0] | None = None,
        liquidity: dict[str, int] | None = None,
        dynamic_fees: dict[str, int] | None = None,
        volatilities: dict[str, int] | None = None,
    ):
        """Initialize mock reader.

        Args:
            slot0: Mapping of pool id -> Slot0
            liquidity: Mapping of pool id -> liquidity
            dynamic_fees: Mapping of pool id -> hook fee
            volatilities: Mapping of pool id -> hook volatility
        """
        self.slot0 = {key.lower(): value for key, value in (slot0 or {}).items()}
        self.liquidity = {key.lower(): value for key, value in (liquidity or {}).items()}
        self.dynamic_fees = {key.lower(): value for key, value in (dynamic_fees or {}).items()}
        self.volatilities = {key.lower(): value for key, value in (volatilities or {}).items()}
        self.calls: list[tuple[str, str]] = []  # (method, pool_id)

    def get_slot0(self, pool_id: str) -> Slot0 | None:
        self.calls.append(("get_slot0", pool_id))
        return self.slot0.get(pool_id.lower())

    def get_liquidity(self, pool_id: str) -> int | None:
        self.calls.append(("get_liquidity", pool_id))
        return self.liquidity.get(pool_id.lower())

    def get_dynamic_fee(self, pool_key: PoolKey) -> int | None:
        pool_id = pool_key.pool_id
        self.calls.append(("get_dynamic_fee", pool_id))
        return self.dynamic_fees.get(pool_id)

    def get_volatility(self, pool_id: str) -> int | None:
        self.calls.append(("get_volatility", pool_id))
        return self.volatilities.get(pool_id.lower())


# StateView ABI - minimal, just the functions we need
STATE_VIEW_ABI = [
    {
        "name": "getSlot0",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "poolId", "type": "bytes32"}],
        "outputs": [
            {"name": "sqrtPriceX96", "type": "uint160"},
            {"name": "tick", "type": "int24"},
            {"name": "protocolFee", "type": "uint24"},
            {"name": "lpFee", "type": "uint24"},
        ],
    },
    {
        "name": "getLiquidity",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "poolId", "type": "bytes32"}],
        "outputs": [{"name": "liquidity", "type": "uint128"}],
    },
]

# Dynamic fee hook ABI
DYNAMIC_FEE_HOOK_ABI = [
    {
        "name": "getFee",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "key", "type": "tuple", "components": POOL_KEY_COMPONENTS}],
        "outputs": [{"name": "fee", "type": "uint24"}],
    },
    {
        "name": "getVolatility",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "poolId", "type": "bytes32"}],
        "outputs": [{"name": "volatility", "type": "uint256"}],
    },
]


class Web3PoolStateReader:
    """Real reader that calls StateView and the fee hook via RPC.

    This makes actual eth_call requests; failures are logged and reported
    as None.
    """

    def __init__(self, chain: ChainConfig, web3_provider: str | None = None):
        """Initialize reader with web3 provider.

        Args:
            chain: Chain whose StateView and hook contracts to read
            web3_provider: HTTP RPC URL (defaults to chain.rpc_url)
        """
        try:
            from web3 import Web3
        except ImportError as e:
            raise ImportError(
                "web3 package required for Web3PoolStateReader. Install with: pip install web3"
            ) from e

        self.chain = chain
        self.w3 = Web3(Web3.HTTPProvider(web3_provider or chain.rpc_url))
        self.state_view = self.w3.eth.contract(
            address=Web3.to_checksum_address(chain.contracts.state_view),
            abi=STATE_VIEW_ABI,
        )
        self.hook = self.w3.eth.contract(
            address=Web3.to_checksum_address(chain.contracts.hook),
            abi=DYNAMIC_FEE_HOOK_ABI,
        )

    def get_slot0(self, pool_id: str) -> Slot0 | None:
        """Get slot0 via RPC call."""
        try:
            result = self.state_view.functions.getSlot0(bytes.fromhex(pool_id[2:])).call()
            # Result is (sqrtPriceX96, tick, protocolFee, lpFee)
            return Slot0(*(int(value) for value in result))
        except Exception as e:
            logger.warning("pool_get_slot0_failed", pool_id=pool_id, error=str(e))
            return None

    def get_liquidity(self, pool_id: str) -> int | None:
        """Get active liquidity via RPC call."""
        try:
            return int(self.state_view.functions.getLiquidity(bytes.fromhex(pool_id[2:])).call())
        except Exception as e:
            logger.warning("pool_get_liquidity_failed", pool_id=pool_id, error=str(e))
            return None

    def get_dynamic_fee(self, pool_key: PoolKey) -> int | None:
        """Get the hook's current fee via RPC call."""
        try:
            from web3 import Web3

            key = (
                Web3.to_checksum_address(pool_key.currency0),
                Web3.to_checksum_address(pool_key.currency1),
                pool_key.fee,
                pool_key.tick_spacing,
                Web3.to_checksum_address(pool_key.hooks),
            )
            return int(self.hook.functions.getFee(key).call())
        except Exception as e:
            logger.warning(
                "hook_get_fee_failed",
                pool_id=pool_key.pool_id,
                hooks=pool_key.hooks,
                error=str(e),
            )
            return None

    def get_volatility(self, pool_id: str) -> int | None:
        """Get the hook's volatility reading via RPC call."""
        try:
            return int(self.hook.functions.getVolatility(bytes.fromhex(pool_id[2:])).call())
        except Exception as e:
            logger.warning("hook_get_volatility_failed", pool_id=pool_id, error=str(e))
            return None


class DynamicFee(NamedTuple):
    """Hook fee for a pool, raw and as a percentage string."""

    fee: int
    formatted: str


def fetch_dynamic_fee(reader: PoolStateReader, pool_key: PoolKey) -> DynamicFee | None:
    """Read the fee the hook currently charges for a pool.

    Returns:
        DynamicFee, or None if the read fails
    """
    fee = reader.get_dynamic_fee(pool_key)
    if fee is None:
        logger.debug("dynamic_fee_unavailable", pool_id=pool_key.pool_id)
        return None
    return DynamicFee(fee=fee, formatted=format_fee(fee))


def fetch_pool_data(
    reader: PoolStateReader,
    pool_key: PoolKey,
    chain: ChainConfig | None = None,
) -> PoolData | None:
    """Read a pool's state and decode it.

    Returns:
        PoolData, or None if either read fails
    """
    pool_id = pool_key.pool_id
    slot0 = reader.get_slot0(pool_id)
    liquidity = reader.get_liquidity(pool_id)

    if slot0 is None or liquidity is None:
        logger.debug(
            "pool_state_unavailable",
            pool_id=pool_id,
            slot0_missing=slot0 is None,
            liquidity_missing=liquidity is None,
        )
        return None

    return build_pool_data(pool_key, slot0, liquidity, chain)


__all__ = [
    "PoolStateReader",
    "MockPoolStateReader",
    "Web3PoolStateReader",
    "STATE_VIEW_ABI",
    "DYNAMIC_FEE_HOOK_ABI",
    "DynamicFee",
    "fetch_dynamic_fee",
    "fetch_pool_data",
]
