"""Chain configuration for the dynamic-fee deployment.

Contract addresses, token lists and chain metadata are explicit values:
build a ChainConfig (or take one from default_chain_configs()) and pass it
to whatever needs chain context. Nothing here is a mutable module-level
registry.

RPC endpoints can be overridden through environment variables:
- DYNSWAP_BASE_RPC_URL
- DYNSWAP_CELO_RPC_URL
"""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field

from dynswap.constants import DYNAMIC_FEE_FLAG, TICK_SPACINGS, ZERO_ADDRESS
from dynswap.errors import UnsupportedChainError
from dynswap.models.types import Address, normalize_address
from dynswap.pool.key import PoolKey

BASE_CHAIN_ID = 8453
CELO_CHAIN_ID = 42220

# Shared by every chain (canonical Permit2 deployment)
PERMIT2_ADDRESS = "0x000000000022D473030F116dDEE9F6B43aC78BA3"


class TokenInfo(BaseModel):
    """An ERC-20 token (or the native currency at the zero address)."""

    model_config = ConfigDict(frozen=True)

    address: Address
    symbol: str
    name: str
    decimals: int = Field(ge=0, le=255)
    logo: str | None = None

    @property
    def is_native(self) -> bool:
        return self.address == ZERO_ADDRESS


class ContractAddresses(BaseModel):
    """Pool manager deployment plus the dynamic-fee hook."""

    model_config = ConfigDict(frozen=True)

    pool_manager: Address
    position_manager: Address
    universal_router: Address
    permit2: Address
    state_view: Address
    quoter: Address
    hook: Address


class ChainConfig(BaseModel):
    """Everything the core needs to know about one chain.

    Attributes:
        chain_id: EIP-155 chain id
        name: Display name
        short_name: Lowercase network name used on the command line
        explorer: Block explorer base URL
        rpc_url: JSON-RPC endpoint
        contracts: Contract addresses on this chain
        tokens: Token list keyed by symbol
        known_pairs: Symbol pairs with a dynamic-fee pool behind the hook
        default_tick_spacing: Tick spacing used by the hook's pools
    """

    model_config = ConfigDict(frozen=True)

    chain_id: int
    name: str
    short_name: str
    explorer: str
    rpc_url: str
    contracts: ContractAddresses
    tokens: dict[str, TokenInfo]
    known_pairs: list[tuple[str, str]] = Field(default_factory=list)
    default_tick_spacing: int = TICK_SPACINGS["MEDIUM"]

    def get_token(self, symbol: str) -> TokenInfo:
        """Look up a token by its key in the token list.

        Raises:
            KeyError: If the symbol is not configured
        """
        return self.tokens[symbol]

    def find_token(self, address: str) -> TokenInfo | None:
        """Find a token by address (case-insensitive), or None."""
        address_norm = normalize_address(address)
        for token in self.tokens.values():
            if token.address == address_norm:
                return token
        return None

    def token_list(self) -> list[TokenInfo]:
        """All configured tokens in declaration order."""
        return list(self.tokens.values())

    def known_pool_keys(self) -> list[PoolKey]:
        """Pool keys of the hook's dynamic-fee pools on this chain."""
        return [
            PoolKey.from_tokens(
                self.tokens[symbol_a].address,
                self.tokens[symbol_b].address,
                fee=DYNAMIC_FEE_FLAG,
                tick_spacing=self.default_tick_spacing,
                hooks=self.contracts.hook,
            )
            for symbol_a, symbol_b in self.known_pairs
        ]

    def explorer_tx_url(self, tx_hash: str) -> str:
        return f"{self.explorer}/tx/{tx_hash}"


def base_chain_config(rpc_url: str | None = None) -> ChainConfig:
    """Configuration for Base mainnet."""
    return ChainConfig(
        chain_id=BASE_CHAIN_ID,
        name="Base",
        short_name="base",
        explorer="https://basescan.org",
        rpc_url=rpc_url or os.environ.get("DYNSWAP_BASE_RPC_URL", "https://mainnet.base.org"),
        contracts=ContractAddresses(
            pool_manager="0x498581ff718922c3f8e6a244956af099b2652b2b",
            position_manager="0x7c5f5a4bbd8fd63184577525326123b519429bdc",
            universal_router="0x6ff5693b99212da76ad316178a184ab56d299b43",
            permit2=PERMIT2_ADDRESS,
            state_view="0xA3c0c9b65baD0b08107Aa264b0f3dB444b867A71",
            quoter="0x0d5e0f971ed27fbff6c2837bf31316121532048d",
            hook="0x2c80c5cd9fecc3e32dfaa654e022738480a4909a",
        ),
        tokens={
            "NATIVE": TokenInfo(
                address=ZERO_ADDRESS, symbol="ETH", name="Ethereum", decimals=18, logo="/tokens/eth.svg"
            ),
            "WETH": TokenInfo(
                address="0x4200000000000000000000000000000000000006",
                symbol="WETH",
                name="Wrapped Ether",
                decimals=18,
                logo="/tokens/weth.svg",
            ),
            "USDC": TokenInfo(
                address="0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
                symbol="USDC",
                name="USD Coin",
                decimals=6,
                logo="/tokens/usdc.svg",
            ),
            "DAI": TokenInfo(
                address="0x50c5725949A6F0c72E6C4a641F24049A917DB0Cb",
                symbol="DAI",
                name="Dai Stablecoin",
                decimals=18,
                logo="/tokens/dai.svg",
            ),
            "cbBTC": TokenInfo(
                address="0xcbB7C0000aB88B473b1f5aFd9ef808440eed33Bf",
                symbol="cbBTC",
                name="Coinbase Wrapped BTC",
                decimals=8,
                logo="/tokens/btc.svg",
            ),
        },
        known_pairs=[("WETH", "USDC")],
    )


def celo_chain_config(rpc_url: str | None = None) -> ChainConfig:
    """Configuration for Celo mainnet."""
    return ChainConfig(
        chain_id=CELO_CHAIN_ID,
        name="Celo",
        short_name="celo",
        explorer="https://celoscan.io",
        rpc_url=rpc_url or os.environ.get("DYNSWAP_CELO_RPC_URL", "https://forno.celo.org"),
        contracts=ContractAddresses(
            pool_manager="0x288dc841A52FCA2707c6947B3A777c5E56cd87BC",
            position_manager="0xf7965f3981e4d5bc383bfbcb61501763e9068ca9",
            universal_router="0x6a9bd5f5ac6e9d2bbf1f41b19bd3d17a03d50d9e",
            permit2=PERMIT2_ADDRESS,
            state_view="0xdC32a998Ef71Ab7e3a41BeDA9b9aF21EA19eC63A",
            quoter="0x4a6513c898fe1b2d4e60d7bd27e9dd678bdc6b5e",
            hook="0xe96B2C7416596fE707ba40379B909F42F18d7FC0",
        ),
        tokens={
            "NATIVE": TokenInfo(
                address=ZERO_ADDRESS, symbol="CELO", name="Celo", decimals=18, logo="/tokens/celo.svg"
            ),
            "CELO": TokenInfo(
                address="0x471EcE3750Da237f93B8E339c536989b8978a438",
                symbol="CELO",
                name="Celo Native",
                decimals=18,
                logo="/tokens/celo.svg",
            ),
            "cUSD": TokenInfo(
                address="0x765DE816845861e75A25fCA122bb6898B8B1282a",
                symbol="cUSD",
                name="Celo Dollar",
                decimals=18,
                logo="/tokens/cusd.svg",
            ),
            "cEUR": TokenInfo(
                address="0xD8763CBa276a3738E6DE85b4b3bF5FDed6D6cA73",
                symbol="cEUR",
                name="Celo Euro",
                decimals=18,
                logo="/tokens/ceur.svg",
            ),
            "USDC": TokenInfo(
                address="0xcebA9300f2b948710d2653dD7B07f33A8B32118C",
                symbol="USDC",
                name="USD Coin",
                decimals=6,
                logo="/tokens/usdc.svg",
            ),
        },
        known_pairs=[("CELO", "cUSD")],
    )


def default_chain_configs() -> dict[int, ChainConfig]:
    """Fresh mapping of chain id -> config for every supported chain."""
    configs = [base_chain_config(), celo_chain_config()]
    return {config.chain_id: config for config in configs}


def get_chain_config(chain_id: int, chains: dict[int, ChainConfig] | None = None) -> ChainConfig:
    """Return the config for chain_id.

    Args:
        chain_id: EIP-155 chain id
        chains: Configs to search (defaults to default_chain_configs())

    Raises:
        UnsupportedChainError: If no config exists for chain_id
    """
    if chains is None:
        chains = default_chain_configs()
    try:
        return chains[chain_id]
    except KeyError as err:
        raise UnsupportedChainError(
            f"Unsupported chain {chain_id} (supported: {sorted(chains)})"
        ) from err


__all__ = [
    "BASE_CHAIN_ID",
    "CELO_CHAIN_ID",
    "PERMIT2_ADDRESS",
    "TokenInfo",
    "ContractAddresses",
    "ChainConfig",
    "base_chain_config",
    "celo_chain_config",
    "default_chain_configs",
    "get_chain_config",
]
