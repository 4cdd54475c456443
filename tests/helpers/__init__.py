"""Test helpers module for shared test utilities.

- constants: Token and contract addresses used across tests
"""

from tests.helpers.constants import (
    BASE_HOOK,
    BASE_USDC,
    BASE_WETH,
    CELO,
    CELO_HOOK,
    CUSD,
    TOKEN_A,
    TOKEN_B,
)

__all__ = [
    "BASE_WETH",
    "BASE_USDC",
    "BASE_HOOK",
    "CELO",
    "CUSD",
    "CELO_HOOK",
    "TOKEN_A",
    "TOKEN_B",
]
