"""Tests for address helpers."""

import pytest

from dynswap.errors import InvalidAddressError
from dynswap.models.types import address_to_bytes, is_valid_address, normalize_address
from tests.helpers import BASE_USDC


class TestNormalizeAddress:
    """Tests for normalize_address."""

    def test_lowercases(self):
        assert normalize_address(BASE_USDC) == BASE_USDC.lower()

    def test_adds_prefix(self):
        assert normalize_address("833589fCD6eDb6E08f4c7C32D4f71b54bdA02913") == BASE_USDC.lower()

    def test_validate_rejects_bad_address(self):
        with pytest.raises(InvalidAddressError):
            normalize_address("0x1234", validate=True)


class TestIsValidAddress:
    """Tests for is_valid_address."""

    def test_valid(self):
        assert is_valid_address(BASE_USDC)
        assert is_valid_address(BASE_USDC.lower())

    def test_invalid(self):
        assert not is_valid_address("0x1234")
        assert not is_valid_address(BASE_USDC[2:])
        assert not is_valid_address("0x" + "g" * 40)
        assert not is_valid_address("0x" + "1_" * 20)
        assert not is_valid_address(None)  # type: ignore[arg-type]

    def test_surrounding_whitespace_rejected(self):
        """A trailing newline is not part of a valid address."""
        assert not is_valid_address(BASE_USDC + "\n")
        assert not is_valid_address(" " + BASE_USDC)
        with pytest.raises(InvalidAddressError):
            address_to_bytes(BASE_USDC + "\n")


class TestAddressToBytes:
    """Tests for address_to_bytes."""

    def test_case_insensitive(self):
        """Every spelling of an address has the same raw value."""
        mixed = BASE_USDC
        upper = "0x" + BASE_USDC[2:].upper()
        assert address_to_bytes(mixed) == address_to_bytes(mixed.lower()) == address_to_bytes(upper)
        assert len(address_to_bytes(mixed)) == 20

    def test_invalid_raises(self):
        with pytest.raises(InvalidAddressError):
            address_to_bytes("0xnothex")
