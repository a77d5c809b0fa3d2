"""Tests for shared address and amount helpers."""

import pytest

from swapper.models.types import (
    UINT256_MAX,
    address_to_bytes,
    is_valid_address,
    normalize_address,
    validate_uint256,
)
from tests.helpers import WETH


class TestValidateUint256:
    """Tests for validate_uint256()."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0, "0"), ("123", "123"), (UINT256_MAX, str(UINT256_MAX))],
    )
    def test_valid(self, value, expected):
        assert validate_uint256(value) == expected

    @pytest.mark.parametrize("value", ["-1", -1, "1_000", " 5", "0x10", "", True, 1.5, None])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            validate_uint256(value)

    def test_overflow(self):
        with pytest.raises(ValueError, match="overflow"):
            validate_uint256(str(UINT256_MAX + 1))


class TestAddresses:
    """Tests for address helpers."""

    def test_normalize_adds_prefix_and_lowercases(self):
        assert normalize_address(WETH[2:].upper()) == WETH

    def test_normalize_validates_on_request(self):
        with pytest.raises(ValueError, match="Invalid address"):
            normalize_address("0x1234", validate=True)

    @pytest.mark.parametrize(
        "address,valid",
        [
            (WETH, True),
            (WETH.upper().replace("0X", "0x"), True),
            ("0x" + "a" * 39, False),
            ("0x" + "a" * 38 + "_a", False),
            ("0x" + "g" * 40, False),
            (WETH + "\n", False),
            (None, False),
        ],
    )
    def test_is_valid_address(self, address, valid):
        assert is_valid_address(address) is valid

    def test_address_to_bytes(self):
        raw = address_to_bytes(WETH.upper().replace("0X", "0x"))
        assert len(raw) == 20
        assert raw.hex() == WETH[2:]
