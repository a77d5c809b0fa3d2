"""Shared type definitions for request and response models."""

import re
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

UINT256_MAX = 2**256 - 1

_ADDRESS_RE = re.compile(r"0x[0-9a-f]{40}")
_DECIMAL_RE = re.compile(r"[0-9]+")


def validate_uint256(value: Any) -> str:
    """Coerce an amount to a uint256 decimal string.

    Accepts non-negative ints and strings of decimal digits. Signs, spaces,
    underscores and hex are rejected.

    Raises:
        ValueError: If the value is not a uint256
    """
    if isinstance(value, bool) or not isinstance(value, int | str):
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    text = str(value)
    if not _DECIMAL_RE.fullmatch(text):
        raise ValueError(f"Uint256 must be a non-negative decimal integer: '{value}'")
    if int(text) > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return text


Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Lowercase an address and ensure the 0x prefix.

    Raises:
        ValueError: If validate is set and the result is not 0x + 40 hex chars
    """
    normalized = address.lower()
    if not normalized.startswith("0x"):
        normalized = "0x" + normalized
    if validate and not is_valid_address(normalized):
        raise ValueError(f"Invalid address: {address}")
    return normalized


def is_valid_address(address: Any) -> bool:
    """Check for 0x followed by exactly 40 hex characters (any case)."""
    return isinstance(address, str) and bool(_ADDRESS_RE.fullmatch(address.lower()))


def address_to_bytes(address: str) -> bytes:
    """Convert an address to its raw 20 bytes.

    Raises:
        ValueError: If the address is not 0x + 40 hex chars
    """
    return bytes.fromhex(normalize_address(address, validate=True)[2:])
