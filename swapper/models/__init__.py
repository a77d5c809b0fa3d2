"""Pydantic models and shared types."""

from swapper.models.quote import QuoteRequest, QuoteResponse, TokenInfo
from swapper.models.types import Address, Uint256, is_valid_address, normalize_address

__all__ = [
    "Address",
    "QuoteRequest",
    "QuoteResponse",
    "TokenInfo",
    "Uint256",
    "is_valid_address",
    "normalize_address",
]
