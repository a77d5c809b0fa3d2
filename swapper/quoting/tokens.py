"""ERC-20 metadata lookup through Multicall3."""

from __future__ import annotations

import structlog
from eth_abi import decode  # type: ignore[attr-defined]
from eth_abi.exceptions import DecodingError

from swapper.models.quote import TokenInfo
from swapper.models.types import normalize_address

from .multicall import Multicall

logger = structlog.get_logger()

# ERC-20 function selectors
SYMBOL_SELECTOR = bytes.fromhex("95d89b41")  # symbol()
NAME_SELECTOR = bytes.fromhex("06fdde03")  # name()
DECIMALS_SELECTOR = bytes.fromhex("313ce567")  # decimals()

_METADATA_SELECTORS = (SYMBOL_SELECTOR, NAME_SELECTOR, DECIMALS_SELECTOR)


def decode_text(data: bytes) -> str | None:
    """Decode a string return value.

    Some legacy tokens (e.g. MKR) return bytes32 instead of string; those are
    decoded by stripping the null padding.
    """
    try:
        (value,) = decode(["string"], data)
        if value:
            return str(value)
    except (DecodingError, OverflowError, UnicodeDecodeError):
        pass

    if len(data) == 32:
        try:
            return data.rstrip(b"\x00").decode("utf-8") or None
        except UnicodeDecodeError:
            return None
    return None


def decode_decimals(data: bytes) -> int | None:
    try:
        (value,) = decode(["uint8"], data)
    except (DecodingError, OverflowError):
        return None
    return int(value)


class TokenMetadataReader:
    """Reads symbol, name and decimals for several tokens in one batch.

    Args:
        multicall: Multicall3 client
    """

    def __init__(self, multicall: Multicall) -> None:
        self.multicall = multicall

    async def fetch(self, tokens: list[str]) -> list[TokenInfo]:
        """Fetch metadata for each token, in input order.

        A field the token does not expose (reverting or undecodable call)
        is None.

        Raises:
            UpstreamError: If the batch call itself fails
        """
        addresses = [normalize_address(token) for token in tokens]
        calls = [(address, selector) for address in addresses for selector in _METADATA_SELECTORS]
        results = await self.multicall.try_aggregate(calls)

        infos: list[TokenInfo] = []
        for i, address in enumerate(addresses):
            (ok_symbol, symbol), (ok_name, name), (ok_decimals, decimals) = results[3 * i : 3 * i + 3]
            info = TokenInfo(
                address=address,
                symbol=decode_text(symbol) if ok_symbol else None,
                name=decode_text(name) if ok_name else None,
                decimals=decode_decimals(decimals) if ok_decimals else None,
            )
            if info.decimals is None:
                logger.debug("token_decimals_unavailable", token=address)
            infos.append(info)
        return infos


__all__ = ["TokenMetadataReader", "decode_decimals", "decode_text"]
