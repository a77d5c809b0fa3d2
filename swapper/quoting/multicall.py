"""Batched contract reads through Multicall3.

All RPC traffic goes through an EthCaller, a single async eth_call. The real
implementation uses web3's AsyncWeb3; tests inject a fake.
"""

from __future__ import annotations

from typing import Protocol

import structlog
from eth_abi.exceptions import DecodingError
from web3 import AsyncHTTPProvider, AsyncWeb3

from swapper.config import DEFAULT_ROUTER_CONFIG
from swapper.errors import UpstreamError

from .encoding import decode_try_aggregate, encode_try_aggregate

logger = structlog.get_logger()


class EthCaller(Protocol):
    """Protocol for read-only contract calls."""

    async def call(self, to: str, data: bytes) -> bytes:
        """Execute eth_call against the latest block.

        Raises:
            UpstreamError: If the RPC request fails
        """
        ...


class Web3EthCaller:
    """EthCaller backed by an AsyncWeb3 HTTP provider.

    Retries are disabled; a failed request surfaces immediately.

    Args:
        rpc_url: JSON-RPC endpoint
        timeout: Seconds before a request fails
    """

    def __init__(self, rpc_url: str, timeout: float = DEFAULT_ROUTER_CONFIG.http_timeout) -> None:
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.w3 = AsyncWeb3(
            AsyncHTTPProvider(
                rpc_url,
                request_kwargs={"timeout": timeout},
                exception_retry_configuration=None,
            )
        )

    async def call(self, to: str, data: bytes) -> bytes:
        try:
            result = await self.w3.eth.call(
                {"to": AsyncWeb3.to_checksum_address(to), "data": "0x" + data.hex()}
            )
        except Exception as e:
            logger.warning("eth_call_failed", to=to, rpc_url=self.rpc_url, error=str(e))
            raise UpstreamError(f"eth_call to {to} failed: {e}") from e
        return bytes(result)


class Multicall:
    """Multicall3 client issuing one eth_call per batch.

    Args:
        caller: Transport for the eth_call
        address: Multicall3 contract address
    """

    def __init__(self, caller: EthCaller, address: str) -> None:
        self.caller = caller
        self.address = address

    async def try_aggregate(self, calls: list[tuple[str, bytes]]) -> list[tuple[bool, bytes]]:
        """Run calls in one batch without requiring each to succeed.

        Args:
            calls: (target, calldata) pairs

        Returns:
            (success, return_data) per call, in input order

        Raises:
            UpstreamError: If the RPC fails or the response is malformed
        """
        if not calls:
            return []

        raw = await self.caller.call(self.address, encode_try_aggregate(calls))

        try:
            results = decode_try_aggregate(raw)
        except DecodingError as e:
            raise UpstreamError(f"Malformed multicall response: {e}") from e

        if len(results) != len(calls):
            raise UpstreamError(
                f"Multicall returned {len(results)} results for {len(calls)} calls"
            )
        return results


__all__ = ["EthCaller", "Multicall", "Web3EthCaller"]
