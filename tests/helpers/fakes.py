"""Fake eth_call transport for Multicall3 batches.

FakeEthCaller decodes the tryAggregate calldata, answers every sub-call
with a handler, and encodes the results the way Multicall3 would.

Usage:
    caller = FakeEthCaller(lambda target, data: (True, encode_quote_result(1000, 90_000)))
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
from eth_abi import decode, encode  # type: ignore[attr-defined]

from swapper.errors import UpstreamError
from swapper.quoting.encoding import TRY_AGGREGATE_SELECTOR
from tests.helpers.factories import V2_SUBGRAPH_URL, V3_SUBGRAPH_URL

SubCallHandler = Callable[[str, bytes], tuple[bool, bytes]]


def encode_quote_result(amount_out: int, gas_estimate: int) -> bytes:
    """Return data of quoteExactInput for the given amounts."""
    return encode(
        ["uint256", "uint160[]", "uint32[]", "uint256"],
        [amount_out, [], [], gas_estimate],
    )


def decode_quote_call(data: bytes) -> tuple[bytes, int]:
    """Split quoteExactInput calldata into (path, amount_in)."""
    path, amount_in = decode(["bytes", "uint256"], data[4:])
    return bytes(path), int(amount_in)


class FakeEthCaller:
    """EthCaller that serves Multicall3.tryAggregate from a handler.

    Args:
        handler: Maps (target, calldata) of each sub-call to (success, return_data)
        error: If set, every call raises UpstreamError with this message
    """

    def __init__(self, handler: SubCallHandler | None = None, error: str | None = None) -> None:
        self.handler = handler
        self.error = error
        self.calls: list[tuple[str, list[tuple[str, bytes]]]] = []  # Track calls for assertions

    async def call(self, to: str, data: bytes) -> bytes:
        if self.error is not None:
            raise UpstreamError(self.error)
        assert data[:4] == TRY_AGGREGATE_SELECTOR, "expected a tryAggregate call"

        _require_success, raw_calls = decode(["bool", "(address,bytes)[]"], data[4:])
        sub_calls = [(str(target).lower(), bytes(call_data)) for target, call_data in raw_calls]
        self.calls.append((to, sub_calls))

        assert self.handler is not None
        results = [self.handler(target, call_data) for target, call_data in sub_calls]
        return encode(["(bool,bytes)[]"], [results])


def subgraph_transport(
    v2_records: list[dict[str, Any]],
    v3_records: list[dict[str, Any]],
    seen: list[tuple[str, dict[str, Any]]] | None = None,
) -> httpx.MockTransport:
    """MockTransport answering the test v2 and v3 subgraph URLs.

    Args:
        v2_records: `pairs` returned by the v2 indexer
        v3_records: `pools` returned by the v3 indexer
        seen: If given, (url, body) of every request is appended
    """

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if seen is not None:
            seen.append((str(request.url), body))
        if str(request.url) == V2_SUBGRAPH_URL:
            return httpx.Response(200, json={"data": {"pairs": v2_records}})
        if str(request.url) == V3_SUBGRAPH_URL:
            return httpx.Response(200, json={"data": {"pools": v3_records}})
        return httpx.Response(404)

    return httpx.MockTransport(handler)
