"""Path and calldata encoding for the mixed-route quoter and Multicall3."""

from __future__ import annotations

from eth_abi import decode, encode  # type: ignore[attr-defined]

from swapper.models.types import address_to_bytes
from swapper.pools import UniswapV2Pool, UniswapV3Pool
from swapper.routing.types import Route

# Fee marker the mixed-route quoter reads as "constant-product hop"
V2_FEE_MARKER = 0x800000

# Fee markers are uint24
FEE_MARKER_BYTES = 3
MAX_FEE_MARKER = 2 ** (8 * FEE_MARKER_BYTES) - 1

# quoteExactInput(bytes,uint256)
QUOTE_EXACT_INPUT_SELECTOR = bytes.fromhex("cdca1753")

# Output of MixedRouteQuoterV1.quoteExactInput:
# (amountOut, v3SqrtPriceX96AfterList, v3InitializedTicksCrossedList, v3SwapGasEstimate)
QUOTE_EXACT_INPUT_OUTPUT_TYPES = ["uint256", "uint160[]", "uint32[]", "uint256"]

# tryAggregate(bool,(address,bytes)[])
TRY_AGGREGATE_SELECTOR = bytes.fromhex("bce38bd7")
TRY_AGGREGATE_OUTPUT_TYPES = ["(bool,bytes)[]"]


def fee_marker(pool: UniswapV2Pool | UniswapV3Pool) -> bytes:
    """3-byte big-endian fee marker for one hop.

    Raises:
        ValueError: If a v3 fee tier does not fit in 3 bytes
    """
    if isinstance(pool, UniswapV2Pool):
        fee = V2_FEE_MARKER
    elif isinstance(pool, UniswapV3Pool):
        fee = pool.fee_tier
        if not 0 <= fee <= MAX_FEE_MARKER:
            raise ValueError(f"Fee tier {fee} of pool {pool.id} does not fit in uint24")
    else:
        raise TypeError(f"Unknown pool type: {type(pool)}")
    return fee.to_bytes(FEE_MARKER_BYTES, "big")


def encode_path(route: Route) -> bytes:
    """Encode a route as a quoter path.

    Layout: token0 (20 bytes) | fee0 (3 bytes) | token1 | fee1 | ... | tokenN

    Raises:
        ValueError: If the route has no pools or an address/fee is invalid
    """
    if not route.pools:
        raise ValueError("Invalid route: no pools")

    encoded = bytearray()
    for token, pool in zip(route.path[:-1], route.pools, strict=True):
        encoded += address_to_bytes(token)
        encoded += fee_marker(pool)
    encoded += address_to_bytes(route.path[-1])
    return bytes(encoded)


def encode_path_hex(route: Route) -> str:
    """encode_path() as a 0x-prefixed hex string."""
    return "0x" + encode_path(route).hex()


def encode_quote_exact_input(path: bytes, amount_in: int) -> bytes:
    """Calldata for quoteExactInput(path, amountIn)."""
    return QUOTE_EXACT_INPUT_SELECTOR + encode(["bytes", "uint256"], [path, amount_in])


def decode_quote_exact_input(data: bytes) -> tuple[int, int]:
    """Decode quoteExactInput return data.

    Returns:
        Tuple of (amount_out, gas_estimate)

    Raises:
        eth_abi.exceptions.DecodingError: If the data does not match the schema
    """
    amount_out, _sqrt_prices, _ticks_crossed, gas_estimate = decode(
        QUOTE_EXACT_INPUT_OUTPUT_TYPES, data
    )
    return int(amount_out), int(gas_estimate)


def encode_try_aggregate(calls: list[tuple[str, bytes]], require_success: bool = False) -> bytes:
    """Calldata for Multicall3.tryAggregate(requireSuccess, calls).

    Args:
        calls: (target address, calldata) pairs
        require_success: If True the whole batch reverts when any call fails
    """
    encoded_calls = [(address_to_bytes(target), data) for target, data in calls]
    return TRY_AGGREGATE_SELECTOR + encode(
        ["bool", "(address,bytes)[]"], [require_success, encoded_calls]
    )


def decode_try_aggregate(data: bytes) -> list[tuple[bool, bytes]]:
    """Decode tryAggregate return data into (success, return_data) pairs."""
    (results,) = decode(TRY_AGGREGATE_OUTPUT_TYPES, data)
    return [(bool(success), bytes(return_data)) for success, return_data in results]


__all__ = [
    "QUOTE_EXACT_INPUT_OUTPUT_TYPES",
    "QUOTE_EXACT_INPUT_SELECTOR",
    "TRY_AGGREGATE_SELECTOR",
    "V2_FEE_MARKER",
    "decode_quote_exact_input",
    "decode_try_aggregate",
    "encode_path",
    "encode_path_hex",
    "encode_quote_exact_input",
    "encode_try_aggregate",
    "fee_marker",
]
