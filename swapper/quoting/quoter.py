"""Batched route quoting against the mixed-route quoter."""

from __future__ import annotations

import structlog
from eth_abi.exceptions import DecodingError

from swapper.errors import QuoteDecodeError
from swapper.routing.types import Quote, Route

from .encoding import decode_quote_exact_input, encode_path, encode_quote_exact_input
from .multicall import Multicall

logger = structlog.get_logger()


def decode_route_quote(route: Route, success: bool, data: bytes) -> Quote:
    """Turn one multicall sub-result into a Quote.

    Raises:
        QuoteDecodeError: If the sub-call reverted or its data is malformed
    """
    if not success:
        raise QuoteDecodeError("quote call reverted")
    try:
        amount_out, gas_estimate = decode_quote_exact_input(data)
    except (DecodingError, OverflowError, ValueError) as e:
        raise QuoteDecodeError(f"undecodable quote result: {e}") from e
    return Quote(route=route, amount_out=amount_out, gas_estimate=gas_estimate)


class BatchQuoter:
    """Simulates exact-input swaps for many routes in one on-chain read.

    Usage:
        quoter = BatchQuoter(Multicall(caller, config.multicall_address), config.quoter_address)
        quotes = await quoter.quote_routes(routes, amount_in)

    Args:
        multicall: Multicall3 client
        quoter_address: Mixed-route quoter contract
    """

    def __init__(self, multicall: Multicall, quoter_address: str) -> None:
        self.multicall = multicall
        self.quoter_address = quoter_address

    async def quote_routes(self, routes: list[Route], amount_in: int) -> list[Quote]:
        """Quote every route for the given input amount.

        Routes that cannot be encoded, whose sub-call fails or whose result
        does not decode are dropped; the rest keep input order.

        Raises:
            UpstreamError: If the batch call itself fails
        """
        encodable: list[Route] = []
        calls: list[tuple[str, bytes]] = []
        for index, route in enumerate(routes):
            try:
                path = encode_path(route)
            except ValueError as e:
                logger.warning(
                    "route_quote_dropped",
                    index=index,
                    hops=route.hops,
                    pools=[pool_id[-8:] for pool_id in route.pool_ids],
                    error=str(e),
                )
                continue
            encodable.append(route)
            calls.append((self.quoter_address, encode_quote_exact_input(path, amount_in)))

        if not calls:
            return []
        results = await self.multicall.try_aggregate(calls)

        quotes: list[Quote] = []
        for index, (route, (success, data)) in enumerate(zip(encodable, results, strict=True)):
            try:
                quotes.append(decode_route_quote(route, success, data))
            except QuoteDecodeError as e:
                logger.warning(
                    "route_quote_dropped",
                    index=index,
                    hops=route.hops,
                    pools=[pool_id[-8:] for pool_id in route.pool_ids],
                    error=str(e),
                )

        logger.info("routes_quoted", requested=len(routes), quoted=len(quotes))
        return quotes


__all__ = ["BatchQuoter", "decode_route_quote"]
