"""Quote orchestration.

SwapRouter wires the pipeline together for one chain:
PoolCatalog -> select_candidates -> RouteBuilder -> BatchQuoter -> select_best_quote.
Every call is stateless; nothing fetched for one request is reused by another.
"""

from __future__ import annotations

import asyncio

import httpx
import structlog

from swapper.chains import ChainConfig, get_chain_config
from swapper.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from swapper.errors import NoRouteError
from swapper.models.quote import QuoteRequest, QuoteResponse
from swapper.models.types import normalize_address
from swapper.pools import PoolCatalog
from swapper.quoting import BatchQuoter, EthCaller, Multicall, TokenMetadataReader, Web3EthCaller
from swapper.routing import Quote, Route, RouteBuilder, select_best_quote, select_candidates

logger = structlog.get_logger()


class SwapRouter:
    """Finds and quotes the best route for a swap on one chain.

    Usage:
        router = SwapRouter.for_chain(1)
        best = await router.find_best_route(token_in, token_out, amount_in)

    Args:
        chain_config: Chain to route on
        caller: eth_call transport. If None, a Web3EthCaller on the chain's RPC.
        http_client: Shared client for subgraph queries
        config: Router configuration
    """

    def __init__(
        self,
        chain_config: ChainConfig,
        caller: EthCaller | None = None,
        http_client: httpx.AsyncClient | None = None,
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    ) -> None:
        self.chain_config = chain_config
        self.config = config
        if caller is None:
            caller = Web3EthCaller(
                chain_config.rpc_url,  # type: ignore[arg-type]
                timeout=config.http_timeout,
            )
        multicall = Multicall(caller, chain_config.multicall_address)

        self.catalog = PoolCatalog(chain_config, client=http_client, config=config)
        self.quoter = BatchQuoter(multicall, chain_config.quoter_address)  # type: ignore[arg-type]
        self.tokens = TokenMetadataReader(multicall)

    @classmethod
    def for_chain(
        cls,
        chain_id: int | str,
        caller: EthCaller | None = None,
        http_client: httpx.AsyncClient | None = None,
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    ) -> SwapRouter:
        """Build a router from the chain registry.

        Raises:
            ConfigurationError: If the chain is unknown or incompletely configured
        """
        return cls(get_chain_config(chain_id), caller=caller, http_client=http_client, config=config)

    async def find_best_route(self, token_in: str, token_out: str, amount_in: int) -> Quote:
        """Run the full pipeline and return the winning quote.

        Raises:
            UpstreamError: If the subgraph or RPC fails
            NoRouteError: If no route exists or none quotes a positive output
        """
        quotes = await self._quote_all(token_in, token_out, amount_in)
        return self._select(quotes)

    async def get_quote(self, request: QuoteRequest) -> QuoteResponse:
        """Quote a request, including token metadata for both sides.

        Route quoting and token metadata are fetched concurrently once routes
        are known.

        Raises:
            UpstreamError: If the subgraph or RPC fails
            NoRouteError: If no route exists or none quotes a positive output
        """
        amount_in = int(request.amount)
        routes = await self._build_routes(request.from_token, request.to_token)
        # Both batches always complete; the first failure is re-raised
        quotes, tokens = await asyncio.gather(
            self.quoter.quote_routes(routes, amount_in),
            self.tokens.fetch([request.from_token, request.to_token]),
            return_exceptions=True,
        )
        for result in (quotes, tokens):
            if isinstance(result, BaseException):
                raise result
        src_token, dst_token = tokens
        best = self._select(quotes)

        return QuoteResponse(
            provider="uniswap",
            chain_id=str(self.chain_config.chain_id),
            src_token=src_token,
            dst_token=dst_token,
            from_amount=request.amount,
            dst_amount=str(best.amount_out),
            protocols=[best.route.describe()],
            gas=str(best.gas_estimate),
        )

    async def _quote_all(self, token_in: str, token_out: str, amount_in: int) -> list[Quote]:
        routes = await self._build_routes(token_in, token_out)
        return await self.quoter.quote_routes(routes, amount_in)

    async def _build_routes(self, token_in: str, token_out: str) -> list[Route]:
        token_in = normalize_address(token_in)
        token_out = normalize_address(token_out)
        min_liquidity = self.chain_config.min_liquidity_usd

        pools = await self.catalog.fetch_pools(token_in, token_out)
        candidates = select_candidates(pools, token_in, token_out, self.chain_config, self.config)
        routes = RouteBuilder(candidates.all(), min_liquidity).find_routes(
            token_in, token_out, self.config.max_hops
        )

        logger.info(
            "routes_built",
            chain=self.chain_config.name,
            token_in=token_in,
            token_out=token_out,
            candidate_pools=len(candidates.all()),
            routes=len(routes),
        )
        if not routes:
            raise NoRouteError(f"No route from {token_in} to {token_out}")
        return routes

    def _select(self, quotes: list[Quote]) -> Quote:
        best = select_best_quote(quotes)
        logger.info(
            "best_route_selected",
            chain=self.chain_config.name,
            path=[token[-8:] for token in best.route.path],
            amount_out=str(best.amount_out),
            gas_estimate=str(best.gas_estimate),
        )
        return best


__all__ = ["SwapRouter"]
