"""Pool discovery through the v2 and v3 subgraph indexers.

PoolCatalog fetches every pool touching the input token, the output token or
one of the chain's base tokens, then applies the liquidity floors and the
canonical liquidity ordering used by the rest of the pipeline.
"""

from __future__ import annotations

import asyncio
from functools import cmp_to_key
from typing import Any

import httpx
import structlog

from swapper.chains import ChainConfig
from swapper.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from swapper.errors import UpstreamError
from swapper.models.types import normalize_address

from .parsing import parse_v2_pool, parse_v3_pool
from .types import AnyPool, UniswapV2Pool, UniswapV3Pool

logger = structlog.get_logger()

# Indexer page size (The Graph caps `first` at 1000)
MAX_POOLS_PER_QUERY = 1000

V2_POOLS_QUERY = """
query pairs($tokens: [String!]!, $first: Int!) {
  pairs(
    first: $first
    orderBy: reserveUSD
    orderDirection: desc
    where: { or: [{ token0_in: $tokens }, { token1_in: $tokens }] }
  ) {
    id
    token0 { id symbol decimals }
    token1 { id symbol decimals }
    reserve0
    reserve1
    reserveUSD
  }
}
"""

V3_POOLS_QUERY = """
query pools($tokens: [String!]!, $first: Int!) {
  pools(
    first: $first
    orderBy: totalValueLockedUSD
    orderDirection: desc
    where: { or: [{ token0_in: $tokens }, { token1_in: $tokens }] }
  ) {
    id
    token0 { id symbol decimals }
    token1 { id symbol decimals }
    feeTier
    liquidity
    tick
    totalValueLockedUSD
  }
}
"""


def filter_v2_pools(pools: list[UniswapV2Pool], min_liquidity_usd: float) -> list[UniswapV2Pool]:
    """Keep constant-product pools above the floor with both reserves non-zero."""
    return [
        pool
        for pool in pools
        if pool.reserve_usd >= min_liquidity_usd and pool.reserve0 > 0 and pool.reserve1 > 0
    ]


def filter_v3_pools(
    pools: list[UniswapV3Pool],
    min_liquidity_usd: float,
    liquidity_multiplier: float = DEFAULT_ROUTER_CONFIG.v3_liquidity_multiplier,
) -> list[UniswapV3Pool]:
    """Keep concentrated-liquidity pools that are initialized and deep enough.

    A pool needs non-zero active liquidity, a defined tick, and TVL of at
    least `liquidity_multiplier` times the chain minimum. Reported TVL on
    concentrated pools can include out-of-range positions, hence the
    stricter floor.
    """
    floor = max(min_liquidity_usd, min_liquidity_usd * liquidity_multiplier)
    return [
        pool
        for pool in pools
        if pool.liquidity > 0 and pool.tick is not None and pool.total_value_locked_usd >= floor
    ]


def sort_pools(pools: list[AnyPool], min_liquidity_usd: float) -> list[AnyPool]:
    """Sort pools by USD liquidity, descending.

    Two v3 pools whose liquidity differs by less than the chain minimum are
    treated as equivalent and ordered by ascending fee tier instead. The
    sort is stable, so fully tied pools keep indexer order.

    The fee-tier rule makes the ordering non-transitive when a v2 pool sits
    between two near-tied v3 pools, so the result then depends on input
    order. It is still deterministic for a given input order.
    """

    def compare(a: AnyPool, b: AnyPool) -> int:
        if (
            isinstance(a, UniswapV3Pool)
            and isinstance(b, UniswapV3Pool)
            and abs(a.usd_liquidity - b.usd_liquidity) < min_liquidity_usd
            and a.fee_tier != b.fee_tier
        ):
            return a.fee_tier - b.fee_tier
        if a.usd_liquidity > b.usd_liquidity:
            return -1
        if a.usd_liquidity < b.usd_liquidity:
            return 1
        return 0

    return sorted(pools, key=cmp_to_key(compare))


class PoolCatalog:
    """Fetches and filters candidate pools for one chain.

    Usage:
        catalog = PoolCatalog(get_chain_config(1))
        pools = await catalog.fetch_pools(token_in, token_out)

    Args:
        chain_config: Chain whose subgraphs and thresholds to use
        client: Shared HTTP client. If None, a client is opened per query.
        config: Router configuration (liquidity multipliers, timeout)
    """

    def __init__(
        self,
        chain_config: ChainConfig,
        client: httpx.AsyncClient | None = None,
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    ) -> None:
        self.chain_config = chain_config
        self.config = config
        self._client = client

    def query_tokens(self, token_in: str, token_out: str) -> list[str]:
        """Tokens whose pools are fetched: both endpoints plus the base tokens."""
        tokens: list[str] = []
        for token in (token_in, token_out, *self.chain_config.base_tokens):
            token_norm = normalize_address(token)
            if token_norm not in tokens:
                tokens.append(token_norm)
        return tokens

    async def fetch_pools(self, token_in: str, token_out: str) -> list[AnyPool]:
        """Fetch, filter and sort pools of both protocol generations.

        Both indexer queries run concurrently. Any failure aborts the whole
        fetch; there is no retry.

        Returns:
            Usable pools sorted by USD liquidity (see sort_pools)

        Raises:
            UpstreamError: If either indexer query fails
        """
        tokens = self.query_tokens(token_in, token_out)
        min_liquidity = self.chain_config.min_liquidity_usd

        raw_v2, raw_v3 = await asyncio.gather(
            self._fetch_v2(tokens),
            self._fetch_v3(tokens),
        )

        v2_pools = filter_v2_pools(raw_v2, min_liquidity)
        v3_pools = filter_v3_pools(raw_v3, min_liquidity, self.config.v3_liquidity_multiplier)
        pools = sort_pools([*v2_pools, *v3_pools], min_liquidity)

        logger.info(
            "pools_fetched",
            chain=self.chain_config.name,
            v2_fetched=len(raw_v2),
            v3_fetched=len(raw_v3),
            v2_usable=len(v2_pools),
            v3_usable=len(v3_pools),
        )
        return pools

    async def _fetch_v2(self, tokens: list[str]) -> list[UniswapV2Pool]:
        url = self.chain_config.v2_subgraph_url
        if url is None:
            logger.debug("v2_subgraph_not_configured", chain=self.chain_config.name)
            return []
        records = await self._query(url, V2_POOLS_QUERY, tokens, "pairs")
        return [pool for pool in map(parse_v2_pool, records) if pool is not None]

    async def _fetch_v3(self, tokens: list[str]) -> list[UniswapV3Pool]:
        url = self.chain_config.v3_subgraph_url
        if url is None:
            # get_chain_config() guarantees this for configs it returns
            raise UpstreamError(f"No v3 subgraph for {self.chain_config.name}")
        records = await self._query(url, V3_POOLS_QUERY, tokens, "pools")
        return [pool for pool in map(parse_v3_pool, records) if pool is not None]

    async def _query(
        self, url: str, query: str, tokens: list[str], entity: str
    ) -> list[dict[str, Any]]:
        """Run one GraphQL query and return the entity records."""
        body = {"query": query, "variables": {"tokens": tokens, "first": MAX_POOLS_PER_QUERY}}
        try:
            if self._client is not None:
                response = await self._client.post(url, json=body)
            else:
                async with httpx.AsyncClient(timeout=self.config.http_timeout) as client:
                    response = await client.post(url, json=body)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(
                "subgraph_query_failed",
                chain=self.chain_config.name,
                entity=entity,
                error=str(e),
            )
            raise UpstreamError(f"Subgraph query for {entity} failed: {e}") from e

        if not isinstance(payload, dict):
            raise UpstreamError(f"Subgraph returned a non-object payload for {entity}")
        if payload.get("errors"):
            logger.warning(
                "subgraph_query_errors",
                chain=self.chain_config.name,
                entity=entity,
                errors=payload["errors"],
            )
            raise UpstreamError(f"Subgraph returned errors for {entity}: {payload['errors']}")

        data = payload.get("data") or {}
        if not isinstance(data, dict):
            raise UpstreamError(f"Subgraph returned a non-object data field for {entity}")
        records = data.get(entity)
        if not isinstance(records, list):
            raise UpstreamError(f"Subgraph response missing '{entity}'")
        return records


__all__ = [
    "MAX_POOLS_PER_QUERY",
    "PoolCatalog",
    "filter_v2_pools",
    "filter_v3_pools",
    "sort_pools",
]
