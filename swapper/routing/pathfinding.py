"""Route enumeration over the candidate pool graph.

RouteBuilder runs a depth-bounded depth-first search from the input token to
the output token. The set of pools already used is carried down each branch
as a frozenset, so sibling branches never see each other's state.
"""

from __future__ import annotations

from collections.abc import Iterator

import structlog

from swapper.config import DEFAULT_ROUTER_CONFIG
from swapper.models.types import normalize_address
from swapper.pools import AnyPool, sort_pools

from .types import Route

logger = structlog.get_logger()


class PoolGraph:
    """Adjacency index from token to the pools that contain it.

    Each token's pool list keeps the order of the pools passed in.
    """

    def __init__(self, pools: list[AnyPool]) -> None:
        self._adjacency: dict[str, list[AnyPool]] = {}
        seen: set[str] = set()
        for pool in pools:
            if pool.id in seen:
                continue
            seen.add(pool.id)
            for token in pool.token_addresses:
                self._adjacency.setdefault(token, []).append(pool)

    def pools_for(self, token: str) -> list[AnyPool]:
        return self._adjacency.get(normalize_address(token), [])

    def has_token(self, token: str) -> bool:
        return normalize_address(token) in self._adjacency

    @property
    def token_count(self) -> int:
        return len(self._adjacency)


class RouteBuilder:
    """Enumerates routes between two tokens through a set of pools.

    Usage:
        builder = RouteBuilder(candidates.all(), min_liquidity_usd=10_000)
        routes = builder.find_routes(token_in, token_out, max_hops=4)

    Args:
        pools: Candidate pools (any order; they are re-sorted by liquidity)
        min_liquidity_usd: Chain minimum, used for the v3 fee-tier tie rule
    """

    def __init__(self, pools: list[AnyPool], min_liquidity_usd: float = 0.0) -> None:
        self._graph = PoolGraph(sort_pools(pools, min_liquidity_usd))

    @property
    def graph(self) -> PoolGraph:
        return self._graph

    def find_routes(
        self,
        token_in: str,
        token_out: str,
        max_hops: int = DEFAULT_ROUTER_CONFIG.max_hops,
    ) -> list[Route]:
        """Find every route from token_in to token_out within max_hops pools.

        Higher-liquidity pools are explored first at each step. The result is
        sorted by total route liquidity, descending; ties keep discovery order.

        Returns:
            Routes, or an empty list if none exist (or the tokens are equal)
        """
        token_in_norm = normalize_address(token_in)
        token_out_norm = normalize_address(token_out)

        if token_in_norm == token_out_norm or max_hops < 1:
            return []
        if not self._graph.has_token(token_in_norm) or not self._graph.has_token(token_out_norm):
            return []

        routes = list(
            self._search(
                current=token_in_norm,
                token_out=token_out_norm,
                path=(token_in_norm,),
                pools=(),
                used=frozenset(),
                max_hops=max_hops,
            )
        )
        routes.sort(key=lambda route: route.total_liquidity, reverse=True)

        logger.debug(
            "routes_built",
            token_in=token_in_norm[-8:],
            token_out=token_out_norm[-8:],
            max_hops=max_hops,
            count=len(routes),
        )
        return routes

    def _search(
        self,
        current: str,
        token_out: str,
        path: tuple[str, ...],
        pools: tuple[AnyPool, ...],
        used: frozenset[str],
        max_hops: int,
    ) -> Iterator[Route]:
        last_hop = len(pools) + 1 == max_hops
        for pool in self._graph.pools_for(current):
            if pool.id in used:
                continue
            if last_hop and not pool.contains(token_out):
                continue

            next_token = pool.other_token(current).address
            next_path = path + (next_token,)
            next_pools = pools + (pool,)

            if next_token == token_out:
                yield Route(path=next_path, pools=next_pools)
            elif not last_hop:
                yield from self._search(
                    current=next_token,
                    token_out=token_out,
                    path=next_path,
                    pools=next_pools,
                    used=used | {pool.id},
                    max_hops=max_hops,
                )


def build_routes(
    pools: list[AnyPool],
    token_in: str,
    token_out: str,
    max_hops: int = DEFAULT_ROUTER_CONFIG.max_hops,
    min_liquidity_usd: float = 0.0,
) -> list[Route]:
    """Convenience wrapper: build a RouteBuilder and find routes."""
    return RouteBuilder(pools, min_liquidity_usd).find_routes(token_in, token_out, max_hops)


__all__ = ["PoolGraph", "RouteBuilder", "build_routes"]
