"""Type definitions for routing module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from swapper.pools import AnyPool, UniswapV3Pool


@dataclass(frozen=True)
class Route:
    """An ordered multi-hop path through pools.

    `path` holds lowercase token addresses, one more than `pools`;
    `pools[i]` connects `path[i]` to `path[i + 1]`.
    """

    path: tuple[str, ...]
    pools: tuple[AnyPool, ...]

    def __post_init__(self) -> None:
        if len(self.path) != len(self.pools) + 1:
            raise ValueError(
                f"Route path has {len(self.path)} tokens for {len(self.pools)} pools"
            )

    @property
    def hops(self) -> int:
        return len(self.pools)

    @property
    def token_in(self) -> str:
        return self.path[0]

    @property
    def token_out(self) -> str:
        return self.path[-1]

    @property
    def total_liquidity(self) -> float:
        """Sum of the pools' USD liquidity."""
        return sum(pool.usd_liquidity for pool in self.pools)

    @property
    def pool_ids(self) -> tuple[str, ...]:
        return tuple(pool.id for pool in self.pools)

    def describe(self) -> dict[str, Any]:
        """JSON-friendly description of the route."""
        pools = []
        for pool in self.pools:
            entry: dict[str, Any] = {"id": pool.id, "kind": pool.kind}
            if isinstance(pool, UniswapV3Pool):
                entry["feeTier"] = pool.fee_tier
            pools.append(entry)
        return {"path": list(self.path), "pools": pools}


@dataclass(frozen=True)
class Quote:
    """Simulated exact-input result for one route."""

    route: Route
    amount_out: int
    gas_estimate: int

    @property
    def is_valid(self) -> bool:
        return self.amount_out > 0

    def to_public(self) -> dict[str, Any]:
        """Result shape handed to the calling layer (amounts as strings)."""
        return {
            "route": self.route.describe(),
            "amountOut": str(self.amount_out),
            "gasEstimate": str(self.gas_estimate),
        }


__all__ = ["Quote", "Route"]
