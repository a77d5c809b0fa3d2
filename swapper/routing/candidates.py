"""Candidate pool selection.

Reduces the catalog's pool list to a bounded working set before route
search. Pools are assigned to eight priority buckets in a fixed order; a
pool lands in the first bucket it qualifies for and is skipped by every
later bucket. Caps keep the search space small while a liquid direct pool,
if one exists, is always considered.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, fields

import structlog

from swapper.chains import ChainConfig
from swapper.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from swapper.models.types import normalize_address
from swapper.pools import AnyPool

logger = structlog.get_logger()


@dataclass
class CandidatePools:
    """Pools selected for one request, by bucket.

    Field order is the bucket priority order.
    """

    direct_swap: list[AnyPool] = field(default_factory=list)
    base_with_token_in: list[AnyPool] = field(default_factory=list)
    base_with_token_out: list[AnyPool] = field(default_factory=list)
    top_by_tvl: list[AnyPool] = field(default_factory=list)
    tvl_using_token_in: list[AnyPool] = field(default_factory=list)
    tvl_using_token_out: list[AnyPool] = field(default_factory=list)
    second_hop_from_token_in: list[AnyPool] = field(default_factory=list)
    second_hop_to_token_out: list[AnyPool] = field(default_factory=list)

    def buckets(self) -> list[tuple[str, list[AnyPool]]]:
        """(name, pools) pairs in priority order."""
        return [(f.name, getattr(self, f.name)) for f in fields(self)]

    def all(self) -> list[AnyPool]:
        """Union of all buckets, in bucket order."""
        return [pool for _, pools in self.buckets() for pool in pools]

    def summary(self) -> dict[str, int]:
        return {name: len(pools) for name, pools in self.buckets()}


class _BucketFiller:
    """Tracks pool ids already assigned so each pool is used once."""

    def __init__(self, pools: list[AnyPool]) -> None:
        self.pools = pools
        self.used: set[str] = set()

    def take(
        self,
        predicate: Callable[[AnyPool], bool],
        limit: int,
    ) -> list[AnyPool]:
        selected: list[AnyPool] = []
        if limit <= 0:
            return selected
        for pool in self.pools:
            if pool.id in self.used or not predicate(pool):
                continue
            selected.append(pool)
            self.used.add(pool.id)
            if len(selected) >= limit:
                break
        return selected

    def second_hops(self, first_hops: list[AnyPool], from_token: str, limit: int) -> list[AnyPool]:
        """For each first-hop pool, take pools touching its far-side token."""
        selected: list[AnyPool] = []
        for first_hop in first_hops:
            far_token = first_hop.other_token(from_token).address
            selected.extend(self.take(lambda p, t=far_token: p.contains(t), limit))
        return selected


def select_candidates(
    pools: list[AnyPool],
    token_in: str,
    token_out: str,
    chain_config: ChainConfig,
    config: RouterConfig = DEFAULT_ROUTER_CONFIG,
) -> CandidatePools:
    """Assign pools to priority buckets.

    Args:
        pools: Filtered pools, sorted as by sort_pools()
        token_in: Input token address (any case)
        token_out: Output token address (any case)
        chain_config: Chain supplying base tokens and the liquidity minimum
        config: Bucket caps and multipliers

    Returns:
        CandidatePools; every bucket preserves the input order
    """
    token_in = normalize_address(token_in)
    token_out = normalize_address(token_out)
    base_tokens = set(chain_config.base_tokens)
    tvl_floor = chain_config.min_liquidity_usd * config.top_by_tvl_multiplier

    def pairs_with_base(token: str) -> Callable[[AnyPool], bool]:
        def predicate(pool: AnyPool) -> bool:
            return pool.contains(token) and pool.other_token(token).address in base_tokens

        return predicate

    filler = _BucketFiller(pools)
    candidates = CandidatePools()

    candidates.direct_swap = filler.take(
        lambda p: p.contains(token_in) and p.contains(token_out), config.direct_swap_cap
    )
    candidates.base_with_token_in = filler.take(pairs_with_base(token_in), config.base_token_cap)
    candidates.base_with_token_out = filler.take(pairs_with_base(token_out), config.base_token_cap)
    candidates.top_by_tvl = filler.take(
        lambda p: p.usd_liquidity >= tvl_floor, config.top_by_tvl_cap
    )
    candidates.tvl_using_token_in = filler.take(
        lambda p: p.contains(token_in), config.tvl_using_token_cap
    )
    candidates.tvl_using_token_out = filler.take(
        lambda p: p.contains(token_out), config.tvl_using_token_cap
    )
    candidates.second_hop_from_token_in = filler.second_hops(
        candidates.tvl_using_token_in, token_in, config.second_hop_cap
    )
    candidates.second_hop_to_token_out = filler.second_hops(
        candidates.tvl_using_token_out, token_out, config.second_hop_cap
    )

    logger.debug(
        "candidate_pools_selected",
        token_in=token_in[-8:],
        token_out=token_out[-8:],
        **candidates.summary(),
    )
    return candidates


__all__ = ["CandidatePools", "select_candidates"]
