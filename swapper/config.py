"""Router configuration."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class RouterConfig:
    """Centralized configuration for candidate selection and route search.

    Liquidity multipliers are applied to the chain's min_liquidity_usd.

    Attributes:
        max_hops: Maximum pools per route (default: 4)
        direct_swap_cap: Pools containing both tokens (default: 2)
        base_token_cap: Pools pairing an endpoint token with a base token,
            per endpoint (default: 5)
        top_by_tvl_cap: Highest-liquidity pools overall (default: 5)
        tvl_using_token_cap: Highest-liquidity pools per endpoint token (default: 3)
        second_hop_cap: Follow-up pools per first-hop pool (default: 2)
        v3_liquidity_multiplier: Stricter floor for concentrated liquidity (default: 2)
        top_by_tvl_multiplier: Floor for the top-by-TVL bucket (default: 3)
        http_timeout: Seconds before a subgraph or RPC request fails
    """

    max_hops: int = 4

    # Bucket caps
    direct_swap_cap: int = 2
    base_token_cap: int = 5
    top_by_tvl_cap: int = 5
    tvl_using_token_cap: int = 3
    second_hop_cap: int = 2

    # Liquidity floors (multiples of the chain minimum)
    v3_liquidity_multiplier: float = 2.0
    top_by_tvl_multiplier: float = 3.0

    http_timeout: float = float(os.environ.get("SWAPPER_HTTP_TIMEOUT", "10"))


# Default configuration instance
DEFAULT_ROUTER_CONFIG = RouterConfig()
