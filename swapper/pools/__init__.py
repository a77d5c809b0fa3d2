"""Pool discovery package.

Provides pool types, subgraph record parsing and the PoolCatalog.
"""

from .catalog import PoolCatalog, filter_v2_pools, filter_v3_pools, sort_pools
from .parsing import parse_v2_pool, parse_v3_pool
from .types import AnyPool, Token, UniswapV2Pool, UniswapV3Pool

__all__ = [
    "AnyPool",
    "PoolCatalog",
    "Token",
    "UniswapV2Pool",
    "UniswapV3Pool",
    "filter_v2_pools",
    "filter_v3_pools",
    "parse_v2_pool",
    "parse_v3_pool",
    "sort_pools",
]
