"""Route discovery and selection.

Module structure:
- types.py: Route and Quote dataclasses
- candidates.py: CandidatePools buckets and select_candidates
- pathfinding.py: PoolGraph and RouteBuilder for route enumeration
- selection.py: liquidity_score and select_best_quote
"""

from swapper.routing.candidates import CandidatePools, select_candidates
from swapper.routing.pathfinding import PoolGraph, RouteBuilder, build_routes
from swapper.routing.selection import liquidity_score, select_best_quote
from swapper.routing.types import Quote, Route

__all__ = [
    "CandidatePools",
    "PoolGraph",
    "Quote",
    "Route",
    "RouteBuilder",
    "build_routes",
    "liquidity_score",
    "select_best_quote",
    "select_candidates",
]
