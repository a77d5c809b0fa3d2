"""Best-quote selection.

The winner is found by a left fold over the valid quotes in route order.
Outputs that differ by at least 0.1% are decided on amount alone; inside
that band, tie-breaks on liquidity depth, gas and hop count apply.
"""

from __future__ import annotations

import math

import structlog

from swapper.errors import NoRouteError

from .types import Quote, Route

logger = structlog.get_logger()

# Outputs closer than this fraction of the best output count as tied
OUTPUT_TIE_THRESHOLD_NUM = 1
OUTPUT_TIE_THRESHOLD_DENOM = 1000

# Tie-break factors
LIQUIDITY_SCORE_ADVANTAGE = 1.2  # > 20% deeper liquidity wins
GAS_RATIO_PERCENT = 130  # see tie-break (b) in _prefer_current
FEWER_HOPS_GAS_PERCENT = 95  # fewer hops wins if gas <= 95% of best's


def liquidity_score(route: Route) -> float:
    """Sum of log10(USD liquidity) over the route's pools.

    Pools with non-positive liquidity contribute nothing.
    """
    return sum(math.log10(pool.usd_liquidity) for pool in route.pools if pool.usd_liquidity > 0)


def _outputs_tied(current: Quote, best: Quote) -> bool:
    """Check |current - best| / best < 0.1%, in exact integer arithmetic."""
    diff = abs(current.amount_out - best.amount_out)
    return diff * OUTPUT_TIE_THRESHOLD_DENOM < best.amount_out * OUTPUT_TIE_THRESHOLD_NUM


def _prefer_current(current: Quote, best: Quote) -> bool:
    """Pairwise comparison step of the selection fold."""
    if not _outputs_tied(current, best):
        return current.amount_out > best.amount_out

    # (a) materially deeper liquidity
    if liquidity_score(current.route) > liquidity_score(best.route) * LIQUIDITY_SCORE_ADVANTAGE:
        return True

    # (b) kept as observed upstream: a route whose gas exceeds the best's by
    # more than 30% wins. This favours the more expensive route.
    if current.gas_estimate * 100 > best.gas_estimate * GAS_RATIO_PERCENT:
        return True

    # (c) simpler route at no more than 95% of the gas
    if (
        current.route.hops < best.route.hops
        and current.gas_estimate * 100 <= best.gas_estimate * FEWER_HOPS_GAS_PERCENT
    ):
        return True

    return False


def select_best_quote(quotes: list[Quote]) -> Quote:
    """Pick the winning quote.

    Invalid quotes (amount_out <= 0) are ignored. The fold is deterministic
    for a given input order.

    Raises:
        NoRouteError: If no valid quote remains
    """
    valid = [quote for quote in quotes if quote.is_valid]
    if not valid:
        raise NoRouteError("No valid quotes found")

    best = valid[0]
    for current in valid[1:]:
        if _prefer_current(current, best):
            best = current

    logger.debug(
        "best_route_selected",
        candidates=len(valid),
        hops=best.route.hops,
        amount_out=best.amount_out,
        gas_estimate=best.gas_estimate,
    )
    return best


__all__ = ["liquidity_score", "select_best_quote"]
