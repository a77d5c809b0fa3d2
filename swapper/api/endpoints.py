"""API endpoints for the swap router."""

from collections.abc import Callable

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from swapper.models.quote import QuoteRequest, QuoteResponse
from swapper.router import SwapRouter

logger = structlog.get_logger()

router = APIRouter()

RouterFactory = Callable[[str], SwapRouter]


def get_router_factory() -> RouterFactory:
    """Dependency provider building a SwapRouter per chain id.

    Override this in tests to inject a fake router:
        app.dependency_overrides[get_router_factory] = lambda: lambda chain_id: fake_router
    """
    return SwapRouter.for_chain


@router.get("/quote", response_model_exclude_none=True)
async def quote(
    chain_id: str = Query(alias="chainId"),
    from_token: str = Query(alias="fromToken"),
    to_token: str = Query(alias="toToken"),
    amount: str = Query(),
    router_factory: RouterFactory = Depends(get_router_factory),
) -> QuoteResponse:
    """Quote an exact-input swap through the best available route.

    Error Handling:
        - Malformed parameters: 400
        - Unsupported or misconfigured chain: 400 (ConfigurationError)
        - No route / no valid quote: 404 (NoRouteError)
        - Subgraph or RPC failure: 502 (UpstreamError)
    """
    try:
        request = QuoteRequest(chainId=chain_id, fromToken=from_token, toToken=to_token, amount=amount)
    except ValidationError as e:
        fields = sorted({str(error["loc"][0]) for error in e.errors() if error["loc"]})
        raise HTTPException(status_code=400, detail=f"Invalid parameters: {', '.join(fields)}") from e

    logger.info(
        "received_quote_request",
        chain_id=request.chain_id,
        from_token=request.from_token,
        to_token=request.to_token,
        amount=request.amount,
    )

    swap_router = router_factory(request.chain_id)
    return await swap_router.get_quote(request)
