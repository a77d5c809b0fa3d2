"""Pydantic models for quote requests and responses."""

from typing import Any

from pydantic import BaseModel, Field

from swapper.models.types import Address, Uint256


class QuoteRequest(BaseModel):
    """An exact-input quote request."""

    chain_id: str = Field(alias="chainId", pattern=r"^[0-9]+$")
    from_token: Address = Field(alias="fromToken")
    to_token: Address = Field(alias="toToken")
    amount: Uint256 = Field(description="Input amount in the token's smallest unit")

    model_config = {"populate_by_name": True}


class TokenInfo(BaseModel):
    """ERC-20 token metadata; fields are None when the token does not expose them."""

    address: Address
    symbol: str | None = None
    name: str | None = None
    decimals: int | None = Field(default=None, ge=0, le=255)


class QuoteResponse(BaseModel):
    """Quote for the best route found."""

    provider: str = "uniswap"
    chain_id: str = Field(alias="chainId")
    src_token: TokenInfo = Field(alias="srcToken")
    dst_token: TokenInfo = Field(alias="dstToken")
    from_amount: Uint256 = Field(alias="fromAmount")
    dst_amount: Uint256 = Field(alias="dstAmount")
    protocols: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Route taken, as returned by Route.describe()",
    )
    gas: Uint256 | None = None

    model_config = {"populate_by_name": True}
