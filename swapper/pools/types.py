"""Pool type definitions.

Pools are a tagged union of two variants. Each variant carries only the
fields of its protocol generation, so a v3 field can never be read off a
v2 pool. Use `pool.kind` or isinstance() to dispatch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal, TypeAlias

from swapper.models.types import normalize_address


@dataclass(frozen=True)
class Token:
    """A token as reported by the indexer."""

    address: str
    decimals: int | None = None
    symbol: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", normalize_address(self.address))


class _TwoTokenPool:
    """Token-side helpers shared by both pool variants."""

    token0: Token
    token1: Token

    def contains(self, token: str) -> bool:
        """Check if the token is one of the pool's two tokens."""
        token_norm = normalize_address(token)
        return token_norm in (self.token0.address, self.token1.address)

    def other_token(self, token: str) -> Token:
        """Get the token on the far side of the pool."""
        token_norm = normalize_address(token)
        if token_norm == self.token0.address:
            return self.token1
        elif token_norm == self.token1.address:
            return self.token0
        else:
            raise ValueError(f"Token {token} not in pool")

    @property
    def token_addresses(self) -> tuple[str, str]:
        return self.token0.address, self.token1.address


@dataclass(frozen=True)
class UniswapV2Pool(_TwoTokenPool):
    """A constant-product pool (x * y = k).

    Reserves are human-unit decimals as reported by the indexer.
    """

    id: str
    token0: Token
    token1: Token
    reserve0: Decimal
    reserve1: Decimal
    reserve_usd: float
    kind: Literal["v2"] = field(default="v2", init=False)

    @property
    def usd_liquidity(self) -> float:
        return self.reserve_usd


@dataclass(frozen=True)
class UniswapV3Pool(_TwoTokenPool):
    """A concentrated-liquidity pool.

    `liquidity` is the active in-range liquidity at the current tick.
    `tick` is None for pools the indexer has never seen initialized.
    """

    id: str
    token0: Token
    token1: Token
    fee_tier: int  # Fee in hundredths of a basis point (e.g. 3000 for 0.3%)
    liquidity: int
    tick: int | None
    total_value_locked_usd: float
    kind: Literal["v3"] = field(default="v3", init=False)

    @property
    def usd_liquidity(self) -> float:
        return self.total_value_locked_usd


# Union type for all pool types
AnyPool: TypeAlias = UniswapV2Pool | UniswapV3Pool

__all__ = ["AnyPool", "Token", "UniswapV2Pool", "UniswapV3Pool"]
