"""Parsing functions for pool records returned by the subgraph indexers."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

import structlog

from swapper.models.types import is_valid_address

from .types import Token, UniswapV2Pool, UniswapV3Pool

logger = structlog.get_logger()

# Fee tiers are encoded as uint24 in quoter paths
MAX_FEE_TIER = 2**24 - 1


class _RecordError(ValueError):
    pass


def parse_v2_pool(record: Any) -> UniswapV2Pool | None:
    """Parse a constant-product pool from a subgraph `pairs` record.

    Missing reserves parse as zero so the liquidity filter can reject them.

    Returns:
        UniswapV2Pool, or None if the record is malformed
    """
    if not isinstance(record, dict):
        logger.debug("v2_pool_parse_failed", error="record is not an object")
        return None
    try:
        return UniswapV2Pool(
            id=_parse_id(record),
            token0=_parse_token(record.get("token0")),
            token1=_parse_token(record.get("token1")),
            reserve0=_parse_decimal(record.get("reserve0")),
            reserve1=_parse_decimal(record.get("reserve1")),
            reserve_usd=float(_parse_decimal(record.get("reserveUSD"))),
        )
    except _RecordError as e:
        logger.debug("v2_pool_parse_failed", pool_id=record.get("id"), error=str(e))
        return None


def parse_v3_pool(record: Any) -> UniswapV3Pool | None:
    """Parse a concentrated-liquidity pool from a subgraph `pools` record.

    A null tick is kept as None: it marks an uninitialized pool, which the
    catalog filters out.

    Returns:
        UniswapV3Pool, or None if the record is malformed
    """
    if not isinstance(record, dict):
        logger.debug("v3_pool_parse_failed", error="record is not an object")
        return None
    try:
        tick_raw = record.get("tick")
        return UniswapV3Pool(
            id=_parse_id(record),
            token0=_parse_token(record.get("token0")),
            token1=_parse_token(record.get("token1")),
            fee_tier=_parse_fee_tier(record.get("feeTier")),
            liquidity=_parse_int(record.get("liquidity") or 0, field="liquidity"),
            tick=None if tick_raw is None else _parse_int(tick_raw, field="tick"),
            total_value_locked_usd=float(_parse_decimal(record.get("totalValueLockedUSD"))),
        )
    except _RecordError as e:
        logger.debug("v3_pool_parse_failed", pool_id=record.get("id"), error=str(e))
        return None


def _parse_id(record: dict[str, Any]) -> str:
    pool_id = record.get("id")
    if not isinstance(pool_id, str) or not pool_id:
        raise _RecordError("missing pool id")
    return pool_id.lower()


def _parse_token(raw: Any) -> Token:
    if not isinstance(raw, dict):
        raise _RecordError("missing token")
    address = raw.get("id")
    if not isinstance(address, str) or not is_valid_address(address):
        raise _RecordError(f"invalid token address: {address!r}")

    decimals = raw.get("decimals")
    try:
        decimals = int(decimals) if decimals is not None else None
    except (ValueError, TypeError):
        decimals = None

    return Token(address=address, decimals=decimals, symbol=raw.get("symbol"))


def _parse_decimal(value: Any) -> Decimal:
    """Parse a BigDecimal field; None parses as zero."""
    if value is None:
        return Decimal(0)
    try:
        result = Decimal(str(value))
    except InvalidOperation as err:
        raise _RecordError(f"invalid decimal: {value!r}") from err
    if not result.is_finite():
        raise _RecordError(f"non-finite decimal: {value!r}")
    return result


def _parse_fee_tier(value: Any) -> int:
    fee_tier = _parse_int(value, field="feeTier")
    if not 0 <= fee_tier <= MAX_FEE_TIER:
        raise _RecordError(f"feeTier out of range: {fee_tier}")
    return fee_tier


def _parse_int(value: Any, *, field: str) -> int:
    if value is None:
        raise _RecordError(f"missing {field}")
    try:
        return int(value)
    except (ValueError, TypeError) as err:
        raise _RecordError(f"invalid {field}: {value!r}") from err


__all__ = ["parse_v2_pool", "parse_v3_pool"]
