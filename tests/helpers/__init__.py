"""Test helpers module for shared test utilities.

- constants: Token and contract addresses
- factories: Pool, route and chain config factories
- fakes: Fake eth_call transport for multicall batches
"""

from tests.helpers.constants import (
    DAI,
    LINK,
    MKR,
    MULTICALL,
    QUOTER,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    TOKEN_D,
    TOKEN_E,
    UNI,
    USDC,
    USDT,
    WBTC,
    WETH,
)
from tests.helpers.factories import (
    make_chain_config,
    make_route,
    make_v2_pool,
    make_v3_pool,
    v2_record,
    v3_record,
)
from tests.helpers.fakes import (
    FakeEthCaller,
    decode_quote_call,
    encode_quote_result,
    subgraph_transport,
)

__all__ = [
    "DAI",
    "LINK",
    "MKR",
    "MULTICALL",
    "QUOTER",
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "TOKEN_D",
    "TOKEN_E",
    "UNI",
    "USDC",
    "USDT",
    "WBTC",
    "WETH",
    "FakeEthCaller",
    "decode_quote_call",
    "encode_quote_result",
    "subgraph_transport",
    "make_chain_config",
    "make_route",
    "make_v2_pool",
    "make_v3_pool",
    "v2_record",
    "v3_record",
]
