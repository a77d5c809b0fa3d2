"""Chain registry: per-chain liquidity thresholds, base tokens and endpoints.

Supported chains form a closed set (the Chain enum). Every lookup goes
through get_chain_config(), which applies environment overrides and raises
ConfigurationError for unknown chains or missing required values.

Environment overrides (all optional):
- SWAPPER_RPC_URL_<CHAIN_ID>: JSON-RPC endpoint
- SWAPPER_V2_SUBGRAPH_URL_<CHAIN_ID> / SWAPPER_V3_SUBGRAPH_URL_<CHAIN_ID>
- SWAPPER_QUOTER_ADDRESS_<CHAIN_ID>: mixed-route quoter contract
- SWAPPER_SUBGRAPH_API_KEY: substituted into The Graph gateway URLs
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum

from swapper.errors import ConfigurationError
from swapper.models.types import is_valid_address, normalize_address

# Multicall3 is deployed at the same address on every supported chain
MULTICALL3_ADDRESS = "0xca11bde05977b3631167028862be2a173976ca11"

# The Graph decentralized network gateway
GRAPH_GATEWAY_URL = "https://gateway.thegraph.com/api/{api_key}/subgraphs/id/{subgraph_id}"


class Chain(int, Enum):
    """EVM chains the router can quote on."""

    ETHEREUM = 1
    OPTIMISM = 10
    BSC = 56
    POLYGON = 137
    BASE = 8453
    ARBITRUM = 42161
    AVALANCHE = 43114


def _validate_token_address(name: str, address: str) -> str:
    """Validate and return a lowercase token address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return normalize_address(address)


def _gateway(subgraph_id: str) -> str:
    return GRAPH_GATEWAY_URL.replace("{subgraph_id}", subgraph_id)


@dataclass(frozen=True)
class ChainConfig:
    """Read-only configuration for one chain.

    Attributes:
        chain: Chain this record belongs to
        min_liquidity_usd: Minimum USD liquidity for a pool to be considered
        base_tokens: Canonical high-liquidity tokens used to bridge routes
        rpc_url: JSON-RPC endpoint for eth_call
        v3_subgraph_url: Concentrated-liquidity pool indexer
        v2_subgraph_url: Constant-product pool indexer (None if not indexed)
        quoter_address: Mixed-route quoter accepting v2/v3 encoded paths
        multicall_address: Multicall3 aggregator
    """

    chain: Chain
    min_liquidity_usd: float
    base_tokens: tuple[str, ...]
    rpc_url: str | None
    v3_subgraph_url: str | None
    v2_subgraph_url: str | None = None
    quoter_address: str | None = None
    multicall_address: str = MULTICALL3_ADDRESS

    @property
    def chain_id(self) -> int:
        return self.chain.value

    @property
    def name(self) -> str:
        return self.chain.name.lower()

    def is_base_token(self, token: str) -> bool:
        return normalize_address(token) in self.base_tokens


CHAIN_CONFIGS: dict[Chain, ChainConfig] = {
    Chain.ETHEREUM: ChainConfig(
        chain=Chain.ETHEREUM,
        min_liquidity_usd=10_000.0,
        base_tokens=(
            _validate_token_address("WETH", "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"),
            _validate_token_address("USDC", "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"),
            _validate_token_address("USDT", "0xdac17f958d2ee523a2206206994597c13d831ec7"),
            _validate_token_address("DAI", "0x6b175474e89094c44da98b954eedeac495271d0f"),
            _validate_token_address("WBTC", "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599"),
        ),
        rpc_url="https://eth.llamarpc.com",
        v3_subgraph_url=_gateway("5zvR82QoaXYFyDEKLZ9t6v9adgnptxYpKpSbxtgVENFV"),
        v2_subgraph_url=_gateway("A3Np3RQbaBA6oKJgiwDJeo5T3zrYfGHPWFYayMwtNDum"),
        quoter_address="0x84e44095eebfec7793cd7d5b57b7e401d7f1ca2e",
    ),
    Chain.OPTIMISM: ChainConfig(
        chain=Chain.OPTIMISM,
        min_liquidity_usd=5_000.0,
        base_tokens=(
            _validate_token_address("WETH", "0x4200000000000000000000000000000000000006"),
            _validate_token_address("USDC", "0x0b2c639c533813f4aa9d7837caf62653d097ff85"),
            _validate_token_address("OP", "0x4200000000000000000000000000000000000042"),
        ),
        rpc_url="https://mainnet.optimism.io",
        v3_subgraph_url=None,
    ),
    Chain.BSC: ChainConfig(
        chain=Chain.BSC,
        min_liquidity_usd=5_000.0,
        base_tokens=(
            _validate_token_address("WBNB", "0xbb4cdb9cbd36b01bd1cbaebf2de08d9173bc095c"),
            _validate_token_address("USDT", "0x55d398326f99059ff775485246999027b3197955"),
        ),
        rpc_url="https://bsc-dataseed.binance.org",
        v3_subgraph_url=None,
    ),
    Chain.POLYGON: ChainConfig(
        chain=Chain.POLYGON,
        min_liquidity_usd=5_000.0,
        base_tokens=(
            _validate_token_address("WMATIC", "0x0d500b1d8e8ef31e21c99d1db9a6444d3adf1270"),
            _validate_token_address("WETH", "0x7ceb23fd6bc0add59e62ac25578270cff1b9f619"),
            _validate_token_address("USDC.e", "0x2791bca1f2de4661ed88a30c99a7a9449aa84174"),
            _validate_token_address("USDT", "0xc2132d05d31c914a87c6611c10748aeb04b58e8f"),
            _validate_token_address("DAI", "0x8f3cf7ad23cd3cadbd9735aff958023239c6a063"),
        ),
        rpc_url="https://polygon-rpc.com",
        v3_subgraph_url=None,
    ),
    Chain.BASE: ChainConfig(
        chain=Chain.BASE,
        min_liquidity_usd=5_000.0,
        base_tokens=(
            _validate_token_address("WETH", "0x4200000000000000000000000000000000000006"),
            _validate_token_address("USDC", "0x833589fcd6edb6e08f4c7c32d4f71b54bda02913"),
        ),
        rpc_url="https://mainnet.base.org",
        v3_subgraph_url=None,
    ),
    Chain.ARBITRUM: ChainConfig(
        chain=Chain.ARBITRUM,
        min_liquidity_usd=5_000.0,
        base_tokens=(
            _validate_token_address("WETH", "0x82af49447d8a07e3bd95bd0d56f35241523fbab1"),
            _validate_token_address("USDC", "0xaf88d065e77c8cc2239327c5edb3a432268e5831"),
            _validate_token_address("USDT", "0xfd086bc7cd5c481dcc9c85ebe478a1c0b69fcbb9"),
        ),
        rpc_url="https://arb1.arbitrum.io/rpc",
        v3_subgraph_url=None,
    ),
    Chain.AVALANCHE: ChainConfig(
        chain=Chain.AVALANCHE,
        min_liquidity_usd=5_000.0,
        base_tokens=(
            _validate_token_address("WAVAX", "0xb31f66aa3c1e785363f0875a1b74e27b85fd66c7"),
            _validate_token_address("USDC", "0xb97ef9ef8734c71904d8002f8b6bc66dd9c48a6e"),
        ),
        rpc_url="https://api.avax.network/ext/bc/C/rpc",
        v3_subgraph_url=None,
    ),
}


def resolve_chain(chain_id: int | str) -> Chain:
    """Map a chain id (int or decimal string) to a supported Chain.

    Raises:
        ConfigurationError: If the chain id is not registered
    """
    try:
        return Chain(int(chain_id))
    except (TypeError, ValueError) as err:
        raise ConfigurationError(f"Unsupported chain ID: {chain_id}") from err


def _env(prefix: str, chain: Chain) -> str | None:
    value = os.environ.get(f"{prefix}_{chain.value}")
    return value or None


def _with_api_key(url: str | None, chain: Chain) -> str | None:
    if url is None or "{api_key}" not in url:
        return url
    api_key = os.environ.get("SWAPPER_SUBGRAPH_API_KEY")
    if not api_key:
        raise ConfigurationError(
            f"SWAPPER_SUBGRAPH_API_KEY is required for the {chain.name.lower()} subgraph"
        )
    return url.replace("{api_key}", api_key)


def get_chain_config(chain_id: int | str) -> ChainConfig:
    """Look up the configuration for a chain, applying environment overrides.

    Args:
        chain_id: Numeric chain id, as int or decimal string

    Returns:
        Fully populated ChainConfig

    Raises:
        ConfigurationError: If the chain is unknown or a required value
            (RPC URL, v3 subgraph URL, quoter address) is missing
    """
    chain = resolve_chain(chain_id)
    config = CHAIN_CONFIGS[chain]

    config = replace(
        config,
        rpc_url=_env("SWAPPER_RPC_URL", chain) or config.rpc_url,
        v2_subgraph_url=_env("SWAPPER_V2_SUBGRAPH_URL", chain) or config.v2_subgraph_url,
        v3_subgraph_url=_env("SWAPPER_V3_SUBGRAPH_URL", chain) or config.v3_subgraph_url,
        quoter_address=_env("SWAPPER_QUOTER_ADDRESS", chain) or config.quoter_address,
    )

    missing = [
        name
        for name in ("rpc_url", "v3_subgraph_url", "quoter_address")
        if not getattr(config, name)
    ]
    if missing:
        raise ConfigurationError(
            f"Chain {config.name} ({chain.value}) is missing required settings: "
            + ", ".join(missing)
        )
    if config.quoter_address and not is_valid_address(config.quoter_address):
        raise ConfigurationError(f"Invalid quoter address for {config.name}: {config.quoter_address}")

    return replace(
        config,
        v2_subgraph_url=_with_api_key(config.v2_subgraph_url, chain),
        v3_subgraph_url=_with_api_key(config.v3_subgraph_url, chain),
        quoter_address=normalize_address(config.quoter_address),  # type: ignore[arg-type]
    )


__all__ = [
    "CHAIN_CONFIGS",
    "Chain",
    "ChainConfig",
    "GRAPH_GATEWAY_URL",
    "MULTICALL3_ADDRESS",
    "get_chain_config",
    "resolve_chain",
]
