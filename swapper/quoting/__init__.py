"""On-chain quoting package.

- encoding.py: quoter path and Multicall3 calldata encoding
- multicall.py: EthCaller transport and Multicall client
- quoter.py: BatchQuoter for route quotes
- tokens.py: ERC-20 metadata reader
"""

from .encoding import (
    QUOTE_EXACT_INPUT_SELECTOR,
    V2_FEE_MARKER,
    decode_quote_exact_input,
    encode_path,
    encode_path_hex,
    encode_quote_exact_input,
)
from .multicall import EthCaller, Multicall, Web3EthCaller
from .quoter import BatchQuoter
from .tokens import TokenMetadataReader

__all__ = [
    "BatchQuoter",
    "EthCaller",
    "Multicall",
    "QUOTE_EXACT_INPUT_SELECTOR",
    "TokenMetadataReader",
    "V2_FEE_MARKER",
    "Web3EthCaller",
    "decode_quote_exact_input",
    "encode_path",
    "encode_path_hex",
    "encode_quote_exact_input",
]
