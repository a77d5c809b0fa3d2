"""Multi-chain swap routing and quoting engine."""

from swapper.errors import ConfigurationError, NoRouteError, SwapperError, UpstreamError
from swapper.router import SwapRouter

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "NoRouteError",
    "SwapRouter",
    "SwapperError",
    "UpstreamError",
    "__version__",
]
