"""Error hierarchy for the routing and quoting engine.

The HTTP layer maps these to status codes; see swapper.api.main.
"""


class SwapperError(Exception):
    """Base error for routing and quoting operations."""

    pass


class ConfigurationError(SwapperError):
    """Chain is not registered or a required per-chain constant is missing."""

    pass


class UpstreamError(SwapperError):
    """Subgraph or RPC call failed (network, timeout, bad status or payload).

    Retryable by the caller; the engine itself never retries.
    """

    pass


class QuoteDecodeError(SwapperError):
    """A single route's quote result could not be decoded."""

    pass


class NoRouteError(SwapperError):
    """No route was found, or no route produced a valid quote."""

    pass
