"""capability-bridge: Market-data and swap tools as agent capabilities.

This package adapts third-party tool providers (DexScreener, CoinGecko,
Allora, Jupiter) into uniform capabilities, and serves an agent host that
offers them to a model through a REST API and SSE streaming interface.
"""

__version__ = "0.1.0"

from capability_bridge.app import create_app  # noqa: E402

__all__ = ["create_app", "__version__"]
