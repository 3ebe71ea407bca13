"""Tool providers.

Each provider implements the ToolProvider interface: list_tools() returns
provider-qualified Tool records, close() releases its HTTP client.
"""

from capability_bridge.providers.allora import AlloraProvider
from capability_bridge.providers.base import HttpToolProvider, ProviderRequestError
from capability_bridge.providers.coingecko import CoinGeckoProvider
from capability_bridge.providers.dexscreener import DexScreenerProvider
from capability_bridge.providers.jupiter import JupiterProvider
from capability_bridge.providers.wallet import WalletInfoProvider

__all__ = [
    "HttpToolProvider",
    "ProviderRequestError",
    "AlloraProvider",
    "CoinGeckoProvider",
    "DexScreenerProvider",
    "JupiterProvider",
    "WalletInfoProvider",
]
