"""Read-only wallet tools.

Every plugin session exposes the wallet's core tools next to the plugin
tools. The bridge never signs, so only chain and address lookups exist.
"""

from capability_bridge.adapter.types import Tool
from capability_bridge.providers.base import EmptyParameters


class WalletInfoProvider:
    """Wallet core tools for the configured chain.

    Attributes:
        chain: Chain family, "evm" or "solana"
        network: Network name, e.g. "mainnet" or "devnet"
        address: Wallet address, if one is configured
    """

    name = "wallet"

    def __init__(self, chain: str, network: str, address: str | None = None) -> None:
        self.chain = chain
        self.network = network
        self.address = address

    async def list_tools(self) -> list[Tool]:
        return [
            Tool(
                name="get_chain",
                description="Get the chain and network of the connected wallet.",
                parameters=EmptyParameters.model_json_schema(),
                execute=self.get_chain,
            ),
            Tool(
                name="get_address",
                description="Get the address of the connected wallet.",
                parameters=EmptyParameters.model_json_schema(),
                execute=self.get_address,
            ),
        ]

    async def get_chain(self, args: dict) -> dict:
        return {"type": self.chain, "network": self.network}

    async def get_address(self, args: dict) -> str:
        if not self.address:
            raise ValueError("No wallet address is configured")
        return self.address

    async def close(self) -> None:
        pass
