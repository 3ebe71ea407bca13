"""DexScreener pair lookups."""

import httpx
from pydantic import BaseModel, Field

from capability_bridge.adapter.types import Tool
from capability_bridge.providers.base import HttpToolProvider

DEXSCREENER_API_URL = "https://api.dexscreener.com"
MAX_TOKEN_ADDRESSES = 30


class SearchPairsParameters(BaseModel):
    query: str = Field(
        description="Search query, e.g. a pair like 'SOL/USDC' or a token name"
    )


class GetPairsByChainAndPairParameters(BaseModel):
    chain_id: str = Field(description="Chain identifier, e.g. 'solana' or 'ethereum'")
    pair_id: str = Field(description="Pair address on that chain")


class GetTokenPairsParameters(BaseModel):
    token_addresses: list[str] = Field(
        min_length=1,
        max_length=MAX_TOKEN_ADDRESSES,
        description="Token addresses to look up (at most 30)",
    )


class DexScreenerProvider(HttpToolProvider):
    """Tools for the public DexScreener API. No API key is required."""

    name = "dexscreener"
    display_name = "DexScreener"

    def __init__(
        self,
        base_url: str = DEXSCREENER_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url=base_url, transport=transport)

    async def list_tools(self) -> list[Tool]:
        return [
            self.tool(
                "search_pairs",
                "Search for DEX pairs matching a query (e.g. 'SOL/USDC'). "
                "Returns pairs with price, liquidity, volume and token addresses.",
                SearchPairsParameters,
                self.search_pairs,
            ),
            self.tool(
                "get_pairs_by_chain_and_pair_id",
                "Get pair information by chain ID and pair address.",
                GetPairsByChainAndPairParameters,
                self.get_pairs_by_chain_and_pair_id,
            ),
            self.tool(
                "get_token_pairs_by_token_address",
                "Get the pairs associated with one or more token addresses.",
                GetTokenPairsParameters,
                self.get_token_pairs_by_token_address,
            ),
        ]

    async def search_pairs(self, params: SearchPairsParameters) -> dict:
        return await self.get_json("/latest/dex/search", params={"q": params.query})

    async def get_pairs_by_chain_and_pair_id(
        self, params: GetPairsByChainAndPairParameters
    ) -> dict:
        return await self.get_json(
            f"/latest/dex/pairs/{params.chain_id}/{params.pair_id}"
        )

    async def get_token_pairs_by_token_address(
        self, params: GetTokenPairsParameters
    ) -> dict:
        addresses = ",".join(params.token_addresses)
        return await self.get_json(f"/latest/dex/tokens/{addresses}")
