"""Jupiter swap quoting on Solana.

The swap tool only builds the serialized swap transaction for the caller's
public key. It never signs or submits anything.
"""

import logging
from typing import Any, Literal

import httpx
from pydantic import BaseModel, Field

from capability_bridge.adapter.types import Tool
from capability_bridge.providers.base import HttpToolProvider

logger = logging.getLogger(__name__)

JUPITER_API_URL = "https://quote-api.jup.ag/v6"


class GetQuoteParameters(BaseModel):
    inputMint: str = Field(description="Mint address of the token to sell")
    outputMint: str = Field(description="Mint address of the token to buy")
    amount: int = Field(
        gt=0, description="Amount to swap in the input token's smallest unit"
    )
    slippageBps: int = Field(default=50, ge=0, le=10000)
    swapMode: Literal["ExactIn", "ExactOut"] = "ExactIn"
    onlyDirectRoutes: bool = False


class SwapTokensParameters(GetQuoteParameters):
    userPublicKey: str | None = Field(
        default=None, description="Public key of the wallet that will sign the swap"
    )
    wrapAndUnwrapSol: bool = True


class JupiterProvider(HttpToolProvider):
    """Tools for the Jupiter aggregator API.

    Attributes:
        network: Solana network name ("mainnet-beta" or "devnet")
    """

    name = "jupiter"
    display_name = "Jupiter"

    def __init__(
        self,
        network: str = "mainnet-beta",
        base_url: str = JUPITER_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url=base_url, transport=transport)
        self.network = network
        if network != "mainnet-beta":
            logger.warning(f"Jupiter quotes always come from mainnet, not {network}")

    async def list_tools(self) -> list[Tool]:
        return [
            self.tool(
                "get_quote",
                "Get the best swap quote between two Solana tokens. Token mints "
                "must be addresses, not names or symbols.",
                GetQuoteParameters,
                self.get_quote,
            ),
            self.tool(
                "swap_tokens",
                "Build an unsigned swap transaction between two Solana tokens for "
                "the given userPublicKey. Token mints must be addresses.",
                SwapTokensParameters,
                self.swap_tokens,
            ),
        ]

    async def get_quote(self, params: GetQuoteParameters) -> dict[str, Any]:
        return await self.get_json(
            "/quote",
            params={
                "inputMint": params.inputMint,
                "outputMint": params.outputMint,
                "amount": params.amount,
                "slippageBps": params.slippageBps,
                "swapMode": params.swapMode,
                "onlyDirectRoutes": "true" if params.onlyDirectRoutes else "false",
            },
        )

    async def swap_tokens(self, params: SwapTokensParameters) -> dict[str, Any]:
        if not params.userPublicKey:
            raise ValueError("userPublicKey is required to build a swap transaction")

        quote = await self.get_quote(params)
        swap = await self.post_json(
            "/swap",
            {
                "quoteResponse": quote,
                "userPublicKey": params.userPublicKey,
                "wrapAndUnwrapSol": params.wrapAndUnwrapSol,
            },
        )
        return {
            "network": self.network,
            "inAmount": quote.get("inAmount"),
            "outAmount": quote.get("outAmount"),
            "priceImpactPct": quote.get("priceImpactPct"),
            "swapTransaction": swap.get("swapTransaction"),
            "lastValidBlockHeight": swap.get("lastValidBlockHeight"),
            "signed": False,
        }
