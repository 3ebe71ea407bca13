"""Allora Network price predictions."""

import logging
from typing import Any, Literal

import httpx
from pydantic import BaseModel, Field

from capability_bridge.adapter.types import Tool
from capability_bridge.providers.base import HttpToolProvider

logger = logging.getLogger(__name__)

ALLORA_API_URL = "https://api.upshot.xyz/v2/allora"
DEFAULT_SIGNATURE_FORMAT = "ethereum-11155111"


class GetPricePredictionParameters(BaseModel):
    ticker: Literal["BTC", "ETH"] = Field(description="Ticker of the asset")
    timeframe: Literal["5m", "8h"] = Field(description="Prediction horizon")


class AlloraProvider(HttpToolProvider):
    """Tools for the Allora Network consumer API."""

    name = "allora"
    display_name = "Allora"

    def __init__(
        self,
        api_key: str,
        base_url: str = ALLORA_API_URL,
        signature_format: str = DEFAULT_SIGNATURE_FORMAT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            base_url=base_url, headers={"x-api-key": api_key}, transport=transport
        )
        self.signature_format = signature_format

    async def list_tools(self) -> list[Tool]:
        return [
            self.tool(
                "get_price_prediction",
                "Fetch a price prediction for BTC or ETH from the Allora Network "
                "for the next 5 minutes (5m) or 8 hours (8h).",
                GetPricePredictionParameters,
                self.get_price_prediction,
            )
        ]

    async def get_price_prediction(self, params: GetPricePredictionParameters) -> Any:
        payload = await self.get_json(
            f"/consumer/price/{self.signature_format}/{params.ticker}/{params.timeframe}"
        )
        # The prediction itself lives under data.inference_data
        data = payload.get("data") if isinstance(payload, dict) else None
        if isinstance(data, dict) and "inference_data" in data:
            return data["inference_data"]
        logger.warning("Allora response has no inference_data, returning raw payload")
        return payload
