"""CoinGecko market data tools.

Supports both the demo API (api.coingecko.com) and the Pro API
(pro-api.coingecko.com); the two differ in base URL and key header.
"""

from typing import Literal

import httpx
from pydantic import BaseModel, Field

from capability_bridge.adapter.types import Tool
from capability_bridge.providers.base import EmptyParameters, HttpToolProvider

COINGECKO_API_URL = "https://api.coingecko.com/api/v3"
COINGECKO_PRO_API_URL = "https://pro-api.coingecko.com/api/v3"


def _flag(value: bool) -> str:
    return "true" if value else "false"


class GetCoinPricesParameters(BaseModel):
    coin_ids: list[str] = Field(
        min_length=1, description="CoinGecko coin IDs, e.g. ['bitcoin', 'ethereum']"
    )
    vs_currency: str = Field(default="usd", description="Target currency, e.g. 'usd'")
    include_market_cap: bool = False
    include_24hr_vol: bool = False
    include_24hr_change: bool = False
    include_last_updated_at: bool = False


class SearchCoinsParameters(BaseModel):
    query: str = Field(description="Coin name or symbol to search for")
    exact_match: bool = Field(
        default=False,
        description="Only return coins whose name or symbol equals the query",
    )


class GetCoinPriceByContractAddressParameters(BaseModel):
    id: str = Field(description="Asset platform ID, e.g. 'ethereum' or 'solana'")
    contract_addresses: list[str] = Field(min_length=1)
    vs_currency: str = "usd"
    include_market_cap: bool = False
    include_24hr_vol: bool = False
    include_24hr_change: bool = False
    include_last_updated_at: bool = False


class GetCoinDataParameters(BaseModel):
    id: str = Field(description="CoinGecko coin ID, e.g. 'bitcoin'")
    localization: bool = False
    tickers: bool = False
    market_data: bool = True
    community_data: bool = False
    developer_data: bool = False
    sparkline: bool = False


class GetHistoricalDataParameters(BaseModel):
    id: str = Field(description="CoinGecko coin ID")
    date: str = Field(
        pattern=r"^\d{2}-\d{2}-\d{4}$",
        description="Date of the snapshot in dd-mm-yyyy format",
    )
    localization: bool = False


class GetOhlcDataParameters(BaseModel):
    id: str = Field(description="CoinGecko coin ID")
    vs_currency: str = "usd"
    days: Literal[1, 7, 14, 30, 90, 180, 365] = Field(
        default=1, description="Number of days of OHLC data"
    )


class GetTrendingCoinCategoriesParameters(BaseModel):
    order: Literal[
        "market_cap_desc",
        "market_cap_asc",
        "name_desc",
        "name_asc",
        "market_cap_change_24h_desc",
        "market_cap_change_24h_asc",
    ] = "market_cap_change_24h_desc"
    limit: int = Field(default=10, ge=1, le=100)


class CoinGeckoProvider(HttpToolProvider):
    """Tools for the CoinGecko API."""

    name = "coingecko"
    display_name = "CoinGecko"

    def __init__(
        self,
        api_key: str,
        pro: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key: CoinGecko API key
            pro: Use the Pro API instead of the demo API
            transport: Optional transport override, used by tests
        """
        base_url = COINGECKO_PRO_API_URL if pro else COINGECKO_API_URL
        key_header = "x-cg-pro-api-key" if pro else "x-cg-demo-api-key"
        super().__init__(
            base_url=base_url, headers={key_header: api_key}, transport=transport
        )
        self.pro = pro

    async def list_tools(self) -> list[Tool]:
        return [
            self.tool(
                "get_trending_coins",
                "Get the list of trending coins, NFTs and categories on CoinGecko "
                "in the last 24 hours.",
                EmptyParameters,
                self.get_trending_coins,
            ),
            self.tool(
                "get_coin_prices",
                "Get the current prices of coins by CoinGecko ID in a target "
                "currency, optionally with market cap, volume and 24h change.",
                GetCoinPricesParameters,
                self.get_coin_prices,
            ),
            self.tool(
                "search_coins",
                "Search for coins, categories and exchanges by name or symbol.",
                SearchCoinsParameters,
                self.search_coins,
            ),
            self.tool(
                "get_coin_price_by_contract_address",
                "Get the current price of tokens by contract address on an "
                "asset platform.",
                GetCoinPriceByContractAddressParameters,
                self.get_coin_price_by_contract_address,
            ),
            self.tool(
                "get_coin_data",
                "Get detailed data for a coin: description, links, market data "
                "and optionally tickers, community and developer data.",
                GetCoinDataParameters,
                self.get_coin_data,
            ),
            self.tool(
                "get_historical_data",
                "Get historical price, market cap and volume of a coin at a "
                "given date (dd-mm-yyyy).",
                GetHistoricalDataParameters,
                self.get_historical_data,
            ),
            self.tool(
                "get_ohlc_data",
                "Get OHLC (open, high, low, close) candles for a coin.",
                GetOhlcDataParameters,
                self.get_ohlc_data,
            ),
            self.tool(
                "get_trending_coin_categories",
                "Get coin categories with market data, ordered by the chosen "
                "criterion (by default the biggest 24h market cap change).",
                GetTrendingCoinCategoriesParameters,
                self.get_trending_coin_categories,
            ),
            self.tool(
                "coin_categories",
                "Get the list of all coin categories.",
                EmptyParameters,
                self.coin_categories,
            ),
        ]

    async def get_trending_coins(self, params: EmptyParameters) -> dict:
        return await self.get_json("/search/trending")

    async def get_coin_prices(self, params: GetCoinPricesParameters) -> dict:
        return await self.get_json(
            "/simple/price",
            params={
                "ids": ",".join(params.coin_ids),
                "vs_currencies": params.vs_currency,
                "include_market_cap": _flag(params.include_market_cap),
                "include_24hr_vol": _flag(params.include_24hr_vol),
                "include_24hr_change": _flag(params.include_24hr_change),
                "include_last_updated_at": _flag(params.include_last_updated_at),
            },
        )

    async def search_coins(self, params: SearchCoinsParameters) -> dict:
        result = await self.get_json("/search", params={"query": params.query})
        if params.exact_match:
            query = params.query.lower()
            result["coins"] = [
                coin
                for coin in result.get("coins", [])
                if coin.get("name", "").lower() == query
                or coin.get("symbol", "").lower() == query
            ]
        return result

    async def get_coin_price_by_contract_address(
        self, params: GetCoinPriceByContractAddressParameters
    ) -> dict:
        return await self.get_json(
            f"/simple/token_price/{params.id}",
            params={
                "contract_addresses": ",".join(params.contract_addresses),
                "vs_currencies": params.vs_currency,
                "include_market_cap": _flag(params.include_market_cap),
                "include_24hr_vol": _flag(params.include_24hr_vol),
                "include_24hr_change": _flag(params.include_24hr_change),
                "include_last_updated_at": _flag(params.include_last_updated_at),
            },
        )

    async def get_coin_data(self, params: GetCoinDataParameters) -> dict:
        return await self.get_json(
            f"/coins/{params.id}",
            params={
                "localization": _flag(params.localization),
                "tickers": _flag(params.tickers),
                "market_data": _flag(params.market_data),
                "community_data": _flag(params.community_data),
                "developer_data": _flag(params.developer_data),
                "sparkline": _flag(params.sparkline),
            },
        )

    async def get_historical_data(self, params: GetHistoricalDataParameters) -> dict:
        return await self.get_json(
            f"/coins/{params.id}/history",
            params={"date": params.date, "localization": _flag(params.localization)},
        )

    async def get_ohlc_data(self, params: GetOhlcDataParameters) -> list:
        return await self.get_json(
            f"/coins/{params.id}/ohlc",
            params={"vs_currency": params.vs_currency, "days": params.days},
        )

    async def get_trending_coin_categories(
        self, params: GetTrendingCoinCategoriesParameters
    ) -> list:
        categories = await self.get_json(
            "/coins/categories", params={"order": params.order}
        )
        return categories[: params.limit]

    async def coin_categories(self, params: EmptyParameters) -> list:
        return await self.get_json("/coins/categories/list")
