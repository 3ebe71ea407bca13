"""Integration tests for the capabilities API.

Tests listing capabilities and invoking them directly, including the
error strings produced by the dispatcher.
"""

import json
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from capability_bridge.adapter import Tool


def _tool(name: str, execute: AsyncMock) -> Tool:
    return Tool(name=name, description="", parameters={}, execute=execute)


@pytest.mark.asyncio
async def test_list_capabilities(async_client: AsyncClient):
    """Test that the deployment's capabilities are listed with their schema."""
    response = await async_client.get("/api/v1/capabilities")

    assert response.status_code == 200
    data = response.json()
    assert data["deployment"] == "dexscreener"
    assert data["count"] == 3

    search = data["capabilities"][0]
    assert search["name"] == "dexscreener_search_pairs"
    assert "query" in search["schema"]["properties"]


@pytest.mark.asyncio
async def test_invoke_capability(async_client: AsyncClient, replace_tool):
    """Test a direct invocation returning structured data as JSON text."""
    execute = AsyncMock(return_value={"pairs": [{"pairAddress": "abc"}]})
    replace_tool("dexscreener_search_pairs", _tool("dexscreener.search_pairs", execute))

    response = await async_client.post(
        "/api/v1/capabilities/dexscreener_search_pairs/invoke",
        json={"arguments": {"query": "CZR/SOL"}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "dexscreener_search_pairs"
    assert json.loads(data["result"]) == {"pairs": [{"pairAddress": "abc"}]}
    execute.assert_awaited_once_with({"query": "CZR/SOL"})


@pytest.mark.asyncio
async def test_invoke_failing_capability(async_client: AsyncClient, replace_tool):
    """Test that a tool failure is returned as the result text."""
    execute = AsyncMock(side_effect=RuntimeError("upstream timeout"))
    replace_tool("dexscreener_search_pairs", _tool("dexscreener.search_pairs", execute))

    response = await async_client.post(
        "/api/v1/capabilities/dexscreener_search_pairs/invoke",
        json={"arguments": {"query": "SOL"}},
    )

    assert response.status_code == 200
    assert response.json()["result"] == (
        "An error occurred while running dexscreener_search_pairs: upstream timeout"
    )


@pytest.mark.asyncio
async def test_invoke_unknown_capability(async_client: AsyncClient):
    """Test that invoking a name the host does not expose returns 404."""
    response = await async_client.post(
        "/api/v1/capabilities/nonexistent_tool/invoke", json={"arguments": {}}
    )

    assert response.status_code == 404
    assert response.json()["detail"]["error"]["code"] == "capability_not_found"


@pytest.mark.asyncio
async def test_capabilities_not_ready(test_app):
    """Test that endpoints report 503 before startup has run."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/capabilities")

    assert response.status_code == 503
    assert response.json()["detail"]["error"]["code"] == "host_not_ready"
