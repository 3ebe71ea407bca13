"""Integration tests for the non-streaming chat endpoint.

Tests POST /api/v1/chat with a full app setup: plain answers, tool-calling
rounds through the dexscreener deployment, and backend failures.
"""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from capability_bridge.adapter import Tool


def _rounds(*rounds):
    """Create a chat_stream replacement answering one round per call."""
    remaining = list(rounds)

    async def mock_stream(*args, **kwargs):
        for chunk in remaining.pop(0):
            yield chunk

    return mock_stream


class TestChatNonStreaming:
    """Tests for POST /api/v1/chat endpoint."""

    @pytest.mark.asyncio
    async def test_chat_plain_answer(
        self, async_client: AsyncClient, mock_ollama_client
    ):
        """Test a turn answered without tool calls."""
        mock_ollama_client.chat_stream = _rounds(
            [
                {
                    "model": "llama3.2:latest",
                    "message": {"role": "assistant", "content": "Hello"},
                    "done": False,
                },
                {
                    "model": "llama3.2:latest",
                    "message": {"role": "assistant", "content": " there!"},
                    "done": True,
                    "eval_count": 10,
                    "prompt_eval_count": 50,
                },
            ]
        )

        response = await async_client.post(
            "/api/v1/chat",
            json={"messages": [{"role": "user", "content": "Hi"}]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["content"] == "Hello there!"
        assert data["model"] == "llama3.2:latest"
        assert data["eval_count"] == 10
        assert data["prompt_eval_count"] == 50
        assert data["rounds"] == 0
        assert data["tool_calls_executed"] == []

    @pytest.mark.asyncio
    async def test_chat_with_tool_call(
        self, async_client: AsyncClient, mock_ollama_client, replace_tool
    ):
        """Test a turn where the model searches pairs and then answers."""
        execute = AsyncMock(return_value={"pairs": [{"priceNative": "0.0001"}]})
        replace_tool(
            "dexscreener_search_pairs",
            Tool(
                name="dexscreener.search_pairs",
                description="",
                parameters={},
                execute=execute,
            ),
        )
        mock_ollama_client.chat_stream = _rounds(
            [
                {
                    "message": {
                        "role": "assistant",
                        "content": "",
                        "tool_calls": [
                            {
                                "function": {
                                    "name": "dexscreener_search_pairs",
                                    "arguments": {"query": "CZR/SOL"},
                                }
                            }
                        ],
                    },
                    "done": True,
                }
            ],
            [
                {
                    "message": {
                        "role": "assistant",
                        "content": "CZR/SOL is 0.0001 SOL.",
                    },
                    "done": True,
                }
            ],
        )

        response = await async_client.post(
            "/api/v1/chat",
            json={
                "messages": [{"role": "user", "content": "What's the price of CZR/SOL?"}]
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["content"] == "CZR/SOL is 0.0001 SOL."
        assert data["rounds"] == 1
        executed = data["tool_calls_executed"]
        assert len(executed) == 1
        assert executed[0]["name"] == "dexscreener_search_pairs"
        assert executed[0]["arguments"] == {"query": "CZR/SOL"}
        assert '"priceNative": "0.0001"' in executed[0]["result"]
        execute.assert_awaited_once_with({"query": "CZR/SOL"})

    @pytest.mark.asyncio
    async def test_chat_unknown_tool_is_reported_to_model(
        self, async_client: AsyncClient, mock_ollama_client
    ):
        """Test that a hallucinated capability name yields an error result."""
        mock_ollama_client.chat_stream = _rounds(
            [
                {
                    "message": {
                        "role": "assistant",
                        "content": "",
                        "tool_calls": [
                            {"function": {"name": "nonexistent_tool", "arguments": {}}}
                        ],
                    },
                    "done": True,
                }
            ],
            [{"message": {"role": "assistant", "content": "Sorry."}, "done": True}],
        )

        response = await async_client.post(
            "/api/v1/chat",
            json={"messages": [{"role": "user", "content": "Do something"}]},
        )

        assert response.status_code == 200
        executed = response.json()["tool_calls_executed"]
        assert executed[0]["result"] == (
            "Error: Capability 'nonexistent_tool' is not available"
        )

    @pytest.mark.asyncio
    async def test_chat_empty_messages(self, async_client: AsyncClient):
        """Test that a request without messages is rejected."""
        response = await async_client.post("/api/v1/chat", json={"messages": []})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_chat_ollama_error(
        self, async_client: AsyncClient, mock_ollama_client
    ):
        """Test that a completion backend failure returns 502."""

        async def failing_stream(*args, **kwargs):
            raise Exception("model 'llama3.2:latest' not found")
            yield  # pragma: no cover

        mock_ollama_client.chat_stream = failing_stream

        response = await async_client.post(
            "/api/v1/chat",
            json={"messages": [{"role": "user", "content": "Hi"}]},
        )

        assert response.status_code == 502
        error = response.json()["detail"]["error"]
        assert error["code"] == "ollama_error"
        assert "not found" in error["message"]
