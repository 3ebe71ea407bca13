"""Pytest configuration and shared fixtures for capability-bridge tests.

This module provides common fixtures used across all test modules,
including test settings, in-memory tools, and async client setup.
"""

from typing import Any
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from capability_bridge import create_app
from capability_bridge.adapter import (
    CapabilityBuilder,
    ExecutionDispatcher,
    Tool,
    ToolRegistry,
)
from capability_bridge.config import BridgeSettings


def make_tool(name: str, result: Any = "ok", description: str = "A test tool") -> Tool:
    """Create a tool whose execute is an AsyncMock returning a fixed result."""
    return Tool(
        name=name,
        description=description,
        parameters={"type": "object", "properties": {}},
        execute=AsyncMock(return_value=result),
    )


@pytest.fixture
def tool_factory():
    """Provide the make_tool helper to tests."""
    return make_tool


@pytest.fixture
def registry():
    """Create an empty ToolRegistry."""
    return ToolRegistry()


@pytest.fixture
def dispatcher(registry):
    """Create an ExecutionDispatcher without a timeout."""
    return ExecutionDispatcher(registry)


@pytest.fixture
def builder(registry, dispatcher):
    """Create a CapabilityBuilder sharing the registry and dispatcher."""
    return CapabilityBuilder(registry, dispatcher)


@pytest.fixture
def test_settings():
    """Create test settings for the dexscreener deployment.

    Returns:
        BridgeSettings: Settings instance configured for testing.
    """
    return BridgeSettings(
        host="127.0.0.1",
        port=8000,
        ollama_host="http://localhost:11434",
        model="llama3.2:latest",
        deployment="dexscreener",
        rpc_provider_url="https://rpc.example.com",
        tool_timeout=5.0,
        log_level="DEBUG",
        cors_origins=["*"],
    )


@pytest.fixture
def test_app(test_settings):
    """Create a FastAPI test application instance.

    Args:
        test_settings: Test settings fixture.

    Returns:
        FastAPI: Configured test application.
    """
    return create_app(settings=test_settings)


@pytest_asyncio.fixture
async def async_client(test_app):
    """Create an async HTTP client for testing FastAPI endpoints.

    Args:
        test_app: Test application fixture.

    Yields:
        AsyncClient: Async HTTP client for making test requests.
    """
    # Trigger the lifespan startup manually for tests
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
