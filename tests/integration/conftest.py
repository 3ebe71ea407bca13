"""Pytest configuration for integration tests.

This module provides integration-test-specific fixtures that ensure
proper test isolation and mocking for API endpoint tests.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest


@pytest.fixture(autouse=True)
def mock_ollama_client():
    """Mock OllamaClient for all integration tests.

    This fixture patches the OllamaClient class before the app is created,
    ensuring the lifespan uses our mock instead of creating a real client.
    """
    with patch("capability_bridge.app.OllamaClient") as mock_client_class:
        mock_instance = AsyncMock()
        mock_instance.host = "http://localhost:11434"
        mock_instance.check_connection.return_value = True

        # Return the mock instance when OllamaClient is instantiated
        mock_client_class.return_value = mock_instance

        yield mock_instance


@pytest.fixture
def replace_tool(test_app):
    """Swap the tool behind a capability name in the running bridge.

    Capabilities resolve their tool through the bridge registry on every
    call, so registering a replacement is enough to redirect them.
    """

    def _replace(name, tool):
        test_app.state.bridge.registry.register(name, tool)

    return _replace


def parse_sse(text: str) -> list[dict]:
    """Parse an SSE response body into a list of {event, data} dicts."""
    events = []
    # Normalize line endings and split by double newline
    normalized_text = text.replace("\r\n", "\n")
    for block in normalized_text.strip().split("\n\n"):
        event_type = None
        event_data = None
        for part in block.split("\n"):
            if part.startswith("event:"):
                event_type = part.split(":", 1)[1].strip()
            elif part.startswith("data:"):
                event_data = part.split(":", 1)[1].strip()
        if event_type and event_data:
            events.append({"event": event_type, "data": json.loads(event_data)})
    return events


@pytest.fixture
def sse_parser():
    """Provide the SSE parsing helper to tests."""
    return parse_sse
