"""Unit tests for the OllamaClient wrapper."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from capability_bridge.ollama import OllamaClient


@pytest.fixture
def mock_ollama_async_client():
    """Create a mock ollama.AsyncClient."""
    with patch("capability_bridge.ollama.client.ollama.AsyncClient") as mock_class:
        mock_instance = AsyncMock()
        mock_class.return_value = mock_instance
        yield mock_instance


@pytest.fixture
def ollama_client(mock_ollama_async_client):
    """Create an OllamaClient with mocked AsyncClient."""
    return OllamaClient(host="http://localhost:11434")


def _stream(chunks):
    async def generator():
        for chunk in chunks:
            yield chunk

    return generator()


@pytest.mark.asyncio
async def test_client_initialization():
    """Test that OllamaClient initializes correctly."""
    with patch("capability_bridge.ollama.client.ollama.AsyncClient"):
        client = OllamaClient(host="http://test:11434")
        assert client.host == "http://test:11434"
        assert client._client is not None
        assert client.observers == []


@pytest.mark.asyncio
async def test_check_connection_success(ollama_client, mock_ollama_async_client):
    """Test successful connection check."""
    mock_ollama_async_client.list.return_value = {"models": []}

    result = await ollama_client.check_connection()

    assert result is True
    mock_ollama_async_client.list.assert_called_once()


@pytest.mark.asyncio
async def test_check_connection_failure(ollama_client, mock_ollama_async_client):
    """Test connection check when Ollama is unreachable."""
    mock_ollama_async_client.list.side_effect = Exception("Connection refused")

    result = await ollama_client.check_connection()

    assert result is False


@pytest.mark.asyncio
async def test_chat_stream_yields_dict_chunks(ollama_client, mock_ollama_async_client):
    """Test that streamed chunks are converted to dicts."""
    model_chunk = MagicMock()
    model_chunk.model_dump.return_value = {
        "message": {"role": "assistant", "content": "Hi"},
        "done": False,
    }
    chunks = [
        model_chunk,
        {"message": {"role": "assistant", "content": ""}, "done": True},
    ]
    mock_ollama_async_client.chat.return_value = _stream(chunks)

    received = [
        chunk
        async for chunk in ollama_client.chat_stream(
            model="llama3.2:latest", messages=[{"role": "user", "content": "Hello"}]
        )
    ]

    assert received[0]["message"]["content"] == "Hi"
    assert received[1]["done"] is True


@pytest.mark.asyncio
async def test_chat_stream_passes_tools(ollama_client, mock_ollama_async_client):
    """Test that tool specs are forwarded and empty lists become None."""
    tools = [{"type": "function", "function": {"name": "search_pairs"}}]
    mock_ollama_async_client.chat.return_value = _stream([{"done": True}])

    async for _ in ollama_client.chat_stream(model="m", messages=[], tools=tools):
        pass

    kwargs = mock_ollama_async_client.chat.call_args.kwargs
    assert kwargs["tools"] == tools
    assert kwargs["stream"] is True

    mock_ollama_async_client.chat.return_value = _stream([{"done": True}])
    async for _ in ollama_client.chat_stream(model="m", messages=[], tools=[]):
        pass

    assert mock_ollama_async_client.chat.call_args.kwargs["tools"] is None


@pytest.mark.asyncio
async def test_chat_stream_error_propagates(ollama_client, mock_ollama_async_client):
    """Test that backend errors are re-raised."""
    mock_ollama_async_client.chat.side_effect = Exception("model not found")

    with pytest.raises(Exception, match="model not found"):
        async for _ in ollama_client.chat_stream(model="missing", messages=[]):
            pass


@pytest.mark.asyncio
async def test_observers_wrap_chat_call(mock_ollama_async_client):
    """Test that observers see every outbound chat request."""
    observer = MagicMock()
    client = OllamaClient(host="http://localhost:11434", observers=[observer])
    mock_ollama_async_client.chat.return_value = _stream([{"done": True}])
    tools = [{"type": "function", "function": {"name": "swap"}}]

    async for _ in client.chat_stream(model="m", messages=[], tools=tools):
        pass

    request = observer.before_request.call_args.args[0]
    assert request["tools"] == tools
    assert request["model"] == "m"
    mock_ollama_async_client.chat.assert_awaited_once()
