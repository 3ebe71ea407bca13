"""Async Ollama client wrapper.

This module provides an async wrapper around the ollama.AsyncClient used as
the completion backend of the agent host. The outbound chat call is wrapped
once, at construction time, with the configured request observers.
"""

import logging
from typing import Any, AsyncIterator, Sequence

import ollama

from capability_bridge.adapter.observer import RequestObserver, observed

logger = logging.getLogger(__name__)


class OllamaClient:
    """Async client for chat completions with tool calling.

    Attributes:
        host: The Ollama server URL (e.g., "http://localhost:11434")
        observers: Observers invoked around every outbound chat call
        _client: The underlying ollama.AsyncClient instance
    """

    def __init__(
        self, host: str, observers: Sequence[RequestObserver] | None = None
    ) -> None:
        """Initialize the Ollama client.

        Args:
            host: The Ollama server URL
            observers: Optional observers for the outbound chat call
        """
        self.host = host
        self.observers = list(observers or [])
        self._client = ollama.AsyncClient(host=host)
        self._chat = observed(self._client.chat, self.observers)
        logger.info(f"OllamaClient initialized with host: {host}")

    async def check_connection(self) -> bool:
        """Check if the Ollama server is reachable.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            await self._client.list()
            logger.debug("Ollama connection check: successful")
            return True
        except Exception as e:
            logger.warning(f"Ollama connection check failed: {e}")
            return False

    async def chat_stream(
        self,
        model: str,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        options: dict[str, Any] | None = None,
    ) -> AsyncIterator[dict[str, Any]]:
        """Stream chat responses from Ollama.

        Args:
            model: The model name to use for the chat
            messages: List of message dicts in Ollama format
            tools: Optional capability specs in function-calling format
            options: Optional model parameters (temperature, etc.)

        Yields:
            dict: Response chunks from Ollama. Chunks may carry
                  message.tool_calls; the final chunk has done=True.

        Raises:
            Exception: If the Ollama API request fails
        """
        try:
            logger.debug(
                f"Starting chat stream with model: {model}, "
                f"{len(messages)} messages, {len(tools or [])} tools"
            )

            async for chunk in await self._chat(
                model=model,
                messages=messages,
                tools=tools or None,
                stream=True,
                options=options,
            ):
                if hasattr(chunk, "model_dump"):
                    chunk_dict = chunk.model_dump()
                elif isinstance(chunk, dict):
                    chunk_dict = chunk
                else:
                    chunk_dict = vars(chunk)

                yield chunk_dict

            logger.debug("Chat stream completed")

        except Exception as e:
            logger.error(f"Chat stream failed: {e}")
            raise

    async def close(self) -> None:
        """Close the client and clean up resources.

        ollama.AsyncClient doesn't require explicit cleanup in current
        versions.
        """
        logger.debug("OllamaClient closed")
