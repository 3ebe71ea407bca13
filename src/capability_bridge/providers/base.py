"""Base class for HTTP-backed tool providers.

Every provider wraps one remote API with an httpx.AsyncClient created once
and reused for all tool calls. Tools are declared with a pydantic parameter
model; the model's JSON schema is what the host sees, and raw arguments are
validated against it before the remote call is made.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, TypeVar

import httpx
from pydantic import BaseModel

from capability_bridge.adapter.types import Tool

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=BaseModel)

DEFAULT_TIMEOUT = 30.0


class ProviderRequestError(Exception):
    """A remote API call made by a tool failed."""


class EmptyParameters(BaseModel):
    """Parameters for tools that take no arguments."""


class HttpToolProvider(ABC):
    """Tool provider backed by a single HTTP API.

    Subclasses set name and display_name and implement list_tools().

    Attributes:
        name: Namespace prefix of the provider's tool names
        display_name: Name used in log and error messages
        _client: The underlying httpx.AsyncClient instance
    """

    name = "http"
    display_name = "HTTP"

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            base_url: Root URL of the remote API
            headers: Headers sent with every request (e.g. API keys)
            timeout: Request timeout in seconds
            transport: Optional transport override, used by tests
        """
        self.base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )
        logger.info(f"{self.display_name} provider initialized with base URL: {base_url}")

    @abstractmethod
    async def list_tools(self) -> list[Tool]:
        """Return the tools this provider offers."""

    def tool(
        self,
        name: str,
        description: str,
        parameters: type[P],
        handler: Callable[[P], Awaitable[Any]],
    ) -> Tool:
        """Declare a tool of this provider.

        Args:
            name: Function name, prefixed with the provider namespace
            description: Description shown to the model
            parameters: Pydantic model describing the arguments
            handler: Coroutine called with the validated parameters

        Returns:
            Tool: The provider-qualified tool
        """

        async def execute(args: dict[str, Any]) -> Any:
            validated = parameters.model_validate(args)
            return await handler(validated)

        return Tool(
            name=f"{self.name}.{name}",
            description=description,
            parameters=parameters.model_json_schema(),
            execute=execute,
        )

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Send a GET request and decode the JSON body."""
        return await self._request("GET", path, params=params)

    async def post_json(self, path: str, body: dict[str, Any]) -> Any:
        """Send a POST request with a JSON body and decode the JSON response."""
        return await self._request("POST", path, json=body)

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        if params is not None:
            params = {key: value for key, value in params.items() if value is not None}

        logger.debug(f"{self.display_name} request: {method} {path} params={params}")
        try:
            response = await self._client.request(method, path, params=params, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderRequestError(
                f"{self.display_name} API returned status "
                f"{e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderRequestError(
                f"{self.display_name} API request failed: {e}"
            ) from e

        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
        logger.debug(f"{self.display_name} provider closed")
