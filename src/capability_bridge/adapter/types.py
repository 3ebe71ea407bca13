"""Type definitions for the tool-to-capability adaptation layer.

This module contains the dataclasses and protocols shared by the registry,
builder and dispatcher: the provider-side Tool record, the host-side
Capability, and the ToolProvider interface every provider implements.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Protocol, runtime_checkable

ToolExecutor = Callable[[dict[str, Any]], Awaitable[Any]]
CapabilityRunner = Callable[[dict[str, Any]], Awaitable[str]]


@dataclass(frozen=True)
class Tool:
    """A tool exposed by an external provider.

    Tools are immutable for the lifetime of a session. The name is
    provider-qualified (e.g. "dexscreener.search_pairs") and may contain
    characters that are not legal in the capability namespace.

    Attributes:
        name: Provider-qualified tool name
        description: Human-readable description shown to the model
        parameters: JSON schema describing the accepted arguments
        execute: Async callable taking the raw argument dict
    """

    name: str
    description: str
    parameters: dict[str, Any]
    execute: ToolExecutor = field(compare=False, repr=False)


@dataclass
class Capability:
    """A host-consumable wrapper around a Tool.

    The run callable is bound to the capability name, not to the tool, so
    every invocation resolves the tool through the registry.

    Attributes:
        name: Formatted name legal in the capability namespace
        description: Description, possibly truncated
        schema: JSON schema of the arguments
        run: Async callable returning the tool output as text
    """

    name: str
    description: str
    schema: dict[str, Any]
    run: CapabilityRunner = field(repr=False)

    def to_tool_spec(self) -> dict[str, Any]:
        """Render the capability in function-calling format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.schema,
            },
        }


@runtime_checkable
class ToolProvider(Protocol):
    """Interface implemented by every tool provider."""

    name: str

    async def list_tools(self) -> list[Tool]:
        """Return every tool this provider exposes."""
        ...

    async def close(self) -> None:
        """Release network resources held by the provider."""
        ...
