"""Execution dispatch for capability invocations.

The dispatcher is the function behind every capability's run callable. It
resolves the originating tool through the registry, checks preconditions,
awaits the tool, and normalizes the outcome to text. It never raises: the
host always receives a string, whether the call succeeded or failed.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from capability_bridge.adapter.registry import ToolRegistry
from capability_bridge.adapter.types import Tool

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"


class InvocationTimeout(Exception):
    """A capability did not finish within the dispatcher timeout."""


@dataclass(frozen=True)
class Precondition:
    """An argument check the parameter schema cannot express.

    Attributes:
        capability: Formatted name of the capability the check applies to
        required_args: Argument keys that must be present
        message: Text returned instead of invoking the tool
    """

    capability: str
    required_args: tuple[str, ...]
    message: str

    def is_satisfied(self, args: dict[str, Any]) -> bool:
        """Check whether every required argument is present."""
        return all(key in args for key in self.required_args)


def normalize_result(result: Any) -> str:
    """Convert a tool result into its textual form.

    Strings pass through unchanged. Pydantic models are dumped first. Any
    other value is serialized as pretty-printed JSON.

    Args:
        result: The value returned by the tool

    Returns:
        str: The text handed back to the host
    """
    if isinstance(result, str):
        return result
    if isinstance(result, BaseModel):
        result = result.model_dump(mode="json")
    return json.dumps(result, indent=2, default=str)


class ExecutionDispatcher:
    """Resolves, executes and normalizes capability invocations.

    Attributes:
        registry: Registry used to resolve capability names
        timeout: Per-invocation timeout in seconds, None for no limit
        preconditions: Preconditions keyed by capability name
    """

    def __init__(
        self,
        registry: ToolRegistry,
        timeout: float | None = None,
        preconditions: list[Precondition] | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            registry: Registry used to resolve capability names
            timeout: Per-invocation timeout in seconds, None for no limit
            preconditions: Optional preconditions to enforce before execution
        """
        self.registry = registry
        self.timeout = timeout
        self.preconditions: dict[str, list[Precondition]] = {}
        for precondition in preconditions or []:
            self.add_precondition(precondition)

    def add_precondition(self, precondition: Precondition) -> None:
        """Add a precondition checked before the named capability runs."""
        self.preconditions.setdefault(precondition.capability, []).append(
            precondition
        )

    def check_preconditions(self, name: str, args: dict[str, Any]) -> str | None:
        """Return the message of the first violated precondition, if any."""
        for precondition in self.preconditions.get(name, []):
            if not precondition.is_satisfied(args):
                return precondition.message
        return None

    async def invoke(self, name: str, args: dict[str, Any]) -> str:
        """Invoke the tool registered under a capability name.

        Args:
            name: Formatted capability name
            args: Arguments supplied by the host

        Returns:
            str: The normalized tool output, or a descriptive error message
        """
        tool = self.registry.resolve(name)
        if tool is None:
            logger.error(f"Original tool not found for {name}")
            return f"Error: Original tool not found for {name}"

        try:
            violation = self.check_preconditions(name, args)
            if violation is not None:
                logger.warning(f"Precondition failed for {name}: {violation}")
                return violation

            logger.debug(f"Running capability {name} with args: {args}")
            response = await self._execute(name, tool, args)

            text = normalize_result(response)
            logger.debug(f"Capability {name} returned {len(text)} characters")
            return text

        except Exception as e:
            logger.error(f"Error in capability {name}: {e!r}")
            message = str(e) or UNKNOWN_ERROR
            return f"An error occurred while running {name}: {message}"

    async def _execute(self, name: str, tool: Tool, args: dict[str, Any]) -> Any:
        """Await the tool, bounded by the dispatcher timeout when one is set.

        Only the deadline of this call is reported as a timeout. A
        TimeoutError raised by the tool itself keeps its own message.
        """
        if self.timeout is None:
            return await tool.execute(args)

        task = asyncio.ensure_future(tool.execute(args))
        try:
            done, _ = await asyncio.wait({task}, timeout=self.timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise
        if task in done:
            return task.result()

        task.cancel()
        logger.error(f"Error in capability {name}: timed out after {self.timeout}s")
        raise InvocationTimeout(f"timed out after {self.timeout:g} seconds")
