"""Conversion of provider tools into host capabilities.

Building a capability is not pure: it registers the formatted name in the
registry so the capability's run callable can resolve it later. Building the
same tool twice simply re-registers it.
"""

import logging
from typing import Any, Iterable

from capability_bridge.adapter.dispatcher import ExecutionDispatcher
from capability_bridge.adapter.naming import format_tool_name
from capability_bridge.adapter.policy import ACCEPT_ALL, SelectionPolicy
from capability_bridge.adapter.registry import ToolRegistry
from capability_bridge.adapter.types import Capability, Tool

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 1000
TRUNCATION_SUFFIX = "... (truncated)"


def truncate_description(description: str) -> str:
    """Cut a description down to the model-facing length limit.

    Args:
        description: The tool description

    Returns:
        str: The description unchanged, or its first MAX_DESCRIPTION_LENGTH
             characters followed by TRUNCATION_SUFFIX
    """
    if len(description) <= MAX_DESCRIPTION_LENGTH:
        return description
    return description[:MAX_DESCRIPTION_LENGTH] + TRUNCATION_SUFFIX


class CapabilityBuilder:
    """Builds capabilities and keeps the registry in sync with them.

    Attributes:
        registry: Registry receiving the formatted name of every built tool
        dispatcher: Dispatcher the capabilities delegate to
    """

    def __init__(self, registry: ToolRegistry, dispatcher: ExecutionDispatcher):
        self.registry = registry
        self.dispatcher = dispatcher

    def build(
        self, tool: Tool, policy: SelectionPolicy = ACCEPT_ALL
    ) -> Capability | None:
        """Build one capability from a tool.

        Args:
            tool: The provider tool
            policy: Selection policy deciding inclusion and base name

        Returns:
            Capability | None: The capability, or None if the policy skips the tool
        """
        base_name = policy.select(tool)
        if base_name is None:
            logger.debug(f"Skipping tool {tool.name}")
            return None

        formatted_name = format_tool_name(base_name)
        self.registry.register(formatted_name, tool)

        description = tool.description or ""
        if len(description) > MAX_DESCRIPTION_LENGTH:
            logger.warning(
                f"Tool {tool.name} has description length {len(description)}, "
                f"truncating to {MAX_DESCRIPTION_LENGTH}"
            )
            description = truncate_description(description)

        logger.debug(f"Mapped tool name: {tool.name} -> {formatted_name}")
        return Capability(
            name=formatted_name,
            description=description,
            schema=tool.parameters,
            run=self._make_runner(formatted_name),
        )

    def build_all(
        self, tools: Iterable[Tool], policy: SelectionPolicy = ACCEPT_ALL
    ) -> list[Capability]:
        """Build capabilities for every tool the policy accepts.

        When two tools format to the same name, the capability built last
        takes the position of the first one, so the result never holds two
        capabilities with the same name.

        Args:
            tools: Discovered tools, in discovery order
            policy: Selection policy

        Returns:
            list[Capability]: Capabilities with unique names
        """
        capabilities: dict[str, Capability] = {}
        for tool in tools:
            capability = self.build(tool, policy)
            if capability is not None:
                capabilities[capability.name] = capability

        logger.info(f"Created {len(capabilities)} capabilities")
        return list(capabilities.values())

    def _make_runner(self, name: str):
        """Create the run callable bound to a formatted name."""

        async def run(args: dict[str, Any]) -> str:
            return await self.dispatcher.invoke(name, args)

        return run
