"""Registry mapping formatted capability names to their originating tools."""

import logging
from types import MappingProxyType
from typing import Iterable, Mapping

from capability_bridge.adapter.types import Tool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Lookup table from formatted name to Tool.

    A registry belongs to a single bridge instance. It is written during
    setup and read at call time. Writes never mutate the published mapping
    in place: each write publishes a new immutable snapshot, so concurrent
    readers always see a complete map.

    Attributes:
        _entries: The current read-only snapshot
    """

    def __init__(self) -> None:
        self._entries: Mapping[str, Tool] = MappingProxyType({})

    def register(self, name: str, tool: Tool) -> None:
        """Register a tool under a formatted name.

        A later registration for the same name shadows the earlier one.

        Args:
            name: Formatted capability name
            tool: The tool to execute for this name
        """
        previous = self._entries.get(name)
        if previous is not None and previous is not tool:
            logger.warning(
                f"Capability name '{name}' now resolves to '{tool.name}' "
                f"(previously '{previous.name}')"
            )

        updated = dict(self._entries)
        updated[name] = tool
        self._entries = MappingProxyType(updated)
        logger.debug(f"Registered tool {tool.name} as {name}")

    def resolve(self, name: str) -> Tool | None:
        """Resolve a formatted name to its tool.

        Args:
            name: Formatted capability name

        Returns:
            Tool | None: The registered tool, or None if the name is unknown
        """
        return self._entries.get(name)

    def replace(self, entries: Iterable[tuple[str, Tool]]) -> None:
        """Atomically replace every entry, used when tools are reloaded.

        Args:
            entries: Pairs of (formatted name, tool); later pairs win
        """
        self._entries = MappingProxyType(dict(entries))
        logger.info(f"Tool registry reloaded with {len(self._entries)} entries")

    def snapshot(self) -> Mapping[str, Tool]:
        """Get the current read-only mapping."""
        return self._entries

    def names(self) -> list[str]:
        """List every registered name in registration order."""
        return list(self._entries.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
