"""Selection policies deciding which tools become capabilities.

A policy is configured per deployment. It filters the discovered tools and
computes the base name each accepted tool is exposed under, optionally
remapping provider-specific function names to a canonical name.
"""

from dataclasses import dataclass, field

from capability_bridge.adapter.naming import NAMESPACE_SEPARATOR
from capability_bridge.adapter.types import Tool


@dataclass(frozen=True)
class AliasRule:
    """Maps several source names onto one canonical capability name."""

    sources: tuple[str, ...]
    target: str


@dataclass(frozen=True)
class SelectionPolicy:
    """Inclusion and aliasing rules for one deployment.

    Empty include sets accept every tool. Substring matches are
    case-insensitive; prefixes and exact names are case-sensitive.

    Attributes:
        include_prefixes: Accept tools whose name starts with any prefix
        include_substrings: Accept tools whose name contains any substring
        exclude_substrings: Reject tools whose name contains any substring
        allowed_names: Accept only these exact provider names
        strip_namespace: Use the segment after the last separator as base name
        aliases: Ordered alias rules, the first rule matching the base name wins
    """

    include_prefixes: tuple[str, ...] = ()
    include_substrings: tuple[str, ...] = ()
    exclude_substrings: tuple[str, ...] = ()
    allowed_names: frozenset[str] = field(default_factory=frozenset)
    strip_namespace: bool = False
    aliases: tuple[AliasRule, ...] = ()

    def accepts(self, tool: Tool) -> bool:
        """Check whether a tool passes the inclusion rules."""
        name = tool.name
        lowered = name.lower()

        if any(fragment.lower() in lowered for fragment in self.exclude_substrings):
            return False
        if self.allowed_names and name not in self.allowed_names:
            return False
        if self.include_prefixes and not name.startswith(self.include_prefixes):
            return False
        if self.include_substrings and not any(
            fragment.lower() in lowered for fragment in self.include_substrings
        ):
            return False
        return True

    def base_name(self, tool: Tool) -> str:
        """Compute the unformatted capability name for a tool."""
        name = tool.name
        if self.strip_namespace:
            name = name.rsplit(NAMESPACE_SEPARATOR, 1)[-1] or tool.name

        for rule in self.aliases:
            if name in rule.sources:
                return rule.target
        return name

    def select(self, tool: Tool) -> str | None:
        """Apply the policy to a tool.

        Returns:
            str | None: The base name, or None when the tool is skipped
        """
        if not self.accepts(tool):
            return None
        return self.base_name(tool)


ACCEPT_ALL = SelectionPolicy()
