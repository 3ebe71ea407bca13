"""Tool-to-capability adaptation layer.

This package turns provider tools into uniform host capabilities: name
formatting, the tool registry, selection policies, capability building,
execution dispatch, and observers around the completion call.
"""

from capability_bridge.adapter.builder import (
    MAX_DESCRIPTION_LENGTH,
    TRUNCATION_SUFFIX,
    CapabilityBuilder,
    truncate_description,
)
from capability_bridge.adapter.dispatcher import (
    ExecutionDispatcher,
    Precondition,
    normalize_result,
)
from capability_bridge.adapter.naming import format_tool_name
from capability_bridge.adapter.observer import (
    RequestObserver,
    ToolListObserver,
    observed,
)
from capability_bridge.adapter.policy import ACCEPT_ALL, AliasRule, SelectionPolicy
from capability_bridge.adapter.registry import ToolRegistry
from capability_bridge.adapter.types import Capability, Tool, ToolProvider

__all__ = [
    # Core types
    "Tool",
    "Capability",
    "ToolProvider",
    # Components
    "ToolRegistry",
    "CapabilityBuilder",
    "ExecutionDispatcher",
    "ToolListObserver",
    # Policies
    "SelectionPolicy",
    "AliasRule",
    "ACCEPT_ALL",
    "Precondition",
    "RequestObserver",
    # Functions
    "format_tool_name",
    "normalize_result",
    "observed",
    "truncate_description",
    # Constants
    "MAX_DESCRIPTION_LENGTH",
    "TRUNCATION_SUFFIX",
]
