"""Agent host running conversational turns over capabilities."""

from capability_bridge.host.agent import AgentHost, CompletionError
from capability_bridge.host.types import HostEvent, ProcessResult, ToolCallRecord

__all__ = [
    "AgentHost",
    "CompletionError",
    "HostEvent",
    "ProcessResult",
    "ToolCallRecord",
]
