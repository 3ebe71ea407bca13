"""Data types produced by the agent host."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class HostEvent:
    """One event of a conversational turn.

    Event types are "tool_call", "tool_result" and "message".
    """

    type: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolCallRecord:
    """A capability invocation made during a turn."""

    name: str
    arguments: dict[str, Any]
    result: str = ""


@dataclass
class ProcessResult:
    """Outcome of one conversational turn."""

    content: str
    model: str
    tool_calls_executed: list[ToolCallRecord] = field(default_factory=list)
    rounds: int = 0
    eval_count: int | None = None
    prompt_eval_count: int | None = None
