"""Conversational agent host.

The host owns the capability set and runs one conversational turn at a time:
it offers the capabilities to the completion backend, executes the tool
calls the model requests, feeds the results back, and repeats until the
model answers in plain text.
"""

import asyncio
import json
import logging
from typing import Any, AsyncIterator, Sequence

from capability_bridge.adapter.types import Capability
from capability_bridge.host.types import HostEvent, ProcessResult, ToolCallRecord
from capability_bridge.ollama.client import OllamaClient

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """The completion backend failed or returned an incomplete response."""


def _parse_arguments(name: str, raw: Any) -> dict[str, Any]:
    """Normalize tool call arguments into a dict."""
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, str) and raw.strip():
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Could not decode arguments for {name}: {raw!r}")
            return {}
        return parsed if isinstance(parsed, dict) else {}
    return {}


class AgentHost:
    """Runs conversational turns over a set of capabilities.

    Attributes:
        completion_client: Backend used for chat completions
        model: Model name passed to the backend
        system_prompt: Prompt prepended to every turn
        max_tool_rounds: Maximum number of tool-calling rounds per turn
    """

    def __init__(
        self,
        completion_client: OllamaClient,
        model: str,
        system_prompt: str = "",
        max_tool_rounds: int = 5,
    ) -> None:
        self.completion_client = completion_client
        self.model = model
        self.system_prompt = system_prompt
        self.max_tool_rounds = max_tool_rounds
        self._capabilities: dict[str, Capability] = {}

    def add_capabilities(self, capabilities: Sequence[Capability]) -> None:
        """Register capabilities with the host.

        Args:
            capabilities: Non-empty ordered sequence of capabilities

        Raises:
            ValueError: If the sequence is empty
        """
        if not capabilities:
            raise ValueError("At least one capability is required")

        for capability in capabilities:
            self._capabilities[capability.name] = capability
        logger.info(f"Successfully added {len(capabilities)} capabilities to agent")

    def clear_capabilities(self) -> None:
        """Remove every registered capability."""
        self._capabilities.clear()

    @property
    def capabilities(self) -> list[Capability]:
        """Registered capabilities in registration order."""
        return list(self._capabilities.values())

    def get_capability(self, name: str) -> Capability | None:
        """Get a registered capability by name."""
        return self._capabilities.get(name)

    def tool_specs(self) -> list[dict[str, Any]]:
        """Render every capability in function-calling format."""
        return [capability.to_tool_spec() for capability in self._capabilities.values()]

    async def run_capability(self, name: str, args: dict[str, Any]) -> str:
        """Run a capability by name, returning an error string if unknown."""
        capability = self._capabilities.get(name)
        if capability is None:
            logger.warning(f"Model requested unknown capability: {name}")
            return f"Error: Capability '{name}' is not available"
        return await capability.run(args)

    async def process(self, messages: list[dict[str, Any]]) -> ProcessResult:
        """Run one conversational turn and collect its outcome.

        Args:
            messages: Conversation input in chat format
                      ([{"role": "user", "content": "..."}, ...])

        Returns:
            ProcessResult: Final answer and the capability calls made

        Raises:
            CompletionError: If the completion backend fails
        """
        records: list[ToolCallRecord] = []
        pending: list[ToolCallRecord] = []
        result = ProcessResult(content="", model=self.model)

        async for event in self.process_events(messages):
            if event.type == "tool_call":
                record = ToolCallRecord(
                    name=event.data["name"], arguments=event.data["arguments"]
                )
                pending.append(record)
                records.append(record)
            elif event.type == "tool_result":
                record = pending.pop(0)
                record.result = event.data["result"]
            elif event.type == "message":
                result.content = event.data["content"]
                result.rounds = event.data["rounds"]
                result.eval_count = event.data.get("eval_count")
                result.prompt_eval_count = event.data.get("prompt_eval_count")

        result.tool_calls_executed = records
        return result

    async def process_events(
        self, messages: list[dict[str, Any]]
    ) -> AsyncIterator[HostEvent]:
        """Run one conversational turn as a stream of events.

        Tool calls requested in the same round run concurrently. A failing
        capability yields an error string result and never aborts the turn.

        Args:
            messages: Conversation input in chat format

        Yields:
            HostEvent: tool_call and tool_result events for every capability
                       invocation, then a single message event

        Raises:
            CompletionError: If the completion backend fails
        """
        conversation: list[dict[str, Any]] = []
        if self.system_prompt:
            conversation.append({"role": "system", "content": self.system_prompt})
        conversation.extend(messages)

        specs = self.tool_specs()
        for round_index in range(self.max_tool_rounds + 1):
            # The last round offers no tools, forcing a plain answer
            tools = specs if round_index < self.max_tool_rounds else None
            content, tool_calls, final_chunk = await self._complete(conversation, tools)

            if not tool_calls or tools is None:
                yield HostEvent(
                    type="message",
                    data={
                        "content": content,
                        "model": self.model,
                        "rounds": round_index,
                        "eval_count": final_chunk.get("eval_count"),
                        "prompt_eval_count": final_chunk.get("prompt_eval_count"),
                    },
                )
                return

            conversation.append(
                {"role": "assistant", "content": content, "tool_calls": tool_calls}
            )

            calls = []
            for tool_call in tool_calls:
                function = tool_call.get("function") or {}
                name = function.get("name", "")
                arguments = _parse_arguments(name, function.get("arguments"))
                calls.append((name, arguments))
                yield HostEvent(
                    type="tool_call", data={"name": name, "arguments": arguments}
                )

            results = await asyncio.gather(
                *(self.run_capability(name, arguments) for name, arguments in calls)
            )

            for (name, _), output in zip(calls, results):
                conversation.append(
                    {"role": "tool", "content": output, "tool_name": name}
                )
                yield HostEvent(type="tool_result", data={"name": name, "result": output})

    async def _complete(
        self,
        conversation: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None,
    ) -> tuple[str, list[dict[str, Any]], dict[str, Any]]:
        """Collect a complete response from the streaming backend.

        Returns:
            Tuple of (content, tool_calls, final_chunk_metadata)

        Raises:
            CompletionError: If streaming fails or ends without completion
        """
        content_parts: list[str] = []
        tool_calls: list[dict[str, Any]] = []
        final_chunk = None

        try:
            async for chunk in self.completion_client.chat_stream(
                model=self.model,
                messages=conversation,
                tools=tools,
            ):
                message = chunk.get("message") or {}
                if message.get("content"):
                    content_parts.append(message["content"])
                if message.get("tool_calls"):
                    tool_calls.extend(message["tool_calls"])

                if chunk.get("done"):
                    final_chunk = chunk

        except Exception as e:
            logger.error(f"Completion backend error: {e}")
            raise CompletionError(f"Failed to get response from Ollama: {e}") from e

        if final_chunk is None:
            raise CompletionError("Stream ended without completion marker")

        return "".join(content_parts), tool_calls, final_chunk
