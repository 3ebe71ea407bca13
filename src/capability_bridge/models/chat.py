"""Pydantic models for chat API requests and responses.

This module defines the request and response schemas for the chat endpoints,
including both streaming and non-streaming conversational turns.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """A single conversation message supplied by the client."""

    role: Literal["system", "user", "assistant", "tool"] = Field(
        description="Message role"
    )
    content: str = Field(description="Message content")


class ChatRequest(BaseModel):
    """Request body for chat endpoints.

    Used by both POST /api/v1/chat (non-streaming) and
    POST /api/v1/chat/stream (streaming).
    """

    messages: list[ChatMessage] = Field(
        min_length=1, description="Conversation input for this turn"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "messages": [
                        {"role": "user", "content": "What's the current price of CZR/SOL?"}
                    ]
                }
            ]
        }
    )


class ToolCallExecuted(BaseModel):
    """A capability invocation made while answering."""

    name: str = Field(description="Capability name")
    arguments: dict[str, Any] = Field(default_factory=dict)
    result: str = Field(description="Text returned by the capability")


class ChatResponse(BaseModel):
    """Response body for the non-streaming chat endpoint."""

    content: str = Field(description="Final assistant answer")
    model: str = Field(description="Model that generated the answer")
    rounds: int = Field(default=0, description="Number of tool-calling rounds")
    eval_count: int | None = Field(
        default=None, description="Number of tokens generated"
    )
    prompt_eval_count: int | None = Field(
        default=None, description="Number of tokens in the prompt"
    )
    tool_calls_executed: list[ToolCallExecuted] = Field(default_factory=list)


class ToolCallEvent(BaseModel):
    """SSE event emitted when the model requests a capability."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolResultEvent(BaseModel):
    """SSE event emitted when a capability returns."""

    name: str
    result: str


class MessageEvent(BaseModel):
    """SSE event carrying the final assistant answer."""

    content: str
    model: str
    rounds: int = 0
    eval_count: int | None = None
    prompt_eval_count: int | None = None


class ErrorEvent(BaseModel):
    """SSE event emitted when the turn fails."""

    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class DoneEvent(BaseModel):
    """SSE event marking the end of the stream."""

    deployment: str
