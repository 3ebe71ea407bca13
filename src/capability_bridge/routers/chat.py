"""Chat API endpoints.

This module provides endpoints for running one conversational turn through
the agent host, with non-streaming and streaming (SSE) responses.
"""

import logging
from contextlib import aclosing
from typing import Any, AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Request
from sse_starlette.sse import EventSourceResponse

from capability_bridge.dependencies import get_host
from capability_bridge.host import AgentHost, CompletionError
from capability_bridge.models.chat import (
    ChatRequest,
    ChatResponse,
    DoneEvent,
    ErrorEvent,
    MessageEvent,
    ToolCallEvent,
    ToolCallExecuted,
    ToolResultEvent,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/chat", tags=["chat"])

EVENT_MODELS = {
    "tool_call": ToolCallEvent,
    "tool_result": ToolResultEvent,
    "message": MessageEvent,
}


@router.post("", response_model=ChatResponse)
async def chat_non_streaming(
    request_body: ChatRequest,
    host: AgentHost = Depends(get_host),
) -> ChatResponse:
    """Run one conversational turn and return the complete answer.

    Args:
        request_body: Chat request containing the conversation input
        host: Injected agent host

    Returns:
        ChatResponse with the final answer and the capabilities invoked

    Raises:
        HTTPException: 502 if the completion backend fails
    """
    messages = [message.model_dump() for message in request_body.messages]
    logger.info(f"Processing chat turn with {len(messages)} messages")

    try:
        result = await host.process(messages)
    except CompletionError as e:
        raise HTTPException(
            status_code=502,
            detail={
                "error": {
                    "code": "ollama_error",
                    "message": str(e),
                    "details": {},
                }
            },
        )

    logger.info(
        f"Received complete response: {len(result.content)} characters, "
        f"{len(result.tool_calls_executed)} tool calls"
    )

    return ChatResponse(
        content=result.content,
        model=result.model,
        rounds=result.rounds,
        eval_count=result.eval_count,
        prompt_eval_count=result.prompt_eval_count,
        tool_calls_executed=[
            ToolCallExecuted(name=call.name, arguments=call.arguments, result=call.result)
            for call in result.tool_calls_executed
        ],
    )


async def stream_turn_events(
    host: AgentHost,
    messages: list[dict[str, Any]],
    request: Request,
    deployment: str,
) -> AsyncIterator[dict[str, str]]:
    """Generate SSE events from the host's turn events.

    The host's event stream is closed as soon as this generator stops,
    including when the client disconnects mid-turn.
    """
    try:
        async with aclosing(host.process_events(messages)) as events:
            async for event in events:
                if await request.is_disconnected():
                    logger.warning("Client disconnected during streaming")
                    return

                payload = EVENT_MODELS[event.type](**event.data)
                yield {"event": event.type, "data": payload.model_dump_json()}

    except CompletionError as e:
        logger.error(f"Error during streaming: {e}")
        error_event = ErrorEvent(
            code="ollama_error",
            message=str(e),
            details={"deployment": deployment},
        )
        yield {"event": "error", "data": error_event.model_dump_json()}
        return

    done_event = DoneEvent(deployment=deployment)
    yield {"event": "done", "data": done_event.model_dump_json()}


@router.post("/stream")
async def chat_streaming(
    request_body: ChatRequest,
    request: Request,
    host: AgentHost = Depends(get_host),
) -> EventSourceResponse:
    """Stream a conversational turn via Server-Sent Events (SSE).

    SSE Events:
        - tool_call: The model requested a capability
        - tool_result: A capability returned (errors included as text)
        - message: The final assistant answer
        - error: If the completion backend fails
        - done: Stream is complete
    """
    messages = [message.model_dump() for message in request_body.messages]
    deployment = request.app.state.settings.deployment
    return EventSourceResponse(stream_turn_events(host, messages, request, deployment))
