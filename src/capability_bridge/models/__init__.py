"""Pydantic models for API requests and responses."""

from capability_bridge.models.capabilities import (
    CapabilityInfo,
    CapabilityListResponse,
    InvokeRequest,
    InvokeResponse,
)
from capability_bridge.models.chat import ChatMessage, ChatRequest, ChatResponse
from capability_bridge.models.health import HealthResponse

__all__ = [
    "CapabilityInfo",
    "CapabilityListResponse",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "HealthResponse",
    "InvokeRequest",
    "InvokeResponse",
]
