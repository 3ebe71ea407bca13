"""Pydantic models for the capabilities API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CapabilityInfo(BaseModel):
    """Public description of one capability."""

    name: str = Field(description="Capability name offered to the model")
    description: str = Field(description="Description, truncated if too long")
    schema_: dict[str, Any] = Field(alias="schema", description="Argument schema")

    model_config = ConfigDict(populate_by_name=True)


class CapabilityListResponse(BaseModel):
    """Response for GET /api/v1/capabilities."""

    deployment: str
    capabilities: list[CapabilityInfo]
    count: int


class InvokeRequest(BaseModel):
    """Request body for direct capability invocation."""

    arguments: dict[str, Any] = Field(default_factory=dict)


class InvokeResponse(BaseModel):
    """Response for POST /api/v1/capabilities/{name}/invoke."""

    name: str
    result: str
