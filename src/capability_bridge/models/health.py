"""Health check response model."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the health check endpoint.

    Attributes:
        status: Health status indicator ("ok" or "error").
        version: The version of capability-bridge.
        deployment: Name of the deployment being served.
        capability_count: Number of capabilities registered with the host.
        ollama_connected: Optional boolean indicating Ollama connectivity.
        ollama_host: Optional string with the Ollama host URL.
    """

    status: str = Field(..., description="Health status of the service")
    version: str = Field(..., description="Version of capability-bridge")
    deployment: str | None = Field(default=None, description="Active deployment")
    capability_count: int = Field(
        default=0, description="Number of registered capabilities"
    )
    ollama_connected: bool | None = Field(
        default=None,
        description="Whether Ollama is connected",
    )
    ollama_host: str | None = Field(
        default=None,
        description="Ollama host URL",
    )
