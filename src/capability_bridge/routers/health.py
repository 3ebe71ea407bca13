"""Health check endpoint router."""

import logging

from fastapi import APIRouter, Request

from capability_bridge import __version__
from capability_bridge.models.health import HealthResponse
from capability_bridge.ollama import OllamaClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint.

    Returns the health status, version, active deployment and capability
    count. Also checks connectivity to the Ollama server if the client is
    initialized.

    Args:
        request: The FastAPI request object.

    Returns:
        HealthResponse: Health status and version information.
    """
    ollama_connected = None
    ollama_host = None

    if hasattr(request.app.state, "ollama_client"):
        ollama_client: OllamaClient = request.app.state.ollama_client
        ollama_host = ollama_client.host

        try:
            ollama_connected = await ollama_client.check_connection()
            logger.debug(f"Ollama connectivity check: {ollama_connected}")
        except Exception as e:
            logger.warning(f"Ollama connectivity check failed: {e}")
            ollama_connected = False

    capability_count = 0
    if hasattr(request.app.state, "host"):
        capability_count = len(request.app.state.host.capabilities)

    return HealthResponse(
        status="ok",
        version=__version__,
        deployment=request.app.state.settings.deployment,
        capability_count=capability_count,
        ollama_connected=ollama_connected,
        ollama_host=ollama_host,
    )
