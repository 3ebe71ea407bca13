"""FastAPI application factory and lifespan management.

This module contains the create_app() factory function that creates and
configures the FastAPI application instance, including the lifespan that
runs the capability setup pipeline once before requests are accepted.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from capability_bridge import __version__
from capability_bridge.adapter.observer import ToolListObserver
from capability_bridge.config import BridgeSettings
from capability_bridge.deployments import create_bridge
from capability_bridge.host import AgentHost
from capability_bridge.ollama import OllamaClient
from capability_bridge.routers import capabilities, chat, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for FastAPI application.

    Startup validates the deployment's required settings, creates the
    Ollama client with its request observers, discovers the provider tools
    and registers the built capabilities with the agent host. A
    ConfigurationError or DiscoveryError aborts startup.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded while the app is running.
    """
    settings: BridgeSettings = app.state.settings

    # Settings are checked before any discovery happens
    bridge = create_bridge(settings)

    app.state.ollama_client = OllamaClient(
        host=settings.ollama_host,
        observers=[ToolListObserver(verbose=settings.verbose_requests)],
    )
    logger.info(f"Initialized Ollama client with host: {settings.ollama_host}")

    connected = await app.state.ollama_client.check_connection()
    if connected:
        logger.info("Successfully connected to Ollama")
    else:
        logger.warning("Could not connect to Ollama - check if server is running")

    try:
        capability_list = await bridge.build()
    except Exception:
        await bridge.close()
        await app.state.ollama_client.close()
        raise

    host = AgentHost(
        completion_client=app.state.ollama_client,
        model=settings.model,
        system_prompt=bridge.deployment.system_prompt,
        max_tool_rounds=settings.max_tool_rounds,
    )
    host.add_capabilities(capability_list)

    app.state.bridge = bridge
    app.state.host = host
    logger.info(
        f"Deployment '{bridge.deployment.name}' ready with "
        f"{len(capability_list)} capabilities"
    )

    yield

    # Shutdown: Clean up resources
    await bridge.close()
    await app.state.ollama_client.close()
    logger.info("Providers and Ollama client closed")


def create_app(settings: BridgeSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional BridgeSettings instance. If not provided,
                  settings will be loaded from environment variables.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        from capability_bridge.dependencies import get_settings

        settings = get_settings()

    app = FastAPI(
        title="capability-bridge",
        description="Agent host exposing market-data and swap tools as capabilities",
        version=__version__,
        lifespan=lifespan,
    )

    # Store settings in app.state for lifespan access
    app.state.settings = settings

    # Note: FastAPI's type hints for add_middleware are overly strict
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(capabilities.router)
    app.include_router(chat.router)

    return app
