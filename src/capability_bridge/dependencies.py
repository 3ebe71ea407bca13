"""Dependency injection providers for FastAPI endpoints.

This module provides FastAPI dependency functions that are used across
multiple routers to inject common dependencies like settings and the host.
"""

from functools import lru_cache

from fastapi import HTTPException, Request

from capability_bridge.config import BridgeSettings, load_settings
from capability_bridge.deployments import CapabilityBridge
from capability_bridge.host import AgentHost


@lru_cache
def get_settings() -> BridgeSettings:
    """Get the application settings instance.

    This function is cached so that the same settings instance is reused
    across all requests.

    Returns:
        BridgeSettings: The application configuration settings.

    Raises:
        ConfigurationError: If a setting has an invalid value.
    """
    return load_settings()


def _not_ready(component: str) -> HTTPException:
    return HTTPException(
        status_code=503,
        detail={
            "error": {
                "code": "host_not_ready",
                "message": f"{component} not initialized",
                "details": {},
            }
        },
    )


def get_host(request: Request) -> AgentHost:
    """Get the agent host from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        AgentHost: The host created during application startup.

    Raises:
        HTTPException: If the host is not initialized (503 Service Unavailable).
    """
    if not hasattr(request.app.state, "host"):
        raise _not_ready("Agent host")
    return request.app.state.host


def get_bridge(request: Request) -> CapabilityBridge:
    """Get the capability bridge from app state.

    Raises:
        HTTPException: If the bridge is not initialized (503 Service Unavailable).
    """
    if not hasattr(request.app.state, "bridge"):
        raise _not_ready("Capability bridge")
    return request.app.state.bridge
