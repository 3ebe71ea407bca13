"""API routers for capability-bridge.

This package contains all FastAPI router modules that define the HTTP
endpoints for the application.
"""

from capability_bridge.routers import capabilities, chat, health

__all__ = ["capabilities", "chat", "health"]
