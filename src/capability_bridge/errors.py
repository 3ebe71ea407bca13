"""Exceptions raised during bridge startup.

Only configuration and discovery failures are raised as exceptions. Every
failure that happens while a capability runs is turned into a string result
by the ExecutionDispatcher and never reaches the host as an exception.
"""


class BridgeError(Exception):
    """Base class for fatal bridge errors."""


class ConfigurationError(BridgeError):
    """A required setting is missing or invalid at startup."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        self.missing = missing or []
        super().__init__(message)


class DiscoveryError(BridgeError):
    """A tool provider failed to list its tools.

    Attributes:
        provider: Name of the provider whose discovery failed
    """

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(f"Tool discovery failed for provider '{provider}': {message}")
