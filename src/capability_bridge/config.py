"""Configuration module for capability-bridge using pydantic-settings."""

from typing import Literal

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from capability_bridge.errors import ConfigurationError

DeploymentName = Literal["allora", "coingecko", "dexscreener", "swap"]


class BridgeSettings(BaseSettings):
    """Main configuration settings for capability-bridge.

    Bridge settings can be overridden via environment variables with the
    BRIDGE_ prefix. For example, BRIDGE_OLLAMA_HOST will override the
    ollama_host setting. Provider credentials are read from their usual
    unprefixed names (COINGECKO_API_KEY, ALLORA_API_KEY, RPC_PROVIDER_URL),
    also from a local .env file.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Ollama
    ollama_host: str = "http://localhost:11434"
    model: str = "llama3.2:latest"

    # Deployment
    deployment: DeploymentName = "dexscreener"

    # Provider credentials
    rpc_provider_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("rpc_provider_url", "RPC_PROVIDER_URL"),
    )
    coingecko_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("coingecko_api_key", "COINGECKO_API_KEY"),
    )
    coingecko_pro: bool = False
    allora_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("allora_api_key", "ALLORA_API_KEY"),
    )
    wallet_address: str | None = None

    # Capability execution
    tool_timeout: float | None = 60.0
    max_tool_rounds: int = 5
    verbose_requests: bool = False

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="BRIDGE_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_devnet(self) -> bool:
        """Whether the RPC provider URL points at a devnet."""
        return "devnet" in (self.rpc_provider_url or "")

    @property
    def network(self) -> str:
        """Solana network name derived from the RPC provider URL."""
        return "devnet" if self.is_devnet else "mainnet-beta"


def require_settings(settings: BridgeSettings, names: list[str]) -> None:
    """Fail fast when required settings are absent.

    Args:
        settings: The loaded settings
        names: Field names that must be set to a non-empty value

    Raises:
        ConfigurationError: Naming every missing setting by its environment
                            variable
    """
    missing = [name.upper() for name in names if not getattr(settings, name, None)]
    if missing:
        verb = "is" if len(missing) == 1 else "are"
        raise ConfigurationError(f"{', '.join(missing)} {verb} not set", missing=missing)


def load_settings(**overrides) -> BridgeSettings:
    """Load settings from the environment, converting validation errors.

    Args:
        **overrides: Explicit values taking precedence over the environment

    Returns:
        BridgeSettings: The loaded settings

    Raises:
        ConfigurationError: If a setting has an invalid value
    """
    try:
        return BridgeSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
