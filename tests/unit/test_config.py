"""Unit tests for settings loading and validation."""

import pytest

from capability_bridge.config import BridgeSettings, load_settings, require_settings
from capability_bridge.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove bridge-related variables from the environment."""
    for name in (
        "RPC_PROVIDER_URL",
        "COINGECKO_API_KEY",
        "ALLORA_API_KEY",
        "BRIDGE_DEPLOYMENT",
        "BRIDGE_PORT",
        "BRIDGE_TOOL_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


def test_settings_default_values():
    """Test that settings have correct default values."""
    settings = BridgeSettings(_env_file=None)

    assert settings.host == "127.0.0.1"
    assert settings.port == 8000
    assert settings.ollama_host == "http://localhost:11434"
    assert settings.deployment == "dexscreener"
    assert settings.tool_timeout == 60.0
    assert settings.max_tool_rounds == 5
    assert settings.rpc_provider_url is None
    assert settings.log_level == "INFO"


def test_settings_from_prefixed_environment(monkeypatch):
    """Test that BRIDGE_ variables override defaults."""
    monkeypatch.setenv("BRIDGE_DEPLOYMENT", "swap")
    monkeypatch.setenv("BRIDGE_PORT", "9000")

    settings = BridgeSettings(_env_file=None)

    assert settings.deployment == "swap"
    assert settings.port == 9000


def test_credentials_from_unprefixed_environment(monkeypatch):
    """Test that provider credentials use their conventional variable names."""
    monkeypatch.setenv("RPC_PROVIDER_URL", "https://api.devnet.solana.com")
    monkeypatch.setenv("COINGECKO_API_KEY", "cg-key")
    monkeypatch.setenv("ALLORA_API_KEY", "allora-key")

    settings = BridgeSettings(_env_file=None)

    assert settings.rpc_provider_url == "https://api.devnet.solana.com"
    assert settings.coingecko_api_key == "cg-key"
    assert settings.allora_api_key == "allora-key"


def test_network_derived_from_rpc_url():
    """Test devnet detection from the RPC provider URL."""
    devnet = BridgeSettings(
        _env_file=None, rpc_provider_url="https://api.devnet.solana.com"
    )
    mainnet = BridgeSettings(_env_file=None, rpc_provider_url="https://rpc.example.com")

    assert devnet.is_devnet is True
    assert devnet.network == "devnet"
    assert mainnet.is_devnet is False
    assert mainnet.network == "mainnet-beta"


def test_require_settings_single_missing():
    """Test the error message for one missing setting."""
    settings = BridgeSettings(_env_file=None)

    with pytest.raises(ConfigurationError, match="RPC_PROVIDER_URL is not set") as exc:
        require_settings(settings, ["rpc_provider_url"])

    assert exc.value.missing == ["RPC_PROVIDER_URL"]


def test_require_settings_several_missing():
    """Test that every missing setting is named."""
    settings = BridgeSettings(_env_file=None)

    with pytest.raises(ConfigurationError) as exc:
        require_settings(settings, ["rpc_provider_url", "coingecko_api_key"])

    assert str(exc.value) == "RPC_PROVIDER_URL, COINGECKO_API_KEY are not set"


def test_require_settings_treats_empty_as_missing():
    """Test that an empty string does not satisfy a requirement."""
    settings = BridgeSettings(_env_file=None, allora_api_key="")

    with pytest.raises(ConfigurationError, match="ALLORA_API_KEY"):
        require_settings(settings, ["allora_api_key"])


def test_require_settings_passes():
    """Test that present settings raise nothing."""
    settings = BridgeSettings(_env_file=None, rpc_provider_url="https://rpc.example.com")
    require_settings(settings, ["rpc_provider_url"])


def test_load_settings_invalid_value():
    """Test that validation errors become ConfigurationError."""
    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        load_settings(deployment="unknown")


def test_load_settings_overrides():
    """Test that explicit overrides take precedence."""
    settings = load_settings(port=8123, model="qwen2.5:7b")

    assert settings.port == 8123
    assert settings.model == "qwen2.5:7b"
