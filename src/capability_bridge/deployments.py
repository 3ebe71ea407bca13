"""Deployment definitions and the capability bridge.

A deployment pairs a set of tool providers with the selection policies,
preconditions, required settings and system prompt of one agent. The
CapabilityBridge runs the setup pipeline for a deployment: discover tools,
select and alias them, build capabilities and publish them in its registry.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable

from capability_bridge.adapter.builder import CapabilityBuilder
from capability_bridge.adapter.dispatcher import ExecutionDispatcher, Precondition
from capability_bridge.adapter.naming import NAMESPACE_SEPARATOR
from capability_bridge.adapter.policy import AliasRule, SelectionPolicy
from capability_bridge.adapter.registry import ToolRegistry
from capability_bridge.adapter.types import Capability, Tool, ToolProvider
from capability_bridge.config import BridgeSettings, require_settings
from capability_bridge.errors import ConfigurationError, DiscoveryError
from capability_bridge.providers import (
    AlloraProvider,
    CoinGeckoProvider,
    DexScreenerProvider,
    JupiterProvider,
    WalletInfoProvider,
)

logger = logging.getLogger(__name__)

MISSING_PUBLIC_KEY_MESSAGE = "Error: Missing userPublicKey for swap operation."

ProviderFactory = Callable[[BridgeSettings], list[ToolProvider]]


@dataclass(frozen=True)
class Deployment:
    """Everything needed to stand up one agent.

    Attributes:
        name: Deployment name, as selected by the deployment setting
        system_prompt: Prompt given to the model on every turn
        required_settings: Setting names that must be present at startup
        providers: Factory creating the deployment's tool providers
        selections: Policies applied to the discovered tools, in order
        preconditions: Dispatcher-level argument checks
    """

    name: str
    system_prompt: str
    required_settings: tuple[str, ...]
    providers: ProviderFactory
    selections: tuple[SelectionPolicy, ...]
    preconditions: tuple[Precondition, ...] = field(default_factory=tuple)


def tool_categories(tools: list[Tool]) -> list[str]:
    """Namespaces present in a tool list, "uncategorized" for bare names."""
    categories = []
    for tool in tools:
        parts = tool.name.split(NAMESPACE_SEPARATOR)
        category = parts[0] if len(parts) > 1 else "uncategorized"
        if category not in categories:
            categories.append(category)
    return categories


class CapabilityBridge:
    """Setup pipeline and call-time state for one deployment.

    The registry, dispatcher and builder belong to this instance, so several
    bridges can live in one process without sharing state.

    Attributes:
        deployment: The deployment being served
        providers: Tool providers created for the deployment
        registry: Registry resolving capability names to tools
        dispatcher: Dispatcher behind every capability
        builder: Builder registering into the registry
    """

    def __init__(
        self,
        deployment: Deployment,
        providers: list[ToolProvider],
        timeout: float | None = None,
    ) -> None:
        self.deployment = deployment
        self.providers = providers
        self.registry = ToolRegistry()
        self.dispatcher = ExecutionDispatcher(
            self.registry,
            timeout=timeout,
            preconditions=list(deployment.preconditions),
        )
        self.builder = CapabilityBuilder(self.registry, self.dispatcher)

    async def discover(self) -> list[Tool]:
        """List the tools of every provider, in provider order.

        Raises:
            DiscoveryError: If any provider fails to list its tools
        """
        tools: list[Tool] = []
        for provider in self.providers:
            try:
                provider_tools = await provider.list_tools()
            except Exception as e:
                logger.error(f"Tool discovery failed for {provider.name}: {e}")
                raise DiscoveryError(provider.name, str(e) or type(e).__name__) from e
            tools.extend(provider_tools)

        logger.info(f"All available tools: {[tool.name for tool in tools]}")
        return tools

    async def build(self) -> list[Capability]:
        """Discover tools and build the deployment's capabilities.

        Returns:
            list[Capability]: Capabilities with unique names

        Raises:
            DiscoveryError: If discovery fails or no tool is selected
        """
        return self._build(await self.discover(), self.builder)

    async def reload(self) -> list[Capability]:
        """Rediscover tools and atomically swap the registry contents.

        Capabilities are built against a staging registry first; the live
        registry is replaced in one step once the build succeeded.
        """
        tools = await self.discover()
        staging = ToolRegistry()
        capabilities = self._build(tools, CapabilityBuilder(staging, self.dispatcher))
        self.registry.replace(staging.snapshot().items())
        return capabilities

    def _build(self, tools: list[Tool], builder: CapabilityBuilder) -> list[Capability]:
        capabilities: dict[str, Capability] = {}
        for policy in self.deployment.selections:
            for capability in builder.build_all(tools, policy):
                capabilities[capability.name] = capability

        if not capabilities:
            raise DiscoveryError(
                self.deployment.name,
                "no tools matched the selection policy; available tool "
                f"categories: {', '.join(tool_categories(tools)) or 'none'}",
            )

        logger.info(f"Capabilities created: {list(capabilities)}")
        return list(capabilities.values())

    async def close(self) -> None:
        """Close every provider."""
        for provider in self.providers:
            await provider.close()


def _evm_wallet(settings: BridgeSettings) -> WalletInfoProvider:
    return WalletInfoProvider(
        chain="evm", network="mainnet", address=settings.wallet_address
    )


def _dexscreener_providers(settings: BridgeSettings) -> list[ToolProvider]:
    return [_evm_wallet(settings), DexScreenerProvider()]


def _coingecko_providers(settings: BridgeSettings) -> list[ToolProvider]:
    return [
        _evm_wallet(settings),
        CoinGeckoProvider(
            api_key=settings.coingecko_api_key or "", pro=settings.coingecko_pro
        ),
    ]


def _allora_providers(settings: BridgeSettings) -> list[ToolProvider]:
    return [
        _evm_wallet(settings),
        AlloraProvider(api_key=settings.allora_api_key or ""),
    ]


def _swap_providers(settings: BridgeSettings) -> list[ToolProvider]:
    return [
        WalletInfoProvider(
            chain="solana", network=settings.network, address=settings.wallet_address
        ),
        JupiterProvider(network=settings.network),
        DexScreenerProvider(),
    ]


DEXSCREENER = Deployment(
    name="dexscreener",
    system_prompt=(
        "You are a helpful assistant that retrieves cryptocurrency pair "
        "information from DexScreener. Pick the tool that matches the request "
        "(search pairs, look up a pair by chain and pair ID, or find the pairs "
        "of a token address) and present the result concisely."
    ),
    required_settings=("rpc_provider_url",),
    providers=_dexscreener_providers,
    selections=(SelectionPolicy(include_prefixes=("dexscreener",)),),
)

COINGECKO = Deployment(
    name="coingecko",
    system_prompt=(
        "You are a helpful assistant that retrieves cryptocurrency information "
        "from CoinGecko: trending coins, prices, coin search, prices by contract "
        "address, historical and OHLC data, and coin categories."
    ),
    required_settings=("rpc_provider_url", "coingecko_api_key"),
    providers=_coingecko_providers,
    selections=(SelectionPolicy(exclude_substrings=("get_chain",)),),
)

ALLORA = Deployment(
    name="allora",
    system_prompt=(
        "You are an assistant specializing in cryptocurrency price predictions "
        "from the Allora Network. Use get_price_prediction with ticker BTC or "
        "ETH and timeframe 5m or 8h, then explain the prediction in plain terms. "
        "If a tool fails, say that an error occurred and ask the user to check "
        "the parameters."
    ),
    required_settings=("rpc_provider_url", "allora_api_key"),
    providers=_allora_providers,
    selections=(
        SelectionPolicy(
            include_substrings=("allora", "price", "prediction"),
            strip_namespace=True,
            aliases=(
                AliasRule(
                    sources=("get_price_prediction", "price_prediction"),
                    target="get_price_prediction",
                ),
            ),
        ),
    ),
)

SWAP = Deployment(
    name="swap",
    system_prompt=(
        "You are a cryptocurrency assistant with access to DexScreener and "
        "Jupiter on Solana. Jupiter only accepts token mint addresses, so first "
        "use search_pairs to find the address of each token (search the token "
        "name paired with SOL), then call get_quote or swap with those addresses."
    ),
    required_settings=("rpc_provider_url",),
    providers=_swap_providers,
    selections=(
        SelectionPolicy(
            include_substrings=("jupiter", "quote", "swap"),
            strip_namespace=True,
            aliases=(
                AliasRule(sources=("get_quote", "quote"), target="get_quote"),
                AliasRule(sources=("swapTokens", "swap_tokens", "swap"), target="swap"),
            ),
        ),
        SelectionPolicy(
            allowed_names=frozenset({"dexscreener.search_pairs"}),
            strip_namespace=True,
        ),
    ),
    preconditions=(
        Precondition(
            capability="swap",
            required_args=("userPublicKey",),
            message=MISSING_PUBLIC_KEY_MESSAGE,
        ),
    ),
)

DEPLOYMENTS: dict[str, Deployment] = {
    deployment.name: deployment for deployment in (DEXSCREENER, COINGECKO, ALLORA, SWAP)
}


def get_deployment(name: str) -> Deployment:
    """Look up a deployment by name.

    Raises:
        ConfigurationError: If no deployment has that name
    """
    try:
        return DEPLOYMENTS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown deployment '{name}', expected one of: {', '.join(DEPLOYMENTS)}"
        ) from None


def check_settings(settings: BridgeSettings) -> Deployment:
    """Resolve the configured deployment and check its required settings.

    Raises:
        ConfigurationError: If the deployment is unknown or a required
                            setting is missing
    """
    deployment = get_deployment(settings.deployment)
    require_settings(settings, list(deployment.required_settings))
    return deployment


def create_bridge(settings: BridgeSettings) -> CapabilityBridge:
    """Validate settings and create the bridge for the configured deployment.

    Raises:
        ConfigurationError: If the deployment is unknown or a required
                            setting is missing
    """
    deployment = check_settings(settings)
    logger.info(
        f"Using deployment '{deployment.name}' on "
        f"{'Devnet' if settings.is_devnet else 'Mainnet'} configuration"
    )
    return CapabilityBridge(
        deployment=deployment,
        providers=deployment.providers(settings),
        timeout=settings.tool_timeout,
    )
