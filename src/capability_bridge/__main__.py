"""CLI entry point for capability-bridge.

This module provides the command-line interface. It can be invoked as
`capability-bridge` (via the script entry point) or
`python -m capability_bridge`. Without --query it serves the API with
uvicorn; with --query it runs one conversational turn and prints the answer.
"""

import argparse
import asyncio
import logging
import sys

import uvicorn

from capability_bridge import __version__, create_app
from capability_bridge.adapter.observer import ToolListObserver
from capability_bridge.config import BridgeSettings, load_settings
from capability_bridge.deployments import DEPLOYMENTS, check_settings, create_bridge
from capability_bridge.errors import BridgeError, ConfigurationError
from capability_bridge.host import AgentHost, CompletionError
from capability_bridge.ollama import OllamaClient

logger = logging.getLogger(__name__)


async def run_query(settings: BridgeSettings, query: str) -> str:
    """Set up the deployment and run a single turn for a query.

    Args:
        settings: Loaded settings
        query: User message for the turn

    Returns:
        str: The final assistant answer

    Raises:
        ConfigurationError: If a required setting is missing
        DiscoveryError: If tool discovery fails
    """
    bridge = create_bridge(settings)
    ollama_client = OllamaClient(
        host=settings.ollama_host,
        observers=[ToolListObserver(verbose=settings.verbose_requests)],
    )
    try:
        host = AgentHost(
            completion_client=ollama_client,
            model=settings.model,
            system_prompt=bridge.deployment.system_prompt,
            max_tool_rounds=settings.max_tool_rounds,
        )
        host.add_capabilities(await bridge.build())

        logger.info(f"Processing user query: {query}")
        result = await host.process([{"role": "user", "content": query}])
        return result.content
    finally:
        await bridge.close()
        await ollama_client.close()


def main() -> int:
    """Main entry point for the capability-bridge CLI.

    Returns:
        int: Process exit status
    """
    parser = argparse.ArgumentParser(
        prog="capability-bridge",
        description="Agent host exposing market-data and swap tools as capabilities",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"capability-bridge {__version__}",
    )

    parser.add_argument(
        "--deployment",
        type=str,
        default=None,
        choices=sorted(DEPLOYMENTS),
        help="Deployment to serve (default: dexscreener, can be set via BRIDGE_DEPLOYMENT)",
    )

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the server to (default: 127.0.0.1, can be set via BRIDGE_HOST)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server to (default: 8000, can be set via BRIDGE_PORT)",
    )

    parser.add_argument(
        "--ollama-host",
        type=str,
        default=None,
        help="Ollama server URL (default: http://localhost:11434, can be set via BRIDGE_OLLAMA_HOST)",
    )

    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Model used for completions (can be set via BRIDGE_MODEL)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via BRIDGE_LOG_LEVEL)",
    )

    parser.add_argument(
        "--query",
        type=str,
        default=None,
        help="Run a single conversational turn for this query and exit",
    )

    args = parser.parse_args()

    # Build settings, CLI args override environment variables
    settings_kwargs = {}
    if args.deployment is not None:
        settings_kwargs["deployment"] = args.deployment
    if args.host is not None:
        settings_kwargs["host"] = args.host
    if args.port is not None:
        settings_kwargs["port"] = args.port
    if args.ollama_host is not None:
        settings_kwargs["ollama_host"] = args.ollama_host
    if args.model is not None:
        settings_kwargs["model"] = args.model
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level

    try:
        settings = load_settings(**settings_kwargs)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.query is not None:
        try:
            answer = asyncio.run(run_query(settings, args.query))
        except ConfigurationError as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            return 2
        except (BridgeError, CompletionError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"Agent Response: {answer}")
        return 0

    # Fail fast on missing settings before uvicorn starts
    try:
        check_settings(settings)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
