"""Observers around the outbound completion call.

Observers inspect the request that submits the capability set to the
completion backend. They are attached explicitly through observed() when the
completion client is created, and they never change what is sent or
returned.
"""

import functools
import json
import logging
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Protocol, Sequence, TypeVar

from capability_bridge.adapter.builder import MAX_DESCRIPTION_LENGTH

logger = logging.getLogger(__name__)

R = TypeVar("R")


class RequestObserver(Protocol):
    """Hook invoked around one outbound completion call."""

    def before_request(self, request: Mapping[str, Any]) -> None:
        """Inspect the request before it is sent."""
        ...

    def after_response(self, request: Mapping[str, Any], response: Any) -> None:
        """Inspect the response after it is received."""
        ...


def _request_body(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Mapping[str, Any]:
    """Extract the request body from a call's arguments as a read-only view."""
    if args and isinstance(args[0], Mapping):
        return MappingProxyType(dict(args[0]))
    return MappingProxyType(dict(kwargs))


def _notify(observer: RequestObserver, hook: str, *hook_args: Any) -> None:
    """Run an observer hook, logging instead of propagating its failure."""
    try:
        getattr(observer, hook)(*hook_args)
    except Exception as e:
        logger.warning(
            f"Request observer {type(observer).__name__}.{hook} failed: {e}"
        )


def observed(
    call: Callable[..., Awaitable[R]], observers: Sequence[RequestObserver]
) -> Callable[..., Awaitable[R]]:
    """Wrap an async completion call with a chain of observers.

    The wrapper delegates exactly once per invocation with the original
    arguments and returns the original result.

    Args:
        call: The async completion call to wrap
        observers: Observers invoked before and after the call, in order

    Returns:
        An async callable with the same signature as call
    """
    if not observers:
        return call

    @functools.wraps(call)
    async def wrapper(*args: Any, **kwargs: Any) -> R:
        request = _request_body(args, kwargs)
        for observer in observers:
            _notify(observer, "before_request", request)

        response = await call(*args, **kwargs)

        for observer in observers:
            _notify(observer, "after_response", request, response)
        return response

    return wrapper


class ToolListObserver:
    """Logs the capability set offered to the model.

    Flags every offered tool whose description still exceeds the safe
    length, and dumps the full list at debug level when verbose.

    Attributes:
        verbose: Whether to log the full tool list as JSON
        max_description_length: Length above which a description is flagged
    """

    def __init__(
        self,
        verbose: bool = False,
        max_description_length: int = MAX_DESCRIPTION_LENGTH,
    ) -> None:
        self.verbose = verbose
        self.max_description_length = max_description_length

    def before_request(self, request: Mapping[str, Any]) -> None:
        tools = request.get("tools")
        if not tools:
            return

        names = []
        for index, tool in enumerate(tools):
            function = tool.get("function", {}) if isinstance(tool, Mapping) else {}
            names.append(function.get("name", "?"))
            description = function.get("description") or ""
            if len(description) > self.max_description_length:
                logger.warning(
                    f"Tool at index {index} has description length {len(description)}"
                )

        logger.info(f"Completion request offers {len(names)} tools: {', '.join(names)}")
        if self.verbose:
            dump = json.dumps(list(tools), indent=2, default=str)
            logger.debug(f"Completion request tools:\n{dump}")

    def after_response(self, request: Mapping[str, Any], response: Any) -> None:
        pass
