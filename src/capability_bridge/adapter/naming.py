"""Conversion of provider tool names into capability names."""

NAMESPACE_SEPARATOR = "."
REPLACEMENT = "_"


def format_tool_name(name: str) -> str:
    """Format a provider-qualified tool name for the capability namespace.

    Every namespace separator is replaced with an underscore; all other
    characters pass through unchanged. Two distinct provider names can
    format to the same result, callers handle collisions.

    Args:
        name: Provider-qualified tool name (e.g. "dexscreener.search_pairs")

    Returns:
        The formatted name (e.g. "dexscreener_search_pairs")
    """
    return name.replace(NAMESPACE_SEPARATOR, REPLACEMENT)
