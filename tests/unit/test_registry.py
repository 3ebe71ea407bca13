"""Unit tests for the ToolRegistry."""

import logging

import pytest


def test_empty_registry(registry):
    """Test that a new registry resolves nothing."""
    assert len(registry) == 0
    assert registry.resolve("anything") is None
    assert registry.names() == []


def test_register_and_resolve(registry, tool_factory):
    """Test that a registered tool resolves by its formatted name."""
    tool = tool_factory("dexscreener.search_pairs")
    registry.register("dexscreener_search_pairs", tool)

    assert registry.resolve("dexscreener_search_pairs") is tool
    assert "dexscreener_search_pairs" in registry
    assert len(registry) == 1


def test_resolve_is_exact_match(registry, tool_factory):
    """Test that lookup does not match case-insensitively or by prefix."""
    registry.register("search_pairs", tool_factory("dexscreener.search_pairs"))

    assert registry.resolve("Search_Pairs") is None
    assert registry.resolve("search") is None


def test_last_registration_wins(registry, tool_factory, caplog):
    """Test that re-registering a name shadows the earlier tool with a warning."""
    first = tool_factory("a.b")
    second = tool_factory("a_b")

    registry.register("a_b", first)
    with caplog.at_level(logging.WARNING):
        registry.register("a_b", second)

    assert registry.resolve("a_b") is second
    assert len(registry) == 1
    assert "now resolves to 'a_b'" in caplog.text


def test_reregistering_same_tool_does_not_warn(registry, tool_factory, caplog):
    """Test that registering the identical tool again is silent."""
    tool = tool_factory("dexscreener.search_pairs")

    registry.register("search_pairs", tool)
    with caplog.at_level(logging.WARNING):
        registry.register("search_pairs", tool)

    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_snapshot_is_read_only(registry, tool_factory):
    """Test that the published snapshot cannot be mutated."""
    registry.register("one", tool_factory("one"))
    snapshot = registry.snapshot()

    with pytest.raises(TypeError):
        snapshot["two"] = tool_factory("two")  # type: ignore[index]


def test_snapshot_unaffected_by_later_writes(registry, tool_factory):
    """Test that a snapshot taken earlier keeps its contents."""
    registry.register("one", tool_factory("one"))
    snapshot = registry.snapshot()

    registry.register("two", tool_factory("two"))

    assert list(snapshot) == ["one"]
    assert registry.names() == ["one", "two"]


def test_replace_swaps_all_entries(registry, tool_factory):
    """Test that replace() drops old entries and installs the new ones."""
    registry.register("old", tool_factory("old"))
    new_tool = tool_factory("new")

    registry.replace([("new", new_tool)])

    assert registry.resolve("old") is None
    assert registry.resolve("new") is new_tool
    assert registry.names() == ["new"]
