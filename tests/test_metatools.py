"""
Tests for core/metatools.py and the MetaToolEntry model.

Covers mode filtering, hint resolution and entry building, both on the real
catalog and on the small fixture groups from conftest.py.
"""

from types import MappingProxyType

import pytest

from core.metatools import (
    CatalogError,
    build_entries,
    filter_actions,
    resolve_hints,
    validate_catalog,
)
from core.models import Action, ActionResult, ToolGroup, ToolHints
from tools.catalog import meta_tool_definitions

SERVER = object()


def _noop(server, ctx, arguments):
    return ActionResult.ok("ok")


# ============================================================================
# Filtering over the full catalog
# ============================================================================

@pytest.mark.parametrize("read_only", [False, True])
def test_filter_keeps_exactly_permitted_actions(read_only):
    for group in meta_tool_definitions():
        expected = [a.name for a in group.actions if not read_only or a.read_only]
        assert [a.name for a in filter_actions(group, read_only)] == expected


@pytest.mark.parametrize("read_only", [False, True])
def test_entries_match_filter(read_only):
    groups = meta_tool_definitions()
    entries = {e.name: e for e in build_entries(groups, read_only, SERVER)}
    for group in groups:
        expected = [a.name for a in group.actions if not read_only or a.read_only]
        if not expected:
            assert group.name not in entries
            continue
        entry = entries[group.name]
        assert list(entry.action_names) == expected
        assert list(entry.handlers) == expected
        assert entry.input_schema()["properties"]["action"]["enum"] == expected


def test_read_only_mode_keeps_all_fifteen_groups():
    entries = build_entries(meta_tool_definitions(), True, SERVER)
    assert len(entries) == 15
    assert sum(len(e.action_names) for e in entries) == 44


def test_read_only_entries_advertise_read_only_hints():
    for entry in build_entries(meta_tool_definitions(), True, SERVER):
        assert entry.hints.read_only
        assert not entry.hints.destructive


def test_full_mode_entries_keep_declared_hints():
    groups = {g.name: g for g in meta_tool_definitions()}
    for entry in build_entries(list(groups.values()), False, SERVER):
        assert entry.hints == groups[entry.name].hints


# ============================================================================
# Hint resolution
# ============================================================================

def test_resolve_hints_forces_read_only_and_keeps_the_rest():
    hints = ToolHints(title="Docker", destructive=True, idempotent=True, open_world=True)
    group = ToolGroup("docker", "d", (Action("get_dashboard", _noop, read_only=True),), hints)

    resolved = resolve_hints(group, group.actions)

    assert resolved.read_only is True
    assert resolved.destructive is False
    assert resolved.title == "Docker"
    assert resolved.idempotent is True
    assert resolved.open_world is True


def test_resolve_hints_mixed_actions_use_declared():
    hints = ToolHints(title="Mixed")
    group = ToolGroup("mixed", "m", (
        Action("read", _noop, read_only=True),
        Action("write", _noop),
    ), hints)
    assert resolve_hints(group, group.actions) is hints


# ============================================================================
# Scenarios on a one-group catalog
# ============================================================================

def test_users_group_read_only(users_group):
    entries = build_entries([users_group], True, SERVER)

    assert len(entries) == 1
    entry = entries[0]
    assert entry.action_names == ("list_users",)
    assert entry.hints.read_only and not entry.hints.destructive


def test_users_group_full_mode(users_group):
    entry = build_entries([users_group], False, SERVER)[0]

    assert entry.action_names == ("list_users", "create_user")
    assert entry.hints == users_group.hints
    assert not entry.hints.read_only


def test_write_only_group_skipped_in_read_only_mode(users_group, writes_only_group):
    entries = build_entries([users_group, writes_only_group], True, SERVER)
    assert [e.name for e in entries] == ["users"]


def test_write_only_group_present_in_full_mode(writes_only_group):
    entries = build_entries([writes_only_group], False, SERVER)
    assert entries[0].action_names == ("wipe", "rebuild")


# ============================================================================
# Entries
# ============================================================================

def test_entry_handlers_are_bound_to_the_server(users_group):
    entry = build_entries([users_group], False, SERVER)[0]
    result = entry.handlers["list_users"](None, {"action": "list_users"})
    assert result == ActionResult.ok("list_users:['action']")


def test_entry_dispatch_table_is_read_only(users_group):
    entry = build_entries([users_group], False, SERVER)[0]
    assert isinstance(entry.handlers, MappingProxyType)
    with pytest.raises(TypeError):
        entry.handlers["sneaky"] = _noop


def test_input_schema_shape(users_group):
    entry = build_entries([users_group], False, SERVER)[0]
    schema = entry.input_schema()

    assert schema["type"] == "object"
    assert schema["required"] == ["action"]
    action = schema["properties"]["action"]
    assert action["type"] == "string"
    assert action["enum"] == ["list_users", "create_user"]
    assert action["description"] == "The operation to perform. Available actions: list_users, create_user"


# ============================================================================
# Catalog validation
# ============================================================================

def test_duplicate_action_across_groups_rejected():
    a = ToolGroup("a", "a", (Action("shared", _noop, read_only=True),), ToolHints(title="A"))
    b = ToolGroup("b", "b", (Action("shared", _noop),), ToolHints(title="B"))

    with pytest.raises(CatalogError, match="duplicate action 'shared'"):
        validate_catalog([a, b])


def test_duplicate_action_inside_group_rejected():
    g = ToolGroup("g", "g", (Action("x", _noop), Action("x", _noop)), ToolHints(title="G"))
    with pytest.raises(CatalogError):
        build_entries([g], False, SERVER)


def test_duplicate_group_name_rejected():
    a = ToolGroup("same", "a", (Action("one", _noop),), ToolHints(title="A"))
    b = ToolGroup("same", "b", (Action("two", _noop),), ToolHints(title="B"))
    with pytest.raises(CatalogError, match="duplicate meta-tool name 'same'"):
        validate_catalog([a, b])


def test_validation_runs_before_filtering():
    # the clash is between two write actions, invisible in read-only mode
    a = ToolGroup("a", "a", (Action("clash", _noop),), ToolHints(title="A"))
    b = ToolGroup("b", "b", (Action("clash", _noop),), ToolHints(title="B"))
    with pytest.raises(CatalogError):
        build_entries([a, b], True, SERVER)
