"""
Tests for the static meta-tool catalog (tools/catalog.py).

Covers:
1. Group and action counts
2. Global uniqueness of group and action names
3. Every action points at the server method of the same name
4. Declared capability hints per group
"""

import pytest

from core.metatools import validate_catalog
from tools.catalog import meta_tool_definitions
from tools.mcp_server import PortainerMCPServer

EXPECTED_ACTION_COUNTS = {
    "manage_environments": 16,
    "manage_stacks": 13,
    "manage_access_groups": 7,
    "manage_users": 5,
    "manage_teams": 6,
    "manage_docker": 2,
    "manage_kubernetes": 5,
    "manage_helm": 8,
    "manage_registries": 5,
    "manage_templates": 7,
    "manage_backups": 5,
    "manage_webhooks": 3,
    "manage_edge": 6,
    "manage_settings": 5,
    "manage_system": 5,
}


@pytest.fixture(scope="module")
def groups():
    return meta_tool_definitions()


def test_fifteen_groups_in_declared_order(groups):
    assert [g.name for g in groups] == list(EXPECTED_ACTION_COUNTS)


def test_ninety_eight_actions_total(groups):
    assert sum(len(g.actions) for g in groups) == 98


@pytest.mark.parametrize("name,count", EXPECTED_ACTION_COUNTS.items())
def test_action_count_per_group(groups, name, count):
    group = next(g for g in groups if g.name == name)
    assert len(group.actions) == count


def test_action_names_globally_unique(groups):
    names = [a.name for g in groups for a in g.actions]
    assert len(names) == len(set(names))
    validate_catalog(groups)


def test_every_action_is_a_server_method(groups):
    for group in groups:
        for action in group.actions:
            assert action.handler.__name__ == action.name
            # no mixin shadows another one's handler
            assert getattr(PortainerMCPServer, action.name) is action.handler


def test_descriptions_tell_caller_about_action_param(groups):
    for group in groups:
        assert group.description.endswith("Use the 'action' parameter to specify the operation.")
        assert group.hints.title.startswith("Manage ")


def test_read_only_actions(groups):
    by_name = {a.name: a for g in groups for a in g.actions}
    assert by_name["list_users"].read_only
    assert by_name["get_kubernetes_resource_stripped"].read_only
    assert by_name["authenticate"].read_only
    assert not by_name["logout"].read_only
    assert not by_name["docker_proxy"].read_only
    assert not by_name["create_backup"].read_only
    assert sum(a.read_only for a in by_name.values()) == 44


def test_declared_hints(groups):
    hints = {g.name: g.hints for g in groups}

    for name in ("manage_docker", "manage_kubernetes"):
        assert hints[name].open_world
        assert hints[name].destructive

    assert not hints["manage_settings"].destructive
    assert hints["manage_settings"].idempotent
    assert not hints["manage_system"].destructive
    assert not hints["manage_system"].idempotent

    for name in ("manage_users", "manage_stacks", "manage_helm"):
        h = hints[name]
        assert (h.read_only, h.destructive, h.idempotent, h.open_world) == (False, True, False, False)
