"""Tests for the meta-tool router (core/dispatch.py)."""

from unittest.mock import MagicMock

import pytest

from core.dispatch import INVALID_ACTION, MISSING_ACTION, make_meta_handler
from core.metatools import build_entries
from core.models import ActionResult


@pytest.fixture
def handlers():
    return {
        "list_users": MagicMock(return_value=ActionResult.ok("[]")),
        "create_user": MagicMock(return_value=ActionResult.error("failed to create user: 409 Conflict")),
    }


def test_routes_to_named_handler(handlers):
    route = make_meta_handler("manage_users", handlers)
    ctx = object()
    args = {"action": "list_users"}

    assert route(ctx, args) == ActionResult.ok("[]")
    handlers["list_users"].assert_called_once_with(ctx, args)
    handlers["create_user"].assert_not_called()


def test_forwards_all_arguments_including_action(handlers):
    route = make_meta_handler("manage_users", handlers)
    args = {"action": "create_user", "username": "bob", "password": "pw", "role": "user"}

    route(None, args)

    assert handlers["create_user"].call_args.args[1] == args


def test_handler_error_passes_through_unchanged(handlers):
    route = make_meta_handler("manage_users", handlers)
    result = route(None, {"action": "create_user"})
    assert result is handlers["create_user"].return_value


@pytest.mark.parametrize("arguments", [{}, None, {"username": "bob"}])
def test_missing_action(handlers, arguments):
    route = make_meta_handler("manage_users", handlers)

    result = route(None, arguments)

    assert result == ActionResult.error(MISSING_ACTION)
    assert result.text == "missing required parameter: action"
    for h in handlers.values():
        h.assert_not_called()


@pytest.mark.parametrize("value", ["", 42, None, ["list_users"], True])
def test_invalid_action_value(handlers, value):
    route = make_meta_handler("manage_users", handlers)

    result = route(None, {"action": value})

    assert result.is_error
    assert result.text == INVALID_ACTION
    for h in handlers.values():
        h.assert_not_called()


def test_unknown_action_lists_available(handlers):
    route = make_meta_handler("manage_users", handlers)

    result = route(None, {"action": "drop_database"})

    assert result.is_error
    assert result.text == (
        "unknown action 'drop_database' for tool 'manage_users'. "
        "Available actions: list_users, create_user"
    )


def test_action_hidden_in_read_only_mode_is_unknown(users_group):
    entry = build_entries([users_group], True, object())[0]
    route = make_meta_handler(entry.name, entry.handlers)

    result = route(None, {"action": "create_user", "username": "eve"})

    assert result.is_error
    assert result.text == "unknown action 'create_user' for tool 'users'. Available actions: list_users"


def test_missing_action_on_real_entry_runs_nothing(users_group):
    entry = build_entries([users_group], False, object())[0]
    route = make_meta_handler(entry.name, entry.handlers)

    assert route(None, {}).text == MISSING_ACTION


def test_route_is_named_after_tool(handlers):
    assert make_meta_handler("manage_users", handlers).__name__ == "route_manage_users"
