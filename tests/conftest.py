"""Shared fixtures: a mocked Portainer client and a server factory."""

from unittest.mock import MagicMock

import pytest

from core.config import ServerConfig
from core.models import Action, ActionResult, ToolGroup, ToolHints
from core.portainer_client import PortainerClient
from tools.mcp_server import PortainerMCPServer


def make_config(**overrides) -> ServerConfig:
    values = {"server_url": "https://portainer.test:9443", "token": "ptr_test"}
    values.update(overrides)
    return ServerConfig(**values)


@pytest.fixture
def client():
    """A PortainerClient stand-in; every method is a MagicMock."""
    return MagicMock(spec=PortainerClient)


@pytest.fixture
def make_server(client):
    """Factory: make_server(read_only=..., granular_tools=..., groups=...)."""

    def _make(groups=None, **overrides):
        server = PortainerMCPServer(make_config(**overrides), client=client, groups=groups)
        return server.register_tools()

    return _make


@pytest.fixture
def server(make_server):
    return make_server()


# ============================================================================
# A tiny catalog for routing and filtering scenarios
# ============================================================================

def _echo(label):
    def handler(server, ctx, arguments):
        return ActionResult.ok(f"{label}:{sorted(arguments)}")

    handler.__name__ = label
    return handler


@pytest.fixture
def users_group():
    """One group, one read action and one write action."""
    return ToolGroup(
        name="users",
        description="Manage users.",
        actions=(
            Action("list_users", _echo("list_users"), read_only=True),
            Action("create_user", _echo("create_user")),
        ),
        hints=ToolHints(title="Users"),
    )


@pytest.fixture
def writes_only_group():
    return ToolGroup(
        name="maintenance",
        description="Write-only group.",
        actions=(
            Action("wipe", _echo("wipe")),
            Action("rebuild", _echo("rebuild")),
        ),
        hints=ToolHints(title="Maintenance"),
    )
