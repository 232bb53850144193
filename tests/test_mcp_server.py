"""
End-to-end tests through FastMCP's in-memory client.

These drive the registered tools exactly as an MCP client would: list the
tools, read their schema and annotations, call them and look at isError.
"""

import asyncio
import base64
import json
import logging

from fastmcp import Client

from core.models import ToolHints
from core.portainer_client import PortainerAPIError
from tools.mcp_server import describe_tools, to_annotations


def list_tools(server):
    async def _run():
        async with Client(server.mcp) as c:
            return await c.list_tools()

    return {t.name: t for t in asyncio.run(_run())}


def call(server, tool, arguments):
    async def _run():
        async with Client(server.mcp) as c:
            return await c.call_tool(tool, arguments, raise_on_error=False)

    return asyncio.run(_run())


# ============================================================================
# Registration
# ============================================================================

def test_meta_mode_registers_fifteen_tools(server):
    tools = list_tools(server)

    assert len(tools) == 15
    users = tools["manage_users"]
    assert users.description == "Manage Portainer users. Use the 'action' parameter to specify the operation."
    action = users.inputSchema["properties"]["action"]
    assert action["enum"] == ["list_users", "get_user", "create_user", "delete_user", "update_user_role"]
    assert users.inputSchema["required"] == ["action"]


def test_meta_mode_annotations(server):
    tools = list_tools(server)

    users = tools["manage_users"].annotations
    assert users.title == "Manage Users"
    assert users.readOnlyHint is False
    assert users.destructiveHint is True

    docker = tools["manage_docker"].annotations
    assert docker.openWorldHint is True

    settings = tools["manage_settings"].annotations
    assert settings.destructiveHint is False
    assert settings.idempotentHint is True


def test_read_only_mode_hides_write_actions(make_server):
    server = make_server(read_only=True)
    tools = list_tools(server)

    assert len(tools) == 15
    users = tools["manage_users"]
    assert users.inputSchema["properties"]["action"]["enum"] == ["list_users", "get_user"]
    assert users.annotations.readOnlyHint is True
    assert users.annotations.destructiveHint is False

    system = tools["manage_system"].inputSchema["properties"]["action"]["enum"]
    assert "logout" not in system
    assert "authenticate" in system


def test_read_only_mode_dispatch_tables_match_enums(make_server):
    server = make_server(read_only=True)
    for entry in server.entries:
        assert tuple(entry.handlers) == entry.action_names
        assert "create_user" not in entry.handlers


def test_granular_mode_registers_one_tool_per_action(make_server):
    tools = list_tools(make_server(granular_tools=True))

    assert len(tools) == 98
    assert "manage_users" not in tools
    assert tools["delete_user"].annotations.destructiveHint is True
    assert tools["list_users"].annotations.readOnlyHint is True


def test_granular_read_only_mode(make_server):
    tools = list_tools(make_server(granular_tools=True, read_only=True))

    assert len(tools) == 44
    assert "create_user" not in tools
    assert "docker_proxy" not in tools


# ============================================================================
# Calls
# ============================================================================

def test_call_routes_to_handler(server, client):
    client.list_users.return_value = [{"Id": 1, "Username": "admin", "Role": 1}]

    result = call(server, "manage_users", {"action": "list_users"})

    assert not result.is_error
    assert json.loads(result.content[0].text) == [{"id": 1, "username": "admin", "role": "admin"}]


def test_call_forwards_extra_arguments(server, client):
    client.get_team.return_value = {"Id": 5, "Name": "ops"}
    client.list_team_memberships.return_value = []

    result = call(server, "manage_teams", {"action": "get_team", "id": 5})

    assert not result.is_error
    client.get_team.assert_called_once_with(5)


def test_handler_error_is_a_tool_error(server, client):
    result = call(server, "manage_users", {"action": "get_user"})

    assert result.is_error
    assert "invalid id parameter: id is required" in result.content[0].text


def test_portainer_error_is_a_tool_error(server, client):
    client.delete_user.side_effect = PortainerAPIError(404, "User not found")

    result = call(server, "manage_users", {"action": "delete_user", "id": 9})

    assert result.is_error
    assert "failed to delete user: 404 User not found" in result.content[0].text


def test_jwt_never_reaches_the_log(server, client, caplog):
    caplog.set_level(logging.INFO)
    client.authenticate.return_value = "eyJhbGciOiJIUzI1NiJ9.session"

    result = call(server, "manage_system", {"action": "authenticate", "username": "admin", "password": "pw"})

    assert not result.is_error
    assert "eyJhbGciOiJIUzI1NiJ9.session" in result.content[0].text
    assert "eyJhbGciOiJIUzI1NiJ9.session" not in caplog.text
    assert "pw'" not in caplog.text
    assert "manage_system response: <" in caplog.text


def test_backup_archive_never_reaches_the_log(make_server, client, caplog):
    caplog.set_level(logging.INFO)
    client.create_backup.return_value = b"archive-bytes"
    server = make_server(granular_tools=True)

    result = call(server, "create_backup", {})

    assert not result.is_error
    assert base64.b64encode(b"archive-bytes").decode() not in caplog.text
    assert "redacted" in caplog.text


def test_ordinary_response_is_logged(server, client, caplog):
    caplog.set_level(logging.INFO)
    client.get_motd.return_value = {"Title": "Hello", "Message": "world"}

    call(server, "manage_system", {"action": "get_motd"})

    assert "Hello" in caplog.text


def test_granular_tool_call(make_server, client):
    client.get_motd.return_value = {"Title": "Hello", "Message": "world"}
    server = make_server(granular_tools=True)

    result = call(server, "get_motd", {})

    assert not result.is_error
    assert json.loads(result.content[0].text) == {"title": "Hello", "message": "world"}


# ============================================================================
# Helpers
# ============================================================================

def test_to_annotations():
    a = to_annotations(ToolHints(title="X", read_only=True, destructive=False, idempotent=True, open_world=True))
    assert (a.title, a.readOnlyHint, a.destructiveHint, a.idempotentHint, a.openWorldHint) == (
        "X", True, False, True, True,
    )


def test_describe_tools(make_server):
    described = json.loads(describe_tools(make_server(read_only=True)))
    users = next(d for d in described if d["name"] == "manage_users")
    assert users == {"name": "manage_users", "actions": ["list_users", "get_user"], "read_only": True}


def test_describe_tools_granular_mode(make_server):
    described = json.loads(describe_tools(make_server(granular_tools=True, read_only=True)))

    assert len(described) == 44
    assert {"name": "list_users", "actions": ["list_users"], "read_only": True} in described
    assert all(d["read_only"] for d in described)
