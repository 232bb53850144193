# =============================================================================
# tools/mcp_server.py  -  FastMCP server exposing Portainer as meta-tools
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the FastMCP server and registers Portainer's operations on it,
#   either grouped (one tool per feature area, "action" picks the operation)
#   or granular (one tool per operation).
#
# HOW A CALL FLOWS:
#   1. The client calls a tool by name, e.g. "manage_users",
#      with {"action": "list_users", ...}
#   2. FastMCP hands the arguments to MetaTool.run()
#   3. MetaTool.run() runs the routing handler from core/dispatch.py in a
#      worker thread (handlers block on HTTP)
#   4. The router picks UserHandlers.list_users, bound to this server,
#      which calls Portainer through self.client
#   5. The ActionResult comes back: text on success, ToolError on failure,
#      so the client sees isError=True either way the call went wrong
#
# READ-ONLY MODE:
#   Decided once, at startup.  Write actions are not disabled, they are
#   never registered: they are missing from the "action" enum and from the
#   dispatch table alike.
#
# RUNNING THIS SERVER:
#   python main.py --server https://portainer:9443 --token ptr_xxx [--read-only]
#   The server speaks MCP over stdio.
# =============================================================================

import asyncio
import json
import logging
import sys
from typing import Any, Callable

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.dependencies import get_context
from fastmcp.tools.tool import Tool, ToolResult
from mcp.types import ToolAnnotations

from core.config import ServerConfig
from core.dispatch import make_meta_handler
from core.metatools import build_entries, filter_actions, validate_catalog
from core.models import ActionResult, MetaToolEntry, ToolGroup, ToolHints
from core.portainer_client import PortainerClient
from tools.catalog import meta_tool_definitions
from tools.handlers import (
    AccessGroupHandlers,
    BackupHandlers,
    DockerHandlers,
    EdgeHandlers,
    EnvironmentHandlers,
    HelmHandlers,
    KubernetesHandlers,
    RegistryHandlers,
    SettingsHandlers,
    StackHandlers,
    SystemHandlers,
    TeamHandlers,
    TemplateHandlers,
    UserHandlers,
    WebhookHandlers,
)

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because stdout IS the MCP transport.  Anything printed
# there would corrupt the JSON-RPC stream and the client would drop us.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool, action, parameters)
#     - GREEN for successful responses
#     - YELLOW for status messages and error results
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)

# Parameters never echoed to the log.
_SECRET_PARAMS = {"password", "secretAccessKey", "token", "key"}

# Actions whose successful response carries credentials or archives.
_SECRET_RESPONSES = {"authenticate", "create_backup", "get_kubernetes_config"}

# Longest response payload echoed to the log.
_MAX_LOGGED_RESPONSE = 500


def _log_request(tool_name: str, params: dict) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(
        f"{k}={'***' if k in _SECRET_PARAMS else repr(v)}" for k, v in params.items()
    )
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: ActionResult, redact: bool = False) -> ActionResult:
    """Log the result, truncated or redacted, then return it unchanged."""
    text = result.text
    if redact and not result.is_error:
        text = f"<{len(result.text)} chars redacted>"
    elif len(text) > _MAX_LOGGED_RESPONSE:
        text = text[:_MAX_LOGGED_RESPONSE] + f"... ({len(result.text)} chars)"
    if result.is_error:
        logging.info(f"{_YELLOW}  ← {tool_name} error: {text}{_RESET}")
    else:
        logging.info(f"{_GREEN}  ← {tool_name} response: {text}{_RESET}")
    return result


# =============================================================================
# FastMCP adapter
# =============================================================================

def to_annotations(hints: ToolHints) -> ToolAnnotations:
    """Convert our capability hints into MCP tool annotations."""
    return ToolAnnotations(
        title=hints.title,
        readOnlyHint=hints.read_only,
        destructiveHint=hints.destructive,
        idempotentHint=hints.idempotent,
        openWorldHint=hints.open_world,
    )


def _current_context() -> Any:
    # Handlers get the live request context when there is one.
    try:
        return get_context()
    except RuntimeError:
        return None


class MetaTool(Tool):
    """A FastMCP tool backed by a blocking (ctx, arguments) -> ActionResult callable."""

    handler: Callable[..., Any]

    @classmethod
    def from_entry(cls, entry: MetaToolEntry) -> "MetaTool":
        return cls(
            name=entry.name,
            description=entry.description,
            parameters=entry.input_schema(),
            annotations=to_annotations(entry.hints),
            handler=make_meta_handler(entry.name, entry.handlers),
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        arguments = arguments or {}
        _log_request(self.name, arguments)
        ctx = _current_context()
        result = await asyncio.to_thread(self.handler, ctx, arguments)
        redact = {self.name, str(arguments.get("action"))} & _SECRET_RESPONSES
        _log_response(self.name, result, redact=bool(redact))
        if result.is_error:
            raise ToolError(result.text)
        return ToolResult(content=result.text)


# Flat schema for granular tools: every argument is forwarded untouched.
GRANULAR_SCHEMA = {"type": "object", "properties": {}, "additionalProperties": True}


# =============================================================================
# The server
# =============================================================================

class PortainerMCPServer(
    EnvironmentHandlers,
    StackHandlers,
    AccessGroupHandlers,
    UserHandlers,
    TeamHandlers,
    DockerHandlers,
    KubernetesHandlers,
    HelmHandlers,
    RegistryHandlers,
    TemplateHandlers,
    BackupHandlers,
    WebhookHandlers,
    EdgeHandlers,
    SettingsHandlers,
    SystemHandlers,
):
    """Portainer MCP server: owns the FastMCP instance, the client and the tools.

    Args:
        config: Validated server configuration.
        client: Portainer client; built from `config` when omitted.
        groups: Tool catalog; the full Portainer catalog when omitted.
    """

    def __init__(
        self,
        config: ServerConfig,
        client: PortainerClient | None = None,
        groups: list[ToolGroup] | None = None,
    ):
        self.config = config
        self.client = client if client is not None else PortainerClient.from_config(config)
        self.groups = groups if groups is not None else meta_tool_definitions()
        self.mcp = FastMCP("portainer-mcp")
        self.entries: list[MetaToolEntry] = []

    def register_tools(self) -> "PortainerMCPServer":
        """Register meta-tools, or granular tools when configured so."""
        if self.config.granular_tools:
            self.register_granular_tools()
        else:
            self.register_meta_tools()
        return self

    def register_meta_tools(self) -> None:
        self.entries = build_entries(self.groups, self.config.read_only, self)
        for entry in self.entries:
            self.mcp.add_tool(MetaTool.from_entry(entry))
        _log_status(
            f"Registered {len(self.entries)} meta-tools, "
            f"{sum(len(e.action_names) for e in self.entries)} actions "
            f"(read_only={self.config.read_only})"
        )

    def register_granular_tools(self) -> None:
        """One tool per action, same read-only filter as the meta-tools."""
        validate_catalog(self.groups)
        count = 0
        for group in self.groups:
            for action in filter_actions(group, self.config.read_only):
                hints = group.hints.as_read_only() if action.read_only else group.hints
                self.mcp.add_tool(MetaTool(
                    name=action.name,
                    description=f"{action.name.replace('_', ' ').capitalize()} "
                                f"({group.hints.title.lower()}).",
                    parameters=dict(GRANULAR_SCHEMA),
                    annotations=to_annotations(hints),
                    handler=action.bind(self),
                ))
                count += 1
        _log_status(f"Registered {count} granular tools (read_only={self.config.read_only})")

    def run(self) -> None:
        """Serve MCP over stdio until the client disconnects."""
        self.mcp.run()


def create_server(config: ServerConfig, client: PortainerClient | None = None) -> PortainerMCPServer:
    """Build a server with its tools already registered."""
    return PortainerMCPServer(config, client=client).register_tools()


def describe_tools(server: PortainerMCPServer) -> str:
    """JSON summary of the registered tools, for --list-tools."""
    if server.config.granular_tools:
        described = [
            {"name": action.name, "actions": [action.name], "read_only": action.read_only}
            for group in server.groups
            for action in filter_actions(group, server.config.read_only)
        ]
    else:
        described = [
            {
                "name": e.name,
                "actions": list(e.action_names),
                "read_only": e.hints.read_only,
            }
            for e in server.entries
        ]
    return json.dumps(described, indent=2)


__all__ = [
    "GRANULAR_SCHEMA",
    "MetaTool",
    "PortainerMCPServer",
    "create_server",
    "describe_tools",
    "to_annotations",
]
