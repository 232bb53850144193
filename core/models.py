# =============================================================================
# core/models.py  -  Data Models for grouped meta-tools
# =============================================================================
#
# These dataclasses define the shape of everything the meta-tool engine
# handles: the static catalog (ToolGroup / Action), the capability hints
# surfaced to the caller (ToolHints), the registered entry built at startup
# (MetaToolEntry), and the result every handler returns (ActionResult).
#
# All of them are frozen.  The catalog is declared once, entries are built
# once during registration, and after that the server only reads them,
# concurrently, from every request.
#
# Nothing here imports FastMCP.  The tools/ layer converts ToolHints into
# MCP ToolAnnotations and ActionResult into an MCP tool result.
# =============================================================================

from dataclasses import dataclass, field, replace
from functools import partial
from types import MappingProxyType
from typing import Any, Callable, Mapping

# A handler bound to a live server: (ctx, arguments) -> ActionResult.
# ctx is the request context of the surrounding MCP server, passed through
# untouched so the handler can honor cancellation if it wants to.
BoundHandler = Callable[[Any, Mapping[str, Any]], "ActionResult"]


# -----------------------------------------------------------------------------
# ActionResult - what every handler (and the dispatch router) returns
# -----------------------------------------------------------------------------
# Failures are values, not exceptions.  A caller typo in "action" and a 404
# from Portainer both come back as ActionResult(is_error=True); only the
# message prefix tells them apart.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ActionResult:
    """The outcome of one tool call: text payload plus an error flag."""

    text: str
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> "ActionResult":
        return cls(text=text)

    @classmethod
    def error(cls, message: str) -> "ActionResult":
        return cls(text=message, is_error=True)

    @classmethod
    def error_from(cls, message: str, exc: BaseException) -> "ActionResult":
        """Error result carrying the cause, e.g. "failed to get users: 404 Not Found"."""
        return cls(text=f"{message}: {exc}", is_error=True)


# -----------------------------------------------------------------------------
# ToolHints - capability metadata shown to the caller
# -----------------------------------------------------------------------------
# Maps 1:1 onto MCP ToolAnnotations.  These are descriptions, not rules:
# nothing in the server refuses a call because read_only is True.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolHints:
    """Capability hints attached to a registered tool."""

    title: str
    read_only: bool = False            # readOnlyHint: no side effects
    destructive: bool = True           # destructiveHint: may destroy data
    idempotent: bool = False           # idempotentHint: repeating is safe
    open_world: bool = False           # openWorldHint: talks to an open external system

    def as_read_only(self) -> "ToolHints":
        """The conservative read-only variant of these hints."""
        return replace(self, read_only=True, destructive=False)


# -----------------------------------------------------------------------------
# Action - one granular operation inside a group
# -----------------------------------------------------------------------------
# handler is an UNBOUND method of one of the handler mixins (for example
# UserHandlers.list_users).  It is bound to a server instance only when the
# server registers its tools, see bind().
#
# read_only doubles as "visible in read-only mode": actions with
# read_only=False disappear from the server entirely when the read-only flag
# is set.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Action:
    """A named sub-operation reachable through its group's "action" parameter."""

    name: str
    handler: Callable[..., ActionResult]
    read_only: bool = False

    def bind(self, server: Any) -> BoundHandler:
        """Fix the handler to one server: the result takes (ctx, arguments)."""
        return partial(self.handler, server)


# -----------------------------------------------------------------------------
# ToolGroup - one meta-tool as declared in the catalog
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolGroup:
    """A static group of related actions exposed as a single meta-tool."""

    name: str
    description: str
    actions: tuple[Action, ...]
    hints: ToolHints


# -----------------------------------------------------------------------------
# MetaToolEntry - a group after mode filtering, ready to be registered
# -----------------------------------------------------------------------------
# Derived from (ToolGroup, read-only flag) at startup.  handlers is a
# read-only snapshot, so a registered entry can never see actions that were
# filtered out, even if somebody mutated a dict they still hold.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class MetaToolEntry:
    """A registrable meta-tool: name, description, action enum, hints, dispatch table."""

    name: str
    description: str
    action_names: tuple[str, ...]
    hints: ToolHints
    handlers: Mapping[str, BoundHandler] = field(default_factory=lambda: MappingProxyType({}))

    def action_description(self) -> str:
        return "The operation to perform. Available actions: " + ", ".join(self.action_names)

    def input_schema(self) -> dict[str, Any]:
        """JSON schema with the single required, enumerated "action" parameter.

        Sub-operation arguments are not declared here; they travel next to
        "action" and are forwarded to the handler as-is, hence
        additionalProperties is left open.
        """
        return {
            "type": "object",
            "properties": {
                "action": {
                    "type": "string",
                    "description": self.action_description(),
                    "enum": list(self.action_names),
                },
            },
            "required": ["action"],
            "additionalProperties": True,
        }
