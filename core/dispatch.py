# =============================================================================
# core/dispatch.py  -  Meta-tool dispatch router
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Builds the single callable that backs a meta-tool.  At call time it
#   reads "action" from the arguments, picks the bound handler out of the
#   entry's dispatch table and forwards the whole call to it.
#
# THE THREE WAYS A CALL CAN FAIL HERE:
#   - "action" missing                   → MISSING_ACTION
#   - "action" not a non-empty string    → INVALID_ACTION
#   - "action" not in the dispatch table → "unknown action ..." listing the
#                                          actions this entry really has
#
#   In all three cases no handler runs and the caller gets an ordinary
#   error result, never an exception.
#
# WHAT THE ROUTER DOES NOT DO:
#   - It does not validate any other argument (that's the handler's job)
#   - It does not wrap, translate or retry handler results
#   - It keeps no state between calls; the table it closes over is read-only
# =============================================================================

from typing import Any, Callable, Mapping

from core.models import ActionResult, BoundHandler

ACTION_PARAM = "action"

MISSING_ACTION = "missing required parameter: action"
INVALID_ACTION = "parameter 'action' must be a non-empty string"
UNKNOWN_ACTION = "unknown action '{action}' for tool '{tool}'. Available actions: {available}"

MetaHandler = Callable[[Any, Mapping[str, Any]], ActionResult]


def make_meta_handler(tool_name: str, handlers: Mapping[str, BoundHandler]) -> MetaHandler:
    """Return the routing handler for one meta-tool.

    Args:
        tool_name: Name of the meta-tool, used in the unknown-action message.
        handlers: Action name → bound handler, already filtered for the
            current mode.  Its iteration order is the order reported back to
            the caller on an unknown action.

    Returns:
        A callable (ctx, arguments) -> ActionResult.
    """
    available = ", ".join(handlers)

    def route(ctx: Any, arguments: Mapping[str, Any]) -> ActionResult:
        if arguments is None or ACTION_PARAM not in arguments:
            return ActionResult.error(MISSING_ACTION)

        action = arguments[ACTION_PARAM]
        if not isinstance(action, str) or action == "":
            return ActionResult.error(INVALID_ACTION)

        handler = handlers.get(action)
        if handler is None:
            return ActionResult.error(
                UNKNOWN_ACTION.format(action=action, tool=tool_name, available=available)
            )

        return handler(ctx, arguments)

    route.__name__ = f"route_{tool_name}"
    return route
