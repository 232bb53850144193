# =============================================================================
# tools/handlers/base.py  -  Shared plumbing for the action handlers
# =============================================================================
#
# Every handler method has the same outer shape, (self, ctx, arguments) ->
# ActionResult, and the same two failure modes:
#   - a bad argument       → "invalid <param> parameter: <reason>"
#   - Portainer said no    → "failed to <do thing>: <error>"
#
# The @action_handler decorator owns both, so a handler body only reads its
# arguments, calls the client and formats the answer.
# =============================================================================

import functools
import json
from typing import Any, Callable, Mapping

from core.arguments import InvalidParameterError, ToolArguments
from core.models import ActionResult
from core.portainer_client import PortainerAPIError, PortainerClient


class HandlerBase:
    """Base for the handler mixins; the server supplies `client`."""

    client: PortainerClient


def action_handler(failure: str) -> Callable:
    """Wrap a handler body taking ToolArguments into the (ctx, arguments) contract.

    Args:
        failure: Prefix used when the Portainer call fails,
            e.g. "failed to get users".
    """

    def decorate(fn: Callable[[Any, Any, ToolArguments], ActionResult]):
        @functools.wraps(fn)
        def wrapper(self, ctx: Any, arguments: Mapping[str, Any]) -> ActionResult:
            try:
                return fn(self, ctx, ToolArguments(arguments))
            except InvalidParameterError as e:
                return ActionResult.error(f"invalid {e.param} parameter: {e.reason}")
            except PortainerAPIError as e:
                return ActionResult.error_from(failure, e)

        return wrapper

    return decorate


def json_result(obj: Any) -> ActionResult:
    """Serialize a handler's answer as compact JSON text."""
    return ActionResult.ok(json.dumps(obj, separators=(",", ":"), default=str))
