# =============================================================================
# tools/handlers/docker.py  -  Docker dashboard and Docker API proxy
# =============================================================================

from core.arguments import InvalidParameterError, parse_key_value_map, validate_positive_id
from core.models import ActionResult
from tools.handlers.base import HandlerBase, action_handler, json_result

PROXY_METHODS = ("GET", "POST", "PUT", "DELETE", "HEAD")


def read_proxy_request(args, path_param: str) -> dict:
    """Arguments shared by the Docker and Kubernetes proxy actions."""
    environment_id = args.get_int("environmentId", required=True)
    validate_positive_id("environmentId", environment_id)

    method = args.get_string("method", required=True).upper()
    if method not in PROXY_METHODS:
        raise InvalidParameterError(
            "method", f"invalid method {method}: must be one of: {', '.join(PROXY_METHODS)}"
        )

    path = args.get_string(path_param, required=True)
    if not path.startswith("/"):
        raise InvalidParameterError(path_param, f"{path_param} must start with a leading slash")

    return {
        "environment_id": environment_id,
        "method": method,
        "path": path,
        "query": parse_key_value_map(args.get_list("queryParams"), "queryParams"),
        "headers": parse_key_value_map(args.get_list("headers"), "headers"),
        "body": args.get_string("body") or None,
    }


def proxy_result(status: int, body: str, what: str) -> ActionResult:
    if status >= 400:
        return ActionResult.error(f"failed to send {what} request: status {status}: {body}")
    return ActionResult.ok(body)


class DockerHandlers(HandlerBase):

    @action_handler("failed to get docker dashboard")
    def get_docker_dashboard(self, ctx, args):
        environment_id = args.get_int("environmentId", required=True)
        return json_result(self.client.get_docker_dashboard(environment_id))

    @action_handler("failed to send Docker API request")
    def docker_proxy(self, ctx, args):
        req = read_proxy_request(args, "dockerAPIPath")
        status, body = self.client.proxy_docker_request(
            req["environment_id"], req["method"], req["path"],
            query=req["query"], headers=req["headers"], body=req["body"],
        )
        return proxy_result(status, body, "Docker API")
