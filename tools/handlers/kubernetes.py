# =============================================================================
# tools/handlers/kubernetes.py  -  Kubernetes dashboards, namespaces, proxy
# =============================================================================

import json
from typing import Any

from core.models import ActionResult
from tools.handlers.base import HandlerBase, action_handler, json_result
from tools.handlers.docker import proxy_result, read_proxy_request

_LAST_APPLIED = "kubectl.kubernetes.io/last-applied-configuration"


def strip_kubernetes_metadata(obj: Any) -> Any:
    """Drop managedFields and last-applied annotations, recursively.

    Those two fields routinely make up most of a Kubernetes response and
    carry nothing an agent can use.
    """
    if isinstance(obj, list):
        return [strip_kubernetes_metadata(item) for item in obj]
    if not isinstance(obj, dict):
        return obj

    result = {}
    for key, value in obj.items():
        if key == "metadata" and isinstance(value, dict):
            value = {k: v for k, v in value.items() if k != "managedFields"}
            annotations = value.get("annotations")
            if isinstance(annotations, dict) and _LAST_APPLIED in annotations:
                annotations = {k: v for k, v in annotations.items() if k != _LAST_APPLIED}
                if annotations:
                    value["annotations"] = annotations
                else:
                    value.pop("annotations")
        result[key] = strip_kubernetes_metadata(value)
    return result


class KubernetesHandlers(HandlerBase):

    @action_handler("failed to send Kubernetes API request")
    def get_kubernetes_resource_stripped(self, ctx, args):
        req = read_proxy_request(args, "kubernetesAPIPath")
        if req["method"] != "GET":
            return ActionResult.error("invalid method parameter: only GET is supported for stripped resources")
        status, body = self.client.proxy_kubernetes_request(
            req["environment_id"], "GET", req["path"],
            query=req["query"], headers=req["headers"],
        )
        if status >= 400:
            return proxy_result(status, body, "Kubernetes API")
        try:
            parsed = json.loads(body)
        except ValueError:
            return ActionResult.ok(body)
        return json_result(strip_kubernetes_metadata(parsed))

    @action_handler("failed to get kubernetes dashboard")
    def get_kubernetes_dashboard(self, ctx, args):
        environment_id = args.get_int("environmentId", required=True)
        return json_result(self.client.get_kubernetes_dashboard(environment_id))

    @action_handler("failed to list kubernetes namespaces")
    def list_kubernetes_namespaces(self, ctx, args):
        environment_id = args.get_int("environmentId", required=True)
        return json_result(self.client.list_kubernetes_namespaces(environment_id))

    @action_handler("failed to get kubernetes config")
    def get_kubernetes_config(self, ctx, args):
        environment_id = args.get_int("environmentId", required=True)
        config = self.client.get_kubernetes_config(environment_id)
        if isinstance(config, str):
            return ActionResult.ok(config)
        return json_result(config)

    @action_handler("failed to send Kubernetes API request")
    def kubernetes_proxy(self, ctx, args):
        req = read_proxy_request(args, "kubernetesAPIPath")
        status, body = self.client.proxy_kubernetes_request(
            req["environment_id"], req["method"], req["path"],
            query=req["query"], headers=req["headers"], body=req["body"],
        )
        return proxy_result(status, body, "Kubernetes API")
