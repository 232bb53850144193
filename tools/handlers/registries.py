# =============================================================================
# tools/handlers/registries.py  -  Docker registries
# =============================================================================

from core.arguments import InvalidParameterError, validate_name, validate_positive_id
from core.models import ActionResult
from tools.handlers.base import HandlerBase, action_handler, json_result

# Portainer's numeric registry kinds.
REGISTRY_TYPES = {
    1: "Quay.io",
    2: "Azure",
    3: "Custom",
    4: "GitLab",
    5: "ProGet",
    6: "DockerHub",
    7: "ECR",
}


def _registry_payload(args, partial: bool) -> dict:
    payload = {}
    if not partial or args.has("name"):
        name = args.get_string("name", required=not partial)
        validate_name(name)
        payload["Name"] = name
    if not partial or args.has("url"):
        url = args.get_string("url", required=not partial)
        if not url.strip():
            raise InvalidParameterError("url", "url cannot be empty")
        payload["URL"] = url
    if not partial:
        registry_type = args.get_int("type", required=True)
        if registry_type not in REGISTRY_TYPES:
            kinds = ", ".join(f"{k} ({v})" for k, v in REGISTRY_TYPES.items())
            raise InvalidParameterError("type", f"invalid registry type {registry_type}: must be one of: {kinds}")
        payload["Type"] = registry_type
    if args.has("authentication"):
        payload["Authentication"] = args.get_bool("authentication")
    if args.has("username"):
        payload["Username"] = args.get_string("username")
    if args.has("password"):
        payload["Password"] = args.get_string("password")
    if args.has("baseURL"):
        payload["BaseURL"] = args.get_string("baseURL")
    return payload


class RegistryHandlers(HandlerBase):

    @action_handler("failed to list registries")
    def list_registries(self, ctx, args):
        return json_result(self.client.list_registries())

    @action_handler("failed to get registry")
    def get_registry(self, ctx, args):
        registry_id = args.get_int("id", required=True)
        return json_result(self.client.get_registry(registry_id))

    @action_handler("failed to create registry")
    def create_registry(self, ctx, args):
        registry_id = self.client.create_registry(_registry_payload(args, partial=False))
        return ActionResult.ok(f"Registry created successfully with ID: {registry_id}")

    @action_handler("failed to update registry")
    def update_registry(self, ctx, args):
        registry_id = args.get_int("id", required=True)
        validate_positive_id("id", registry_id)
        self.client.update_registry(registry_id, _registry_payload(args, partial=True))
        return ActionResult.ok("Registry updated successfully")

    @action_handler("failed to delete registry")
    def delete_registry(self, ctx, args):
        registry_id = args.get_int("id", required=True)
        validate_positive_id("id", registry_id)
        self.client.delete_registry(registry_id)
        return ActionResult.ok(f"Registry {registry_id} deleted successfully")
