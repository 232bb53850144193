# =============================================================================
# tools/handlers/webhooks.py  -  Service and container webhooks
# =============================================================================

from core.arguments import InvalidParameterError, validate_positive_id
from core.models import ActionResult
from tools.handlers.base import HandlerBase, action_handler, json_result

# 1 = service webhook, 2 = container webhook
WEBHOOK_TYPES = (1, 2)


class WebhookHandlers(HandlerBase):

    @action_handler("failed to list webhooks")
    def list_webhooks(self, ctx, args):
        return json_result(self.client.list_webhooks())

    @action_handler("failed to create webhook")
    def create_webhook(self, ctx, args):
        resource_id = args.get_string("resourceId", required=True)
        if not resource_id.strip():
            raise InvalidParameterError("resourceId", "resourceId cannot be empty")
        environment_id = args.get_int("environmentId", required=True)
        validate_positive_id("environmentId", environment_id)
        webhook_type = args.get_int("webhookType", required=True)
        if webhook_type not in WEBHOOK_TYPES:
            raise InvalidParameterError(
                "webhookType", f"invalid webhook type {webhook_type}: must be 1 (service) or 2 (container)"
            )
        return json_result(self.client.create_webhook(resource_id, environment_id, webhook_type))

    @action_handler("failed to delete webhook")
    def delete_webhook(self, ctx, args):
        webhook_id = args.get_int("id", required=True)
        validate_positive_id("id", webhook_id)
        self.client.delete_webhook(webhook_id)
        return ActionResult.ok(f"Webhook {webhook_id} deleted successfully")
