# =============================================================================
# tools/handlers/settings.py  -  Server settings and SSL configuration
# =============================================================================

from core.models import ActionResult
from tools.handlers.base import HandlerBase, action_handler, json_result


class SettingsHandlers(HandlerBase):

    @action_handler("failed to get settings")
    def get_settings(self, ctx, args):
        return json_result(self.client.get_settings())

    @action_handler("failed to get public settings")
    def get_public_settings(self, ctx, args):
        return json_result(self.client.get_public_settings())

    @action_handler("failed to update settings")
    def update_settings(self, ctx, args):
        """Apply a partial settings object; only the keys given are sent."""
        settings = args.get_dict("settings", required=True)
        return json_result(self.client.update_settings(settings))

    @action_handler("failed to get SSL settings")
    def get_ssl_settings(self, ctx, args):
        return json_result(self.client.get_ssl_settings())

    @action_handler("failed to update SSL settings")
    def update_ssl_settings(self, ctx, args):
        payload = {}
        if args.has("cert"):
            payload["cert"] = args.get_string("cert")
        if args.has("key"):
            payload["key"] = args.get_string("key")
        if args.has("httpEnabled"):
            payload["httpEnabled"] = args.get_bool("httpEnabled")
        self.client.update_ssl_settings(payload)
        return ActionResult.ok("SSL settings updated successfully")
