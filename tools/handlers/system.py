# =============================================================================
# tools/handlers/system.py  -  Status, roles, message of the day, auth
# =============================================================================

from dataclasses import asdict

from core.models import ActionResult
from core.portainer_models import convert_motd, convert_system_status
from tools.handlers.base import HandlerBase, action_handler, json_result


class SystemHandlers(HandlerBase):

    @action_handler("failed to get system status")
    def get_system_status(self, ctx, args):
        return json_result(asdict(convert_system_status(self.client.get_system_status())))

    @action_handler("failed to list roles")
    def list_roles(self, ctx, args):
        return json_result(self.client.list_roles())

    @action_handler("failed to get message of the day")
    def get_motd(self, ctx, args):
        return json_result(asdict(convert_motd(self.client.get_motd())))

    @action_handler("failed to authenticate")
    def authenticate(self, ctx, args):
        username = args.get_string("username", required=True)
        password = args.get_string("password", required=True)
        return json_result({"jwt": self.client.authenticate(username, password)})

    @action_handler("failed to logout")
    def logout(self, ctx, args):
        self.client.logout()
        return ActionResult.ok("Logged out successfully")
