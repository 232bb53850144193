# =============================================================================
# tools/handlers/users.py  -  Portainer users
# =============================================================================

from dataclasses import asdict

from core.arguments import (
    USER_ROLE_IDS,
    USER_ROLES,
    InvalidParameterError,
    is_valid_user_role,
    validate_name,
    validate_positive_id,
)
from core.models import ActionResult
from core.portainer_models import convert_user
from tools.handlers.base import HandlerBase, action_handler, json_result


def _role_id(role: str) -> int:
    if not is_valid_user_role(role):
        raise InvalidParameterError("role", f"invalid role {role}: must be one of: {', '.join(USER_ROLES)}")
    return USER_ROLE_IDS[role]


class UserHandlers(HandlerBase):

    @action_handler("failed to get users")
    def list_users(self, ctx, args):
        return json_result([asdict(convert_user(u)) for u in self.client.list_users()])

    @action_handler("failed to get user")
    def get_user(self, ctx, args):
        user_id = args.get_int("id", required=True)
        return json_result(asdict(convert_user(self.client.get_user(user_id))))

    @action_handler("failed to create user")
    def create_user(self, ctx, args):
        username = args.get_string("username", required=True)
        validate_name(username, "username")
        password = args.get_string("password", required=True)
        role_id = _role_id(args.get_string("role", required=True))
        user_id = self.client.create_user(username, password, role_id)
        return ActionResult.ok(f"User created successfully with ID: {user_id}")

    @action_handler("failed to delete user")
    def delete_user(self, ctx, args):
        user_id = args.get_int("id", required=True)
        validate_positive_id("id", user_id)
        self.client.delete_user(user_id)
        return ActionResult.ok(f"User {user_id} deleted successfully")

    @action_handler("failed to update user role")
    def update_user_role(self, ctx, args):
        user_id = args.get_int("id", required=True)
        role_id = _role_id(args.get_string("role", required=True))
        self.client.update_user_role(user_id, role_id)
        return ActionResult.ok("User updated successfully")
