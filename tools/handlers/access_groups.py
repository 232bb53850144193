# =============================================================================
# tools/handlers/access_groups.py  -  Access groups (Portainer endpoint groups)
# =============================================================================

from dataclasses import asdict

from core.arguments import parse_access_map, validate_name
from core.models import ActionResult
from core.portainer_models import access_policies_payload, convert_access_group
from tools.handlers.base import HandlerBase, action_handler, json_result


class AccessGroupHandlers(HandlerBase):

    @action_handler("failed to get access groups")
    def list_access_groups(self, ctx, args):
        # membership lives on the environment side (GroupId), so both lists are needed
        groups = self.client.list_endpoint_groups()
        environments = self.client.list_environments()
        return json_result([asdict(convert_access_group(g, environments)) for g in groups])

    @action_handler("failed to create access group")
    def create_access_group(self, ctx, args):
        name = args.get_string("name", required=True)
        validate_name(name)
        environment_ids = args.get_int_list("environmentIds")
        group_id = self.client.create_endpoint_group(name, environment_ids)
        return ActionResult.ok(f"Access group created successfully with ID: {group_id}")

    @action_handler("failed to update access group name")
    def update_access_group_name(self, ctx, args):
        group_id = args.get_int("id", required=True)
        name = args.get_string("name", required=True)
        validate_name(name)
        self.client.update_endpoint_group(group_id, {"Name": name})
        return ActionResult.ok("Access group name updated successfully")

    @action_handler("failed to update access group user accesses")
    def update_access_group_user_accesses(self, ctx, args):
        group_id = args.get_int("id", required=True)
        accesses = parse_access_map(args.get_list("userAccesses", required=True), "userAccesses")
        self.client.update_endpoint_group(group_id, {"UserAccessPolicies": access_policies_payload(accesses)})
        return ActionResult.ok("Access group user accesses updated successfully")

    @action_handler("failed to update access group team accesses")
    def update_access_group_team_accesses(self, ctx, args):
        group_id = args.get_int("id", required=True)
        accesses = parse_access_map(args.get_list("teamAccesses", required=True), "teamAccesses")
        self.client.update_endpoint_group(group_id, {"TeamAccessPolicies": access_policies_payload(accesses)})
        return ActionResult.ok("Access group team accesses updated successfully")

    @action_handler("failed to add environment to access group")
    def add_environment_to_access_group(self, ctx, args):
        group_id = args.get_int("id", required=True)
        environment_id = args.get_int("environmentId", required=True)
        self.client.add_environment_to_endpoint_group(group_id, environment_id)
        return ActionResult.ok("Environment added to access group successfully")

    @action_handler("failed to remove environment from access group")
    def remove_environment_from_access_group(self, ctx, args):
        group_id = args.get_int("id", required=True)
        environment_id = args.get_int("environmentId", required=True)
        self.client.remove_environment_from_endpoint_group(group_id, environment_id)
        return ActionResult.ok("Environment removed from access group successfully")
