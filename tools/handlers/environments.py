# =============================================================================
# tools/handlers/environments.py  -  Environments, environment groups, tags
# =============================================================================
# Portainer calls environments "endpoints" and environment groups "edge
# groups"; the tool surface uses the names from the Portainer UI.
# =============================================================================

from dataclasses import asdict

from core.arguments import parse_access_map, validate_name, validate_positive_id
from core.models import ActionResult
from core.portainer_models import (
    access_policies_payload,
    convert_edge_group,
    convert_environment,
    convert_tag,
)
from tools.handlers.base import HandlerBase, action_handler, json_result


def _edge_group_payload(current: dict, **changes) -> dict:
    """Full PUT body for an edge group: current values with `changes` applied."""
    payload = {
        "Name": current.get("Name", ""),
        "Dynamic": current.get("Dynamic", False),
        "Endpoints": current.get("Endpoints") or [],
        "TagIDs": current.get("TagIds") or [],
        "PartialMatch": current.get("PartialMatch", False),
    }
    payload.update(changes)
    return payload


class EnvironmentHandlers(HandlerBase):

    # --- environments --------------------------------------------------------
    @action_handler("failed to get environments")
    def list_environments(self, ctx, args):
        return json_result([asdict(convert_environment(e)) for e in self.client.list_environments()])

    @action_handler("failed to get environment")
    def get_environment(self, ctx, args):
        environment_id = args.get_int("id", required=True)
        return json_result(asdict(convert_environment(self.client.get_environment(environment_id))))

    @action_handler("failed to delete environment")
    def delete_environment(self, ctx, args):
        environment_id = args.get_int("id", required=True)
        validate_positive_id("id", environment_id)
        self.client.delete_environment(environment_id)
        return ActionResult.ok(f"Environment {environment_id} deleted successfully")

    @action_handler("failed to snapshot environment")
    def snapshot_environment(self, ctx, args):
        environment_id = args.get_int("id", required=True)
        self.client.snapshot_environment(environment_id)
        return ActionResult.ok(f"Snapshot of environment {environment_id} triggered successfully")

    @action_handler("failed to snapshot environments")
    def snapshot_all_environments(self, ctx, args):
        self.client.snapshot_all_environments()
        return ActionResult.ok("Snapshot of all environments triggered successfully")

    @action_handler("failed to update environment tags")
    def update_environment_tags(self, ctx, args):
        environment_id = args.get_int("id", required=True)
        tag_ids = args.get_int_list("tagIds", required=True)
        self.client.update_environment(environment_id, {"TagIDs": tag_ids})
        return ActionResult.ok("Environment tags updated successfully")

    @action_handler("failed to update environment user accesses")
    def update_environment_user_accesses(self, ctx, args):
        environment_id = args.get_int("id", required=True)
        accesses = parse_access_map(args.get_list("userAccesses", required=True), "userAccesses")
        self.client.update_environment(environment_id,
                                       {"UserAccessPolicies": access_policies_payload(accesses)})
        return ActionResult.ok("Environment user accesses updated successfully")

    @action_handler("failed to update environment team accesses")
    def update_environment_team_accesses(self, ctx, args):
        environment_id = args.get_int("id", required=True)
        accesses = parse_access_map(args.get_list("teamAccesses", required=True), "teamAccesses")
        self.client.update_environment(environment_id,
                                       {"TeamAccessPolicies": access_policies_payload(accesses)})
        return ActionResult.ok("Environment team accesses updated successfully")

    # --- environment groups (edge groups) ------------------------------------
    @action_handler("failed to get environment groups")
    def list_environment_groups(self, ctx, args):
        return json_result([asdict(convert_edge_group(g)) for g in self.client.list_edge_groups()])

    @action_handler("failed to create environment group")
    def create_environment_group(self, ctx, args):
        name = args.get_string("name", required=True)
        validate_name(name)
        environment_ids = args.get_int_list("environmentIds", required=True)
        group_id = self.client.create_edge_group(name, environment_ids)
        return ActionResult.ok(f"Environment group created successfully with ID: {group_id}")

    @action_handler("failed to update environment group name")
    def update_environment_group_name(self, ctx, args):
        group_id = args.get_int("id", required=True)
        name = args.get_string("name", required=True)
        validate_name(name)
        current = self.client.get_edge_group(group_id)
        self.client.update_edge_group(group_id, _edge_group_payload(current, Name=name))
        return ActionResult.ok("Environment group name updated successfully")

    @action_handler("failed to update environment group environments")
    def update_environment_group_environments(self, ctx, args):
        group_id = args.get_int("id", required=True)
        environment_ids = args.get_int_list("environmentIds", required=True)
        current = self.client.get_edge_group(group_id)
        self.client.update_edge_group(group_id, _edge_group_payload(current, Endpoints=environment_ids))
        return ActionResult.ok("Environment group environments updated successfully")

    @action_handler("failed to update environment group tags")
    def update_environment_group_tags(self, ctx, args):
        group_id = args.get_int("id", required=True)
        tag_ids = args.get_int_list("tagIds", required=True)
        current = self.client.get_edge_group(group_id)
        self.client.update_edge_group(group_id, _edge_group_payload(current, TagIDs=tag_ids))
        return ActionResult.ok("Environment group tags updated successfully")

    # --- environment tags ----------------------------------------------------
    @action_handler("failed to get environment tags")
    def list_environment_tags(self, ctx, args):
        return json_result([asdict(convert_tag(t)) for t in self.client.list_tags()])

    @action_handler("failed to create environment tag")
    def create_environment_tag(self, ctx, args):
        name = args.get_string("name", required=True)
        validate_name(name)
        tag_id = self.client.create_tag(name)
        return ActionResult.ok(f"Environment tag created successfully with ID: {tag_id}")

    @action_handler("failed to delete environment tag")
    def delete_environment_tag(self, ctx, args):
        tag_id = args.get_int("id", required=True)
        validate_positive_id("id", tag_id)
        self.client.delete_tag(tag_id)
        return ActionResult.ok(f"Environment tag {tag_id} deleted successfully")
