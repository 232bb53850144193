# =============================================================================
# tools/handlers/stacks.py  -  Edge stacks and regular (Compose) stacks
# =============================================================================
# "list_stacks", "get_stack_file", "create_stack" and "update_stack" work on
# edge stacks, which are deployed to environment groups.  Everything that
# takes an environmentId works on regular stacks living in one environment.
# =============================================================================

from core.arguments import validate_compose_yaml, validate_name, validate_positive_id
from core.models import ActionResult
from tools.handlers.base import HandlerBase, action_handler, json_result


class StackHandlers(HandlerBase):

    @action_handler("failed to get stacks")
    def list_stacks(self, ctx, args):
        stacks = self.client.list_edge_stacks()
        return json_result([
            {"id": s.get("Id"), "name": s.get("Name"), "environment_group_ids": s.get("EdgeGroups") or []}
            for s in stacks
        ])

    @action_handler("failed to get regular stacks")
    def list_regular_stacks(self, ctx, args):
        stacks = self.client.list_stacks()
        return json_result([
            {
                "id": s.get("Id"),
                "name": s.get("Name"),
                "type": s.get("Type"),
                "status": s.get("Status"),
                "environment_id": s.get("EndpointId"),
            }
            for s in stacks
        ])

    @action_handler("failed to get stack")
    def get_stack(self, ctx, args):
        stack_id = args.get_int("id", required=True)
        return json_result(self.client.get_stack(stack_id))

    @action_handler("failed to get stack file")
    def get_stack_file(self, ctx, args):
        stack_id = args.get_int("id", required=True)
        return ActionResult.ok(self.client.get_edge_stack_file(stack_id))

    @action_handler("failed to get stack file")
    def inspect_stack_file(self, ctx, args):
        stack_id = args.get_int("id", required=True)
        return ActionResult.ok(self.client.get_stack_file(stack_id))

    @action_handler("failed to create stack")
    def create_stack(self, ctx, args):
        name = args.get_string("name", required=True)
        validate_name(name)
        file_content = args.get_string("file", required=True)
        validate_compose_yaml(file_content)
        group_ids = args.get_int_list("environmentGroupIds", required=True)
        stack_id = self.client.create_edge_stack(name, file_content, group_ids)
        return ActionResult.ok(f"Stack created successfully with ID: {stack_id}")

    @action_handler("failed to update stack")
    def update_stack(self, ctx, args):
        stack_id = args.get_int("id", required=True)
        file_content = args.get_string("file", required=True)
        validate_compose_yaml(file_content)
        group_ids = args.get_int_list("environmentGroupIds", required=True)
        self.client.update_edge_stack(stack_id, file_content, group_ids)
        return ActionResult.ok("Stack updated successfully")

    @action_handler("failed to delete stack")
    def delete_stack(self, ctx, args):
        stack_id = args.get_int("id", required=True)
        environment_id = args.get_int("environmentId", required=True)
        validate_positive_id("id", stack_id)
        validate_positive_id("environmentId", environment_id)
        self.client.delete_stack(stack_id, environment_id)
        return ActionResult.ok(f"Stack {stack_id} deleted successfully")

    @action_handler("failed to update stack git settings")
    def update_stack_git(self, ctx, args):
        stack_id = args.get_int("id", required=True)
        environment_id = args.get_int("environmentId", required=True)
        payload = {
            "RepositoryReferenceName": args.get_string("referenceName"),
            "Prune": args.get_bool("prune"),
            "TLSSkipVerify": args.get_bool("tlsSkipVerify"),
        }
        if args.has("username"):
            payload["RepositoryAuthentication"] = True
            payload["RepositoryUsername"] = args.get_string("username")
            payload["RepositoryPassword"] = args.get_string("password")
        return json_result(self.client.update_stack_git(stack_id, environment_id, payload))

    @action_handler("failed to redeploy stack from git")
    def redeploy_stack_git(self, ctx, args):
        stack_id = args.get_int("id", required=True)
        environment_id = args.get_int("environmentId", required=True)
        payload = {
            "RepositoryReferenceName": args.get_string("referenceName"),
            "Prune": args.get_bool("prune"),
            "PullImage": args.get_bool("pullImage", default=True),
        }
        if args.has("username"):
            payload["RepositoryAuthentication"] = True
            payload["RepositoryUsername"] = args.get_string("username")
            payload["RepositoryPassword"] = args.get_string("password")
        return json_result(self.client.redeploy_stack_git(stack_id, environment_id, payload))

    @action_handler("failed to start stack")
    def start_stack(self, ctx, args):
        stack_id = args.get_int("id", required=True)
        environment_id = args.get_int("environmentId", required=True)
        self.client.start_stack(stack_id, environment_id)
        return ActionResult.ok(f"Stack {stack_id} started successfully")

    @action_handler("failed to stop stack")
    def stop_stack(self, ctx, args):
        stack_id = args.get_int("id", required=True)
        environment_id = args.get_int("environmentId", required=True)
        self.client.stop_stack(stack_id, environment_id)
        return ActionResult.ok(f"Stack {stack_id} stopped successfully")

    @action_handler("failed to migrate stack")
    def migrate_stack(self, ctx, args):
        stack_id = args.get_int("id", required=True)
        environment_id = args.get_int("environmentId", required=True)
        target_id = args.get_int("targetEnvironmentId", required=True)
        validate_positive_id("targetEnvironmentId", target_id)
        name = args.get_string("name")
        migrated = self.client.migrate_stack(stack_id, environment_id, target_id, name)
        return json_result(migrated)
