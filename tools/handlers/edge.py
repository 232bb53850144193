# =============================================================================
# tools/handlers/edge.py  -  Edge jobs and Edge update schedules
# =============================================================================

from core.arguments import InvalidParameterError, validate_name, validate_positive_id
from core.models import ActionResult
from tools.handlers.base import HandlerBase, action_handler, json_result


class EdgeHandlers(HandlerBase):

    @action_handler("failed to list edge jobs")
    def list_edge_jobs(self, ctx, args):
        return json_result(self.client.list_edge_jobs())

    @action_handler("failed to get edge job")
    def get_edge_job(self, ctx, args):
        job_id = args.get_int("id", required=True)
        return json_result(self.client.get_edge_job(job_id))

    @action_handler("failed to get edge job file")
    def get_edge_job_file(self, ctx, args):
        job_id = args.get_int("id", required=True)
        return ActionResult.ok(self.client.get_edge_job_file(job_id))

    @action_handler("failed to create edge job")
    def create_edge_job(self, ctx, args):
        name = args.get_string("name", required=True)
        validate_name(name)
        cron = args.get_string("cronExpression", required=True)
        if not cron.strip():
            raise InvalidParameterError("cronExpression", "cronExpression cannot be empty")
        file_content = args.get_string("fileContent", required=True)
        payload = {
            "name": name,
            "cronExpression": cron,
            "fileContent": file_content,
            "endpoints": args.get_int_list("environmentIds"),
            "edgeGroups": args.get_int_list("edgeGroupIds"),
            "recurring": args.get_bool("recurring"),
        }
        job_id = self.client.create_edge_job(payload)
        return ActionResult.ok(f"Edge job created successfully with ID: {job_id}")

    @action_handler("failed to delete edge job")
    def delete_edge_job(self, ctx, args):
        job_id = args.get_int("id", required=True)
        validate_positive_id("id", job_id)
        self.client.delete_edge_job(job_id)
        return ActionResult.ok(f"Edge job {job_id} deleted successfully")

    @action_handler("failed to list edge update schedules")
    def list_edge_update_schedules(self, ctx, args):
        return json_result(self.client.list_edge_update_schedules())
