# =============================================================================
# tools/handlers/templates.py  -  Custom templates and application templates
# =============================================================================

from core.arguments import InvalidParameterError, validate_name, validate_positive_id
from core.models import ActionResult
from tools.handlers.base import HandlerBase, action_handler, json_result

# Portainer template kinds: 1 swarm stack, 2 compose stack, 3 kubernetes manifest.
TEMPLATE_TYPES = (1, 2, 3)


class TemplateHandlers(HandlerBase):

    @action_handler("failed to list custom templates")
    def list_custom_templates(self, ctx, args):
        return json_result(self.client.list_custom_templates())

    @action_handler("failed to get custom template")
    def get_custom_template(self, ctx, args):
        template_id = args.get_int("id", required=True)
        return json_result(self.client.get_custom_template(template_id))

    @action_handler("failed to get custom template file")
    def get_custom_template_file(self, ctx, args):
        template_id = args.get_int("id", required=True)
        return ActionResult.ok(self.client.get_custom_template_file(template_id))

    @action_handler("failed to create custom template")
    def create_custom_template(self, ctx, args):
        title = args.get_string("title", required=True)
        validate_name(title, "title")
        file_content = args.get_string("fileContent", required=True)
        if not file_content.strip():
            raise InvalidParameterError("fileContent", "fileContent cannot be empty")
        template_type = args.get_int("type", default=2)
        if template_type not in TEMPLATE_TYPES:
            raise InvalidParameterError("type", f"invalid template type {template_type}: must be 1, 2 or 3")

        payload = {
            "Title": title,
            "Description": args.get_string("description"),
            "Note": args.get_string("note"),
            "Logo": args.get_string("logo"),
            "FileContent": file_content,
            "Platform": args.get_int("platform", default=1),
            "Type": template_type,
        }
        template_id = self.client.create_custom_template(payload)
        return ActionResult.ok(f"Custom template created successfully with ID: {template_id}")

    @action_handler("failed to delete custom template")
    def delete_custom_template(self, ctx, args):
        template_id = args.get_int("id", required=True)
        validate_positive_id("id", template_id)
        self.client.delete_custom_template(template_id)
        return ActionResult.ok(f"Custom template {template_id} deleted successfully")

    @action_handler("failed to list app templates")
    def list_app_templates(self, ctx, args):
        return json_result(self.client.list_app_templates())

    @action_handler("failed to get app template file")
    def get_app_template_file(self, ctx, args):
        template_id = args.get_int("id", required=True)
        return ActionResult.ok(self.client.get_app_template_file(template_id))
