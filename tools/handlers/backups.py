# =============================================================================
# tools/handlers/backups.py  -  Server backups, local and S3
# =============================================================================

import base64

from core.models import ActionResult
from tools.handlers.base import HandlerBase, action_handler, json_result

_S3_FIELDS = ("accessKeyID", "secretAccessKey", "region", "bucketName", "s3CompatibleHost", "password")


def _s3_payload(args, required=("accessKeyID", "secretAccessKey", "bucketName")) -> dict:
    payload = {}
    for field in _S3_FIELDS:
        value = args.get_string(field, required=field in required)
        if value:
            payload[field] = value
    return payload


class BackupHandlers(HandlerBase):

    @action_handler("failed to get backup status")
    def get_backup_status(self, ctx, args):
        return json_result(self.client.get_backup_status())

    @action_handler("failed to get backup S3 settings")
    def get_backup_s3_settings(self, ctx, args):
        return json_result(self.client.get_backup_s3_settings())

    @action_handler("failed to create backup")
    def create_backup(self, ctx, args):
        """Download a backup archive; returned base64-encoded since it is binary."""
        archive = self.client.create_backup(args.get_string("password"))
        encoded = base64.b64encode(archive).decode("ascii")
        return json_result({"size": len(archive), "archive": encoded})

    @action_handler("failed to backup to S3")
    def backup_to_s3(self, ctx, args):
        self.client.backup_to_s3(_s3_payload(args))
        return ActionResult.ok("Backup to S3 started successfully")

    @action_handler("failed to restore from S3")
    def restore_from_s3(self, ctx, args):
        payload = _s3_payload(args)
        payload["filename"] = args.get_string("filename", required=True)
        self.client.restore_from_s3(payload)
        return ActionResult.ok("Restore from S3 started successfully")
