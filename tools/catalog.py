# =============================================================================
# tools/catalog.py  -  The meta-tool catalog
# =============================================================================
#
# Fifteen groups, ninety-eight actions.  Each group becomes one MCP tool
# whose required "action" parameter picks the sub-operation.
#
# Every Action points at an UNBOUND handler method; the server binds them to
# itself when it registers its tools.  read_only=True marks an action that
# stays visible when the server runs with --read-only.
#
# Declaration order matters: it is the order of the "action" enum and of the
# "Available actions" list a caller sees on a typo.
# =============================================================================

from core.models import Action, ToolGroup, ToolHints
from tools.handlers import (
    AccessGroupHandlers,
    BackupHandlers,
    DockerHandlers,
    EdgeHandlers,
    EnvironmentHandlers,
    HelmHandlers,
    KubernetesHandlers,
    RegistryHandlers,
    SettingsHandlers,
    StackHandlers,
    SystemHandlers,
    TeamHandlers,
    TemplateHandlers,
    UserHandlers,
    WebhookHandlers,
)

_ACTION_SUFFIX = " Use the 'action' parameter to specify the operation."


def meta_tool_definitions() -> list[ToolGroup]:
    """Return the full, static list of meta-tool groups."""
    return [
        ToolGroup(
            name="manage_environments",
            description="Manage Portainer environments (endpoints), environment groups, "
                        "and environment tags." + _ACTION_SUFFIX,
            actions=(
                Action("list_environments", EnvironmentHandlers.list_environments, read_only=True),
                Action("get_environment", EnvironmentHandlers.get_environment, read_only=True),
                Action("delete_environment", EnvironmentHandlers.delete_environment),
                Action("snapshot_environment", EnvironmentHandlers.snapshot_environment),
                Action("snapshot_all_environments", EnvironmentHandlers.snapshot_all_environments),
                Action("update_environment_tags", EnvironmentHandlers.update_environment_tags),
                Action("update_environment_user_accesses", EnvironmentHandlers.update_environment_user_accesses),
                Action("update_environment_team_accesses", EnvironmentHandlers.update_environment_team_accesses),
                Action("list_environment_groups", EnvironmentHandlers.list_environment_groups, read_only=True),
                Action("create_environment_group", EnvironmentHandlers.create_environment_group),
                Action("update_environment_group_name", EnvironmentHandlers.update_environment_group_name),
                Action("update_environment_group_environments",
                       EnvironmentHandlers.update_environment_group_environments),
                Action("update_environment_group_tags", EnvironmentHandlers.update_environment_group_tags),
                Action("list_environment_tags", EnvironmentHandlers.list_environment_tags, read_only=True),
                Action("create_environment_tag", EnvironmentHandlers.create_environment_tag),
                Action("delete_environment_tag", EnvironmentHandlers.delete_environment_tag),
            ),
            hints=ToolHints(title="Manage Environments"),
        ),
        ToolGroup(
            name="manage_stacks",
            description="Manage Portainer stacks (Docker Compose and Edge stacks)." + _ACTION_SUFFIX,
            actions=(
                Action("list_stacks", StackHandlers.list_stacks, read_only=True),
                Action("list_regular_stacks", StackHandlers.list_regular_stacks, read_only=True),
                Action("get_stack", StackHandlers.get_stack, read_only=True),
                Action("get_stack_file", StackHandlers.get_stack_file, read_only=True),
                Action("inspect_stack_file", StackHandlers.inspect_stack_file, read_only=True),
                Action("create_stack", StackHandlers.create_stack),
                Action("update_stack", StackHandlers.update_stack),
                Action("delete_stack", StackHandlers.delete_stack),
                Action("update_stack_git", StackHandlers.update_stack_git),
                Action("redeploy_stack_git", StackHandlers.redeploy_stack_git),
                Action("start_stack", StackHandlers.start_stack),
                Action("stop_stack", StackHandlers.stop_stack),
                Action("migrate_stack", StackHandlers.migrate_stack),
            ),
            hints=ToolHints(title="Manage Stacks"),
        ),
        ToolGroup(
            name="manage_access_groups",
            description="Manage Portainer access groups and their user/team access policies." + _ACTION_SUFFIX,
            actions=(
                Action("list_access_groups", AccessGroupHandlers.list_access_groups, read_only=True),
                Action("create_access_group", AccessGroupHandlers.create_access_group),
                Action("update_access_group_name", AccessGroupHandlers.update_access_group_name),
                Action("update_access_group_user_accesses", AccessGroupHandlers.update_access_group_user_accesses),
                Action("update_access_group_team_accesses", AccessGroupHandlers.update_access_group_team_accesses),
                Action("add_environment_to_access_group", AccessGroupHandlers.add_environment_to_access_group),
                Action("remove_environment_from_access_group",
                       AccessGroupHandlers.remove_environment_from_access_group),
            ),
            hints=ToolHints(title="Manage Access Groups"),
        ),
        ToolGroup(
            name="manage_users",
            description="Manage Portainer users." + _ACTION_SUFFIX,
            actions=(
                Action("list_users", UserHandlers.list_users, read_only=True),
                Action("get_user", UserHandlers.get_user, read_only=True),
                Action("create_user", UserHandlers.create_user),
                Action("delete_user", UserHandlers.delete_user),
                Action("update_user_role", UserHandlers.update_user_role),
            ),
            hints=ToolHints(title="Manage Users"),
        ),
        ToolGroup(
            name="manage_teams",
            description="Manage Portainer teams and team membership." + _ACTION_SUFFIX,
            actions=(
                Action("list_teams", TeamHandlers.list_teams, read_only=True),
                Action("get_team", TeamHandlers.get_team, read_only=True),
                Action("create_team", TeamHandlers.create_team),
                Action("delete_team", TeamHandlers.delete_team),
                Action("update_team_name", TeamHandlers.update_team_name),
                Action("update_team_members", TeamHandlers.update_team_members),
            ),
            hints=ToolHints(title="Manage Teams"),
        ),
        ToolGroup(
            name="manage_docker",
            description="Interact with Docker environments via proxy API calls and dashboards." + _ACTION_SUFFIX,
            actions=(
                Action("get_docker_dashboard", DockerHandlers.get_docker_dashboard, read_only=True),
                Action("docker_proxy", DockerHandlers.docker_proxy),
            ),
            hints=ToolHints(title="Manage Docker", open_world=True),
        ),
        ToolGroup(
            name="manage_kubernetes",
            description="Interact with Kubernetes environments via proxy API calls, dashboards, "
                        "namespaces, and kubeconfig." + _ACTION_SUFFIX,
            actions=(
                Action("get_kubernetes_resource_stripped", KubernetesHandlers.get_kubernetes_resource_stripped,
                       read_only=True),
                Action("get_kubernetes_dashboard", KubernetesHandlers.get_kubernetes_dashboard, read_only=True),
                Action("list_kubernetes_namespaces", KubernetesHandlers.list_kubernetes_namespaces, read_only=True),
                Action("get_kubernetes_config", KubernetesHandlers.get_kubernetes_config, read_only=True),
                Action("kubernetes_proxy", KubernetesHandlers.kubernetes_proxy),
            ),
            hints=ToolHints(title="Manage Kubernetes", open_world=True),
        ),
        ToolGroup(
            name="manage_helm",
            description="Manage Helm repositories, charts, and releases." + _ACTION_SUFFIX,
            actions=(
                Action("list_helm_repositories", HelmHandlers.list_helm_repositories, read_only=True),
                Action("search_helm_charts", HelmHandlers.search_helm_charts, read_only=True),
                Action("list_helm_releases", HelmHandlers.list_helm_releases, read_only=True),
                Action("get_helm_release_history", HelmHandlers.get_helm_release_history, read_only=True),
                Action("add_helm_repository", HelmHandlers.add_helm_repository),
                Action("remove_helm_repository", HelmHandlers.remove_helm_repository),
                Action("install_helm_chart", HelmHandlers.install_helm_chart),
                Action("delete_helm_release", HelmHandlers.delete_helm_release),
            ),
            hints=ToolHints(title="Manage Helm"),
        ),
        ToolGroup(
            name="manage_registries",
            description="Manage Docker registries (Quay, Azure, DockerHub, GitLab, ECR, custom)." + _ACTION_SUFFIX,
            actions=(
                Action("list_registries", RegistryHandlers.list_registries, read_only=True),
                Action("get_registry", RegistryHandlers.get_registry, read_only=True),
                Action("create_registry", RegistryHandlers.create_registry),
                Action("update_registry", RegistryHandlers.update_registry),
                Action("delete_registry", RegistryHandlers.delete_registry),
            ),
            hints=ToolHints(title="Manage Registries"),
        ),
        ToolGroup(
            name="manage_templates",
            description="Manage custom templates and application templates." + _ACTION_SUFFIX,
            actions=(
                Action("list_custom_templates", TemplateHandlers.list_custom_templates, read_only=True),
                Action("get_custom_template", TemplateHandlers.get_custom_template, read_only=True),
                Action("get_custom_template_file", TemplateHandlers.get_custom_template_file, read_only=True),
                Action("create_custom_template", TemplateHandlers.create_custom_template),
                Action("delete_custom_template", TemplateHandlers.delete_custom_template),
                Action("list_app_templates", TemplateHandlers.list_app_templates, read_only=True),
                Action("get_app_template_file", TemplateHandlers.get_app_template_file, read_only=True),
            ),
            hints=ToolHints(title="Manage Templates"),
        ),
        ToolGroup(
            name="manage_backups",
            description="Manage Portainer server backups (local and S3)." + _ACTION_SUFFIX,
            actions=(
                Action("get_backup_status", BackupHandlers.get_backup_status, read_only=True),
                Action("get_backup_s3_settings", BackupHandlers.get_backup_s3_settings, read_only=True),
                Action("create_backup", BackupHandlers.create_backup),
                Action("backup_to_s3", BackupHandlers.backup_to_s3),
                Action("restore_from_s3", BackupHandlers.restore_from_s3),
            ),
            hints=ToolHints(title="Manage Backups"),
        ),
        ToolGroup(
            name="manage_webhooks",
            description="Manage webhooks for services and containers." + _ACTION_SUFFIX,
            actions=(
                Action("list_webhooks", WebhookHandlers.list_webhooks, read_only=True),
                Action("create_webhook", WebhookHandlers.create_webhook),
                Action("delete_webhook", WebhookHandlers.delete_webhook),
            ),
            hints=ToolHints(title="Manage Webhooks"),
        ),
        ToolGroup(
            name="manage_edge",
            description="Manage Edge jobs and Edge update schedules." + _ACTION_SUFFIX,
            actions=(
                Action("list_edge_jobs", EdgeHandlers.list_edge_jobs, read_only=True),
                Action("get_edge_job", EdgeHandlers.get_edge_job, read_only=True),
                Action("get_edge_job_file", EdgeHandlers.get_edge_job_file, read_only=True),
                Action("create_edge_job", EdgeHandlers.create_edge_job),
                Action("delete_edge_job", EdgeHandlers.delete_edge_job),
                Action("list_edge_update_schedules", EdgeHandlers.list_edge_update_schedules, read_only=True),
            ),
            hints=ToolHints(title="Manage Edge"),
        ),
        ToolGroup(
            name="manage_settings",
            description="Manage Portainer server settings, public settings, "
                        "and SSL configuration." + _ACTION_SUFFIX,
            actions=(
                Action("get_settings", SettingsHandlers.get_settings, read_only=True),
                Action("get_public_settings", SettingsHandlers.get_public_settings, read_only=True),
                Action("update_settings", SettingsHandlers.update_settings),
                Action("get_ssl_settings", SettingsHandlers.get_ssl_settings, read_only=True),
                Action("update_ssl_settings", SettingsHandlers.update_ssl_settings),
            ),
            hints=ToolHints(title="Manage Settings", destructive=False, idempotent=True),
        ),
        ToolGroup(
            name="manage_system",
            description="System information, roles, message of the day, "
                        "and authentication." + _ACTION_SUFFIX,
            actions=(
                Action("get_system_status", SystemHandlers.get_system_status, read_only=True),
                Action("list_roles", SystemHandlers.list_roles, read_only=True),
                Action("get_motd", SystemHandlers.get_motd, read_only=True),
                Action("authenticate", SystemHandlers.authenticate, read_only=True),
                Action("logout", SystemHandlers.logout),
            ),
            hints=ToolHints(title="Manage System", destructive=False),
        ),
    ]
