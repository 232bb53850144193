# =============================================================================
# tools/handlers/__init__.py
# =============================================================================
# One mixin per Portainer feature area.  PortainerMCPServer inherits them
# all, so each handler is a plain method reading self.client.
# =============================================================================

from tools.handlers.access_groups import AccessGroupHandlers
from tools.handlers.backups import BackupHandlers
from tools.handlers.docker import DockerHandlers
from tools.handlers.edge import EdgeHandlers
from tools.handlers.environments import EnvironmentHandlers
from tools.handlers.helm import HelmHandlers
from tools.handlers.kubernetes import KubernetesHandlers
from tools.handlers.registries import RegistryHandlers
from tools.handlers.settings import SettingsHandlers
from tools.handlers.stacks import StackHandlers
from tools.handlers.system import SystemHandlers
from tools.handlers.teams import TeamHandlers
from tools.handlers.templates import TemplateHandlers
from tools.handlers.users import UserHandlers
from tools.handlers.webhooks import WebhookHandlers

__all__ = [
    "AccessGroupHandlers",
    "BackupHandlers",
    "DockerHandlers",
    "EdgeHandlers",
    "EnvironmentHandlers",
    "HelmHandlers",
    "KubernetesHandlers",
    "RegistryHandlers",
    "SettingsHandlers",
    "StackHandlers",
    "SystemHandlers",
    "TeamHandlers",
    "TemplateHandlers",
    "UserHandlers",
    "WebhookHandlers",
]
