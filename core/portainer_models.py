# =============================================================================
# core/portainer_models.py  -  Simplified Portainer models
# =============================================================================
#
# Portainer's raw API objects are large and full of fields an agent never
# reasons about.  For the most frequently listed resources the handlers
# convert the raw JSON into these small dataclasses and return
# asdict(...) instead.
#
# Every convert_* function accepts the raw dict (or None) and never raises
# on missing keys: absent fields fall back to empty values.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any

from core.arguments import ACCESS_LEVEL_ROLE_IDS, USER_ROLE_IDS

_ROLE_NAMES = {role_id: name for name, role_id in USER_ROLE_IDS.items()}
_ACCESS_NAMES = {role_id: name for name, role_id in ACCESS_LEVEL_ROLE_IDS.items()}

_ENVIRONMENT_STATUS = {1: "active", 2: "inactive"}
_ENVIRONMENT_TYPES = {
    1: "docker-local",
    2: "docker-agent",
    3: "azure-aci",
    4: "docker-edge-agent",
    5: "kubernetes-local",
    6: "kubernetes-agent",
    7: "kubernetes-edge-agent",
}


@dataclass
class SystemStatus:
    version: str
    instance_id: str


@dataclass
class MOTD:
    title: str
    message: str


@dataclass
class User:
    id: int
    username: str
    role: str


@dataclass
class Team:
    id: int
    name: str
    member_ids: list[int] = field(default_factory=list)


@dataclass
class EnvironmentTag:
    id: int
    name: str
    environment_ids: list[int] = field(default_factory=list)


@dataclass
class EnvironmentGroup:
    """A Portainer edge group."""

    id: int
    name: str
    environment_ids: list[int] = field(default_factory=list)
    tag_ids: list[int] = field(default_factory=list)


@dataclass
class AccessGroup:
    """A Portainer endpoint group with its access policies."""

    id: int
    name: str
    environment_ids: list[int] = field(default_factory=list)
    user_accesses: dict[int, str] = field(default_factory=dict)
    team_accesses: dict[int, str] = field(default_factory=dict)


@dataclass
class Environment:
    id: int
    name: str
    status: str
    type: str
    tag_ids: list[int] = field(default_factory=list)
    user_accesses: dict[int, str] = field(default_factory=dict)
    team_accesses: dict[int, str] = field(default_factory=dict)


def _ints(values: Any) -> list[int]:
    result = []
    for v in values or []:
        try:
            result.append(int(v))
        except (TypeError, ValueError):
            continue
    return result


def convert_access_policies(policies: Any) -> dict[int, str]:
    """{"3": {"RoleId": 4}} → {3: "readonly_user"}."""
    result: dict[int, str] = {}
    for raw_id, policy in (policies or {}).items():
        try:
            key = int(raw_id)
        except (TypeError, ValueError):
            continue
        role_id = (policy or {}).get("RoleId", 0)
        result[key] = _ACCESS_NAMES.get(role_id, "unknown")
    return result


def access_policies_payload(access_map: dict[int, str]) -> dict[str, dict[str, int]]:
    """Inverse of convert_access_policies, in the shape Portainer expects."""
    return {str(k): {"RoleId": ACCESS_LEVEL_ROLE_IDS[v]} for k, v in access_map.items()}


def convert_system_status(raw: dict | None) -> SystemStatus:
    raw = raw or {}
    return SystemStatus(version=raw.get("Version", ""), instance_id=raw.get("InstanceID", ""))


def convert_motd(raw: dict | None) -> MOTD:
    raw = raw or {}
    return MOTD(title=raw.get("Title", ""), message=raw.get("Message", ""))


def convert_user(raw: dict | None) -> User:
    raw = raw or {}
    return User(
        id=int(raw.get("Id", 0)),
        username=raw.get("Username", ""),
        role=_ROLE_NAMES.get(raw.get("Role", 0), "unknown"),
    )


def convert_team(raw: dict | None, memberships: list[dict] | None = None) -> Team:
    raw = raw or {}
    team_id = int(raw.get("Id", 0))
    members = [int(m.get("UserID", 0)) for m in memberships or [] if m.get("TeamID") == team_id]
    return Team(id=team_id, name=raw.get("Name", ""), member_ids=members)


def convert_tag(raw: dict | None) -> EnvironmentTag:
    raw = raw or {}
    # Portainer keys the tagged endpoints by ID string: {"1": true, "4": true}
    return EnvironmentTag(
        id=int(raw.get("ID", 0)),
        name=raw.get("Name", ""),
        environment_ids=sorted(_ints((raw.get("Endpoints") or {}).keys())),
    )


def convert_edge_group(raw: dict | None) -> EnvironmentGroup:
    raw = raw or {}
    return EnvironmentGroup(
        id=int(raw.get("Id", 0)),
        name=raw.get("Name", ""),
        environment_ids=_ints(raw.get("Endpoints")),
        tag_ids=_ints(raw.get("TagIds")),
    )


def convert_access_group(raw: dict | None, environments: list[dict] | None = None) -> AccessGroup:
    raw = raw or {}
    group_id = int(raw.get("Id", 0))
    return AccessGroup(
        id=group_id,
        name=raw.get("Name", ""),
        environment_ids=[int(e.get("Id", 0)) for e in environments or [] if e.get("GroupId") == group_id],
        user_accesses=convert_access_policies(raw.get("UserAccessPolicies")),
        team_accesses=convert_access_policies(raw.get("TeamAccessPolicies")),
    )


def convert_environment(raw: dict | None) -> Environment:
    raw = raw or {}
    return Environment(
        id=int(raw.get("Id", 0)),
        name=raw.get("Name", ""),
        status=_ENVIRONMENT_STATUS.get(raw.get("Status", 0), "unknown"),
        type=_ENVIRONMENT_TYPES.get(raw.get("Type", 0), "unknown"),
        tag_ids=_ints(raw.get("TagIds")),
        user_accesses=convert_access_policies(raw.get("UserAccessPolicies")),
        team_accesses=convert_access_policies(raw.get("TeamAccessPolicies")),
    )
