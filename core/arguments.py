# =============================================================================
# core/arguments.py  -  Reading and validating tool call arguments
# =============================================================================
#
# Handlers receive the raw argument mapping of an MCP call.  Values arrive
# decoded from JSON, so integers may show up as floats (3.0) and lists hold
# plain dicts.  ToolArguments gives handlers typed getters that all raise
# one exception type, InvalidParameterError, carrying the parameter name.
# The handler decorator turns it into "invalid <param> parameter: <reason>".
# =============================================================================

from typing import Any, Mapping
from urllib.parse import urlparse

import yaml

# Portainer environment roles, keyed by the access level names callers use.
ACCESS_LEVEL_ROLE_IDS: dict[str, int] = {
    "environment_administrator": 1,
    "helpdesk_user": 2,
    "standard_user": 3,
    "readonly_user": 4,
    "operator_user": 5,
}
ACCESS_LEVELS = list(ACCESS_LEVEL_ROLE_IDS)

# Portainer user roles.
USER_ROLE_IDS: dict[str, int] = {
    "admin": 1,
    "user": 2,
    "edge_admin": 3,
}
USER_ROLES = list(USER_ROLE_IDS)

_MISSING = object()


class InvalidParameterError(ValueError):
    """A tool argument is missing or has the wrong type or value."""

    def __init__(self, param: str, reason: str):
        self.param = param
        self.reason = reason
        super().__init__(reason)


def is_valid_access_level(access: str) -> bool:
    return access in ACCESS_LEVEL_ROLE_IDS


def is_valid_user_role(role: str) -> bool:
    return role in USER_ROLE_IDS


class ToolArguments:
    """Typed accessors over a call's argument mapping."""

    def __init__(self, arguments: Mapping[str, Any] | None):
        self._args = dict(arguments or {})

    def _raw(self, name: str, required: bool) -> Any:
        value = self._args.get(name)
        if value is None:
            if required:
                raise InvalidParameterError(name, f"{name} is required")
            return _MISSING
        return value

    def has(self, name: str) -> bool:
        return self._args.get(name) is not None

    def get_string(self, name: str, required: bool = False, default: str = "") -> str:
        value = self._raw(name, required)
        if value is _MISSING:
            return default
        if not isinstance(value, str):
            raise InvalidParameterError(name, f"{name} must be a string")
        return value

    def get_int(self, name: str, required: bool = False, default: int = 0) -> int:
        value = self._raw(name, required)
        if value is _MISSING:
            return default
        # bool is an int subclass; true/false is never a valid number here
        if isinstance(value, bool):
            raise InvalidParameterError(name, f"{name} must be an integer")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise InvalidParameterError(name, f"{name} must be an integer")

    def get_bool(self, name: str, required: bool = False, default: bool = False) -> bool:
        value = self._raw(name, required)
        if value is _MISSING:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
        raise InvalidParameterError(name, f"{name} must be a boolean")

    def get_list(self, name: str, required: bool = False) -> list[Any]:
        value = self._raw(name, required)
        if value is _MISSING:
            return []
        if not isinstance(value, list):
            raise InvalidParameterError(name, f"{name} must be an array")
        return value

    def get_int_list(self, name: str, required: bool = False) -> list[int]:
        result = []
        for item in self.get_list(name, required):
            if isinstance(item, bool) or not isinstance(item, (int, float)):
                raise InvalidParameterError(name, f"{name} must be an array of integers")
            if isinstance(item, float) and not item.is_integer():
                raise InvalidParameterError(name, f"{name} must be an array of integers")
            result.append(int(item))
        return result

    def get_dict(self, name: str, required: bool = False) -> dict[str, Any]:
        value = self._raw(name, required)
        if value is _MISSING:
            return {}
        if not isinstance(value, dict):
            raise InvalidParameterError(name, f"{name} must be an object")
        return value


# =============================================================================
# Validators
# =============================================================================
def validate_name(value: str, param: str = "name") -> None:
    """A name must contain something other than whitespace."""
    if not value.strip():
        raise InvalidParameterError(param, f"{param} cannot be empty or whitespace-only")


def validate_positive_id(param: str, value: int) -> None:
    if value <= 0:
        raise InvalidParameterError(param, f"{param} must be a positive integer, got {value}")


def validate_url(raw_url: str, param: str = "url") -> None:
    """Accept absolute http, https and oci URLs that include a host."""
    parsed = urlparse(raw_url)
    if parsed.scheme not in ("http", "https", "oci"):
        raise InvalidParameterError(
            param, f"URL must use http, https, or oci scheme, got {parsed.scheme!r}"
        )
    if not parsed.netloc:
        raise InvalidParameterError(param, "URL must include a host")


def validate_compose_yaml(content: str, param: str = "file") -> None:
    """Catch compose syntax errors before the file is sent to Portainer."""
    if not content.strip():
        raise InvalidParameterError(param, "compose file content cannot be empty")
    try:
        parsed = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise InvalidParameterError(param, f"invalid YAML syntax: {e}") from e
    if not isinstance(parsed, dict):
        raise InvalidParameterError(param, "invalid YAML syntax: document must be a mapping")


def parse_access_map(entries: list[Any], param: str = "accesses") -> dict[int, str]:
    """[{"id": 1, "access": "standard_user"}, ...] → {1: "standard_user"}."""
    access_map: dict[int, str] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            raise InvalidParameterError(param, f"invalid access entry: {entry!r}")

        raw_id = entry.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, (int, float)):
            raise InvalidParameterError(param, f"invalid ID: {raw_id!r}")

        access = entry.get("access")
        if not isinstance(access, str):
            raise InvalidParameterError(param, f"invalid access: {access!r}")
        if not is_valid_access_level(access):
            raise InvalidParameterError(
                param, f"invalid access level: {access} (must be one of: {', '.join(ACCESS_LEVELS)})"
            )

        access_map[int(raw_id)] = access
    return access_map


def parse_key_value_map(items: list[Any], param: str = "items") -> dict[str, str]:
    """[{"key": "a", "value": "b"}, ...] → {"a": "b"}."""
    result: dict[str, str] = {}
    for item in items:
        if not isinstance(item, dict):
            raise InvalidParameterError(param, f"invalid item: {item!r}")
        key = item.get("key")
        if not isinstance(key, str):
            raise InvalidParameterError(param, f"invalid key: {key!r}")
        value = item.get("value")
        if not isinstance(value, str):
            raise InvalidParameterError(param, f"invalid value: {value!r}")
        result[key] = value
    return result
