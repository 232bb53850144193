"""Tests for argument accessors and validators (core/arguments.py)."""

import pytest

from core.arguments import (
    InvalidParameterError,
    ToolArguments,
    is_valid_access_level,
    is_valid_user_role,
    parse_access_map,
    parse_key_value_map,
    validate_compose_yaml,
    validate_name,
    validate_positive_id,
    validate_url,
)


# ============================================================================
# ToolArguments
# ============================================================================

class TestToolArguments:

    def test_get_string(self):
        args = ToolArguments({"name": "web"})
        assert args.get_string("name") == "web"
        assert args.get_string("missing", default="x") == "x"

    def test_required_missing_raises_with_param_name(self):
        with pytest.raises(InvalidParameterError) as exc:
            ToolArguments({}).get_string("name", required=True)
        assert exc.value.param == "name"
        assert exc.value.reason == "name is required"

    def test_none_counts_as_missing(self):
        args = ToolArguments({"id": None})
        assert not args.has("id")
        assert args.get_int("id", default=7) == 7
        with pytest.raises(InvalidParameterError):
            args.get_int("id", required=True)

    def test_wrong_type_string(self):
        with pytest.raises(InvalidParameterError, match="name must be a string"):
            ToolArguments({"name": 3}).get_string("name")

    @pytest.mark.parametrize("raw,expected", [(3, 3), (3.0, 3), ("12", 12), (" 4 ", 4)])
    def test_get_int_accepts_json_numbers(self, raw, expected):
        assert ToolArguments({"id": raw}).get_int("id") == expected

    @pytest.mark.parametrize("raw", [True, 2.5, "abc", [1]])
    def test_get_int_rejects(self, raw):
        with pytest.raises(InvalidParameterError, match="id must be an integer"):
            ToolArguments({"id": raw}).get_int("id")

    @pytest.mark.parametrize("raw,expected", [(True, True), (False, False), ("true", True), ("FALSE", False)])
    def test_get_bool(self, raw, expected):
        assert ToolArguments({"prune": raw}).get_bool("prune") is expected

    def test_get_bool_rejects_numbers(self):
        with pytest.raises(InvalidParameterError):
            ToolArguments({"prune": 1}).get_bool("prune")

    def test_get_int_list(self):
        assert ToolArguments({"ids": [1, 2.0, 3]}).get_int_list("ids") == [1, 2, 3]
        assert ToolArguments({}).get_int_list("ids") == []

    @pytest.mark.parametrize("raw", [[1, "2"], [True], [1.5], "1,2"])
    def test_get_int_list_rejects(self, raw):
        with pytest.raises(InvalidParameterError):
            ToolArguments({"ids": raw}).get_int_list("ids")

    def test_get_dict(self):
        assert ToolArguments({"settings": {"a": 1}}).get_dict("settings") == {"a": 1}
        with pytest.raises(InvalidParameterError, match="must be an object"):
            ToolArguments({"settings": [1]}).get_dict("settings")

    def test_arguments_may_be_none(self):
        assert ToolArguments(None).get_list("anything") == []


# ============================================================================
# Validators
# ============================================================================

def test_roles_and_access_levels():
    assert is_valid_user_role("edge_admin")
    assert not is_valid_user_role("root")
    assert is_valid_access_level("operator_user")
    assert not is_valid_access_level("superuser")


@pytest.mark.parametrize("value", ["", "   ", "\t\n"])
def test_validate_name_rejects_blank(value):
    with pytest.raises(InvalidParameterError, match="name cannot be empty or whitespace-only"):
        validate_name(value)


def test_validate_name_uses_param_name():
    with pytest.raises(InvalidParameterError) as exc:
        validate_name(" ", "title")
    assert exc.value.param == "title"


def test_validate_positive_id():
    validate_positive_id("id", 1)
    with pytest.raises(InvalidParameterError, match="id must be a positive integer, got 0"):
        validate_positive_id("id", 0)


@pytest.mark.parametrize("url", [
    "https://charts.bitnami.com/bitnami",
    "http://localhost:8080",
    "oci://registry-1.docker.io/bitnamicharts",
])
def test_validate_url_accepts(url):
    validate_url(url)


@pytest.mark.parametrize("url,message", [
    ("ftp://example.com", "http, https, or oci"),
    ("charts.example.com", "http, https, or oci"),
    ("https://", "must include a host"),
])
def test_validate_url_rejects(url, message):
    with pytest.raises(InvalidParameterError, match=message):
        validate_url(url)


def test_validate_compose_yaml_accepts_mapping():
    validate_compose_yaml("services:\n  web:\n    image: nginx:latest\n")


@pytest.mark.parametrize("content", ["", "services: [unclosed", "- just\n- a list\n", "plain text"])
def test_validate_compose_yaml_rejects(content):
    with pytest.raises(InvalidParameterError) as exc:
        validate_compose_yaml(content)
    assert exc.value.param == "file"


def test_parse_access_map():
    entries = [{"id": 1, "access": "standard_user"}, {"id": 2.0, "access": "readonly_user"}]
    assert parse_access_map(entries) == {1: "standard_user", 2: "readonly_user"}


@pytest.mark.parametrize("entries,message", [
    (["nope"], "invalid access entry"),
    ([{"id": "1", "access": "standard_user"}], "invalid ID"),
    ([{"id": 1}], "invalid access"),
    ([{"id": 1, "access": "god_mode"}], "invalid access level: god_mode"),
])
def test_parse_access_map_rejects(entries, message):
    with pytest.raises(InvalidParameterError, match=message):
        parse_access_map(entries, "userAccesses")


def test_parse_key_value_map():
    items = [{"key": "all", "value": "true"}, {"key": "limit", "value": "5"}]
    assert parse_key_value_map(items) == {"all": "true", "limit": "5"}

    with pytest.raises(InvalidParameterError, match="invalid value"):
        parse_key_value_map([{"key": "limit", "value": 5}])
