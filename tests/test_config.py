"""Tests for ServerConfig and the command line in main.py."""

import pytest

import main
from core.config import ConfigError, ServerConfig


def test_from_env_reads_everything():
    env = {
        "PORTAINER_URL": "https://portainer.local:9443",
        "PORTAINER_TOKEN": "ptr_abc",
        "PORTAINER_READ_ONLY": "true",
        "PORTAINER_SKIP_TLS_VERIFY": "1",
        "PORTAINER_GRANULAR_TOOLS": "no",
        "PORTAINER_TIMEOUT": "12.5",
        "LOG_LEVEL": "debug",
    }
    config = ServerConfig.from_env(env)

    assert config.server_url == "https://portainer.local:9443"
    assert config.token == "ptr_abc"
    assert config.read_only is True
    assert config.skip_tls_verify is True
    assert config.granular_tools is False
    assert config.request_timeout == 12.5
    assert config.log_level == "DEBUG"


def test_from_env_defaults():
    config = ServerConfig.from_env({})
    assert config.read_only is False
    assert config.request_timeout == 30.0
    assert config.log_level == "INFO"


def test_bad_timeout_is_a_config_error():
    with pytest.raises(ConfigError, match="PORTAINER_TIMEOUT"):
        ServerConfig.from_env({"PORTAINER_TIMEOUT": "soon"})


@pytest.mark.parametrize("overrides,message", [
    ({"server_url": ""}, "http\\(s\\) URL"),
    ({"server_url": "portainer.local"}, "http\\(s\\) URL"),
    ({"token": ""}, "token is required"),
    ({"request_timeout": 0}, "timeout must be positive"),
    ({"log_level": "LOUD"}, "unknown log level"),
])
def test_validate_rejects(overrides, message):
    values = {"server_url": "https://p.local", "token": "t"}
    values.update(overrides)
    with pytest.raises(ConfigError, match=message):
        ServerConfig(**values).validate()


def test_validate_returns_self():
    config = ServerConfig(server_url="http://p.local:9000", token="t")
    assert config.validate() is config


def test_config_is_frozen():
    config = ServerConfig(server_url="http://p.local", token="t")
    with pytest.raises(AttributeError):
        config.read_only = True


def test_flags_override_environment():
    env = {"PORTAINER_URL": "https://env.local", "PORTAINER_TOKEN": "env-token"}
    args = main.parse_args(["--server", "https://flag.local", "--read-only", "--timeout", "5"])

    config = main.build_config(args, env)

    assert config.server_url == "https://flag.local"
    assert config.token == "env-token"
    assert config.read_only is True
    assert config.request_timeout == 5.0


def test_timeout_flag_overrides_malformed_environment_value():
    env = {"PORTAINER_URL": "https://env.local", "PORTAINER_TOKEN": "t", "PORTAINER_TIMEOUT": "soon"}

    config = main.build_config(main.parse_args(["--timeout", "12"]), env)

    assert config.request_timeout == 12.0


def test_malformed_timeout_without_flag_still_fails():
    env = {"PORTAINER_URL": "https://env.local", "PORTAINER_TOKEN": "t", "PORTAINER_TIMEOUT": "soon"}
    with pytest.raises(ConfigError, match="PORTAINER_TIMEOUT"):
        main.build_config(main.parse_args([]), env)


def test_unset_flags_keep_environment_values():
    env = {"PORTAINER_URL": "https://env.local", "PORTAINER_TOKEN": "t", "PORTAINER_READ_ONLY": "true"}
    config = main.build_config(main.parse_args([]), env)
    assert config.read_only is True


def test_main_exits_2_on_bad_config(monkeypatch, capsys):
    monkeypatch.delenv("PORTAINER_URL", raising=False)
    monkeypatch.delenv("PORTAINER_TOKEN", raising=False)

    assert main.main([]) == 2
    assert "portainer-mcp:" in capsys.readouterr().err
