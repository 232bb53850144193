# =============================================================================
# core/config.py  -  Server configuration
# =============================================================================
#
# One frozen ServerConfig is built at startup (environment first, CLI flags
# on top, see main.py) and handed to PortainerMCPServer.  Nothing else in
# the process reads the environment, so the read-only flag in particular
# cannot change after the tools are registered.
#
# ENVIRONMENT VARIABLES:
#   PORTAINER_URL               Base URL of the Portainer server (required)
#   PORTAINER_TOKEN             API access token (required)
#   PORTAINER_READ_ONLY         true → hide every write operation
#   PORTAINER_SKIP_TLS_VERIFY   true → accept self-signed certificates
#   PORTAINER_GRANULAR_TOOLS    true → one MCP tool per operation instead of
#                               grouped meta-tools
#   PORTAINER_TIMEOUT           Per-request timeout in seconds (default 30)
#   LOG_LEVEL                   Python logging level name (default INFO)
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Mapping
from urllib.parse import urlparse

_TRUE_VALUES = {"true", "1", "yes", "on"}


class ConfigError(ValueError):
    """Raised when the server configuration is incomplete or malformed."""


def _env_flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "false").strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class ServerConfig:
    """Everything the server needs to know before it registers tools."""

    server_url: str
    token: str
    read_only: bool = False
    skip_tls_verify: bool = False
    granular_tools: bool = False
    request_timeout: float = 30.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None, **overrides) -> "ServerConfig":
        """Build a config from environment variables (os.environ by default).

        Keyword overrides win over the environment, and an overridden
        variable is never parsed, so a bad PORTAINER_TIMEOUT does not matter
        once request_timeout is given.
        """
        env = os.environ if env is None else env
        if "request_timeout" not in overrides:
            timeout_raw = env.get("PORTAINER_TIMEOUT", "30")
            try:
                overrides["request_timeout"] = float(timeout_raw)
            except ValueError:
                raise ConfigError(f"PORTAINER_TIMEOUT must be a number, got {timeout_raw!r}") from None

        values = dict(
            server_url=env.get("PORTAINER_URL", "").strip(),
            token=env.get("PORTAINER_TOKEN", "").strip(),
            read_only=_env_flag(env, "PORTAINER_READ_ONLY"),
            skip_tls_verify=_env_flag(env, "PORTAINER_SKIP_TLS_VERIFY"),
            granular_tools=_env_flag(env, "PORTAINER_GRANULAR_TOOLS"),
            log_level=env.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )
        values.update(overrides)
        return cls(**values)

    def validate(self) -> "ServerConfig":
        """Raise ConfigError unless the config can reach a Portainer server."""
        parsed = urlparse(self.server_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigError(
                f"server URL must be an absolute http(s) URL, got {self.server_url!r}"
            )
        if not self.token:
            raise ConfigError("a Portainer API token is required")
        if self.request_timeout <= 0:
            raise ConfigError(f"request timeout must be positive, got {self.request_timeout}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"unknown log level {self.log_level!r}")
        return self
