# =============================================================================
# main.py  -  Entry Point for the Portainer MCP server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py --server https://portainer.local:9443 --token ptr_xxx
#
#   Every flag has an environment variable twin (see core/config.py), and a
#   .env file in the working directory is loaded first, so the usual setup
#   is a .env with PORTAINER_URL / PORTAINER_TOKEN and no flags at all.
#
# WHAT HAPPENS:
#   1. Loads .env, reads the environment, applies CLI flags on top
#   2. Validates the resulting ServerConfig (exit status 2 if unusable)
#   3. Builds PortainerMCPServer and registers its tools, grouped
#      meta-tools by default, one tool per operation with --granular-tools
#   4. Serves MCP over stdio until the client goes away
#
# USEFUL FLAGS:
#   --read-only      hide every operation that changes Portainer state
#   --list-tools     print the registered tools and exit
# =============================================================================

import argparse
import logging
import sys

from dotenv import load_dotenv

# Load PORTAINER_* variables from .env before anything reads the environment.
load_dotenv()

from core.config import ConfigError, ServerConfig
from core.metatools import CatalogError
from tools.mcp_server import create_server, describe_tools


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="portainer-mcp",
        description="MCP server exposing Portainer management as grouped meta-tools.",
    )
    parser.add_argument("--server", help="Portainer base URL (env: PORTAINER_URL)")
    parser.add_argument("--token", help="Portainer API token (env: PORTAINER_TOKEN)")
    parser.add_argument("--read-only", action="store_true", default=None,
                        help="expose read operations only (env: PORTAINER_READ_ONLY)")
    parser.add_argument("--skip-tls-verify", action="store_true", default=None,
                        help="do not verify the server certificate (env: PORTAINER_SKIP_TLS_VERIFY)")
    parser.add_argument("--granular-tools", action="store_true", default=None,
                        help="one tool per operation instead of meta-tools (env: PORTAINER_GRANULAR_TOOLS)")
    parser.add_argument("--timeout", type=float, help="request timeout in seconds (env: PORTAINER_TIMEOUT)")
    parser.add_argument("--log-level", help="logging level, e.g. DEBUG (env: LOG_LEVEL)")
    parser.add_argument("--list-tools", action="store_true",
                        help="print the registered tools as JSON and exit")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, env=None) -> ServerConfig:
    """Environment first, then any flag the user actually passed."""
    overrides = {
        "server_url": args.server,
        "token": args.token,
        "read_only": args.read_only,
        "skip_tls_verify": args.skip_tls_verify,
        "granular_tools": args.granular_tools,
        "request_timeout": args.timeout,
        "log_level": args.log_level.upper() if args.log_level else None,
    }
    given = {k: v for k, v in overrides.items() if v is not None}
    return ServerConfig.from_env(env, **given).validate()


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"portainer-mcp: {e}", file=sys.stderr)
        return 2

    logging.getLogger().setLevel(config.log_level)

    try:
        server = create_server(config)
    except CatalogError as e:
        logging.error(f"Refusing to start: {e}")
        return 1

    if args.list_tools:
        print(describe_tools(server))
        return 0

    server.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
