# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the framework-free parts of the Portainer MCP server:
# the meta-tool data model, mode filtering, dispatch routing, configuration,
# argument validation and the Portainer REST client.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or the MCP SDK.  Every module
#   here can be imported and tested without a running server.
# =============================================================================
