# =============================================================================
# tools/__init__.py
# =============================================================================
# This package is the FastMCP side of the server.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between MCP and core/.  It holds:
#     1. catalog.py     the fifteen meta-tool groups and their actions
#     2. handlers/      one mixin per Portainer area; each action is a method
#     3. mcp_server.py  the FastMCP server, registration and the Tool adapter
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT filter, route or build schemas (that's core/metatools.py
#     and core/dispatch.py)
#   - They do NOT speak HTTP themselves (that's core/portainer_client.py)
#
# TOOL CONTRACT QUALITY:
#   A meta-tool's "action" enum is the whole contract the caller sees, so
#   action names are verbs on nouns (list_users, update_stack_git) and every
#   failure message says which layer refused the call.
# =============================================================================
