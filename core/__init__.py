# =============================================================================
# core/__init__.py
# =============================================================================
# The API-translation layer: everything between "operation name + arguments"
# and "ToolResult".
#
#   config.py      Settings (credential, base URL) read once from the env
#   api_client.py  one HTTP call → payload or OperationError
#   catalog.py     the discoverable OperationDescriptor list
#   operations.py  per-operation request builders and renderers
#   dispatcher.py  name → operation → ToolResult, never raises
#   resources.py   contextrepo://capabilities
#
# Nothing in this package imports FastMCP.  The MCP binding lives in tools/.
# =============================================================================
