# =============================================================================
# tools/__init__.py
# =============================================================================
# The FastMCP binding for the Context Repo adapter.
#
# ARCHITECTURAL ROLE:
#   tools/ is the transport layer.  It registers the core/ catalog as MCP
#   tools and resources and forwards each call to the dispatcher.  It does
#   NOT build HTTP requests or reshape responses; that is core/'s job.
# =============================================================================
