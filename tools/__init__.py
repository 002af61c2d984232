# =============================================================================
# tools/__init__.py
# =============================================================================
# The MCP-facing layer.
#
#   dispatcher.py  routes the four request kinds to core/ and builds the MCP
#                  result envelopes
#   mcp_server.py  binds the dispatcher to an MCP server on stdin/stdout
#
# No business logic lives here; it is all in core/.
# =============================================================================
