# =============================================================================
# core/__init__.py
# =============================================================================
# Business logic for the docs MCP server: the document store, search, the
# weather gateway and the capability registry.
#
# Nothing in this package imports the MCP SDK.  Every module here can be
# used and tested without a protocol library or network access.
# =============================================================================
