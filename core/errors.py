# =============================================================================
# core/errors.py  —  Error Taxonomy
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Defines every failure the server can surface to a caller.  Messages only
#   ever carry the logical identity (a filename or a docs:// reference), never
#   an absolute filesystem path.
#
#   DocsServerError
#     ├── DocumentNotFound   resource/document absent
#     ├── StorageError       listing or reading the documentation dir failed
#     ├── InvalidArgument    missing or malformed tool argument
#     ├── UnknownTool        tool name not in the registry
#     └── GatewayError       weather provider answered with a non-2xx, non-404
#
# GatewayError never crosses the protocol boundary: the weather gateway turns
# it into explanatory text.  The others reach tools/ and become MCP errors.
# =============================================================================


class DocsServerError(Exception):
    """Base class for all errors raised by the docs server."""


class DocumentNotFound(DocsServerError):
    """The requested document does not exist in the documentation directory."""

    def __init__(self, identity: str):
        self.identity = identity
        super().__init__(f"Document not found: {identity}")


class StorageError(DocsServerError):
    """The documentation directory could not be listed or a document could not be read."""

    def __init__(self, identity: str, reason: str):
        self.identity = identity
        self.reason = reason
        super().__init__(f"Failed to read {identity}: {reason}")


class InvalidArgument(DocsServerError):
    def __init__(self, tool_name: str, reason: str):
        self.tool_name = tool_name
        self.reason = reason
        super().__init__(f"Invalid arguments for {tool_name}: {reason}")


class UnknownTool(DocsServerError):
    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class GatewayError(DocsServerError):
    """The weather provider returned a failure status other than 404."""

    def __init__(self, status: int):
        self.status = status
        super().__init__(f"Weather API error: {status}")
