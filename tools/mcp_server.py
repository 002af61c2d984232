# =============================================================================
# tools/mcp_server.py  —  MCP Server (stdio transport binding)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Binds the Dispatcher to an MCP server that talks JSON-RPC over
#   stdin/stdout.  Each handler below is a thin wrapper: log the request,
#   hand it to the dispatcher, log the response, return it.
#
# HOW IT WORKS (the flow):
#   1. The MCP client (VS Code, Claude Desktop, ...) spawns this process
#   2. It sends resources/list, resources/read, tools/list or tools/call
#   3. The matching handler wraps it in a request value for Dispatcher.dispatch
#   4. The dispatcher calls core/ and builds the MCP result envelope
#   5. The SDK serializes the result and writes it back on stdout
#
# RESOURCE LISTING:
#   resources/list is answered by a handler that re-lists the documentation
#   directory each time, not by a fixed set of registered resources.
#
# ERRORS:
#   DocsServerError subclasses become McpError with a JSON-RPC code.  The
#   process itself never exits because of a single bad request.
# =============================================================================

import json
import logging
import sys
from typing import Any, Iterable

import anyio
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from pydantic import AnyUrl

from core.errors import DocsServerError, DocumentNotFound, InvalidArgument, UnknownTool
from tools.dispatcher import CallTool, Dispatcher, ListResources, ListTools, ReadResource, Request

SERVER_NAME = "docs-mcp-server"
SERVER_VERSION = "1.0.0"

# JSON-RPC code conventionally used by MCP servers for a missing resource.
RESOURCE_NOT_FOUND = -32002

logger = logging.getLogger("docs_mcp")

# =============================================================================
# Logging Setup
# =============================================================================
# Everything goes to STDERR: STDOUT is the MCP transport, and a stray log
# line there would corrupt the JSON-RPC stream.
#
# ANSI colours make requests and responses easy to tell apart:
#   CYAN = incoming request, YELLOW = status, GREEN = response
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(method: str, **params) -> None:
    """Log an incoming request with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{method} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(method: str, result: Any) -> Any:
    """Log the response as compact JSON in GREEN, then return it."""
    payload = result.model_dump(mode="json", exclude_none=True)
    logger.info(f"{_GREEN}  ← {method} response: {json.dumps(payload, separators=(',', ':'))}{_RESET}")
    return result


def to_mcp_error(exc: DocsServerError) -> McpError:
    """Translate a core error into the JSON-RPC error the client will see."""
    if isinstance(exc, DocumentNotFound):
        code = RESOURCE_NOT_FOUND
    elif isinstance(exc, (InvalidArgument, UnknownTool)):
        code = types.INVALID_PARAMS
    else:
        code = types.INTERNAL_ERROR
    return McpError(types.ErrorData(code=code, message=str(exc)))


def create_server(dispatcher: Dispatcher) -> Server:
    """Build the MCP server and register the four request handlers."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    async def _run(request: Request):
        method = request.kind.value
        # core/ does blocking file and network I/O; run it off the event loop.
        try:
            return _log_response(method, await anyio.to_thread.run_sync(dispatcher.dispatch, request))
        except DocsServerError as exc:
            _log_status(f"{type(exc).__name__}: {exc}")
            raise to_mcp_error(exc) from exc

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        _log_request("resources/list")
        result = await _run(ListResources())
        return result.resources

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> Iterable[ReadResourceContents]:
        _log_request("resources/read", uri=str(uri))
        result = await _run(ReadResource(str(uri)))
        return [
            ReadResourceContents(content=contents.text, mime_type=contents.mimeType)
            for contents in result.contents
        ]

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        _log_request("tools/list")
        result = await _run(ListTools())
        return result.tools

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[types.TextContent]:
        _log_request("tools/call", name=name, arguments=arguments)
        result = await _run(CallTool(name, arguments or {}))
        return result.content

    return server


async def serve(server: Server) -> None:
    """Run ``server`` over stdin/stdout until the client disconnects."""
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Docs MCP server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())
