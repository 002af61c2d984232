# =============================================================================
# tools/dispatcher.py  —  Request Dispatcher
# =============================================================================
#
# WHAT THIS FILE DOES:
#   The protocol-facing front door.  Takes one of the four request kinds,
#   routes it to core/, and shapes the answer into the MCP result envelope:
#
#     LIST_RESOURCES  → { resources: [ {uri, name, mimeType, description} ] }
#     READ_RESOURCE   → { contents:  [ {uri, mimeType, text} ] }
#     LIST_TOOLS      → { tools:     [ {name, description, inputSchema} ] }
#     CALL_TOOL       → { content:   [ {type: "text", text} ] }
#
#   Every request is self-contained.  The dispatcher keeps no state between
#   calls; it only holds references to the (stateless) core components.
#
# ARGUMENT VALIDATION:
#   Tool arguments are validated against a pydantic model BEFORE dispatch.
#   A missing or mistyped argument is an InvalidArgument, never a crash
#   deeper in core/.
# =============================================================================

import json
import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from mcp import types
from pydantic import BaseModel, ValidationError

from core.documents import DocumentStore
from core.errors import DocumentNotFound, InvalidArgument, StorageError, UnknownTool
from core.registry import CapabilityRegistry, identity_from_uri
from core.search import SearchEngine
from core.weather import WeatherGateway

logger = logging.getLogger(__name__)


class RequestKind(str, Enum):
    LIST_RESOURCES = "resources/list"
    READ_RESOURCE = "resources/read"
    LIST_TOOLS = "tools/list"
    CALL_TOOL = "tools/call"


class ToolName(str, Enum):
    SEARCH_DOCS = "search_docs"
    GET_WEATHER = "get_weather"


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ListResources:
    kind = RequestKind.LIST_RESOURCES


@dataclass(frozen=True)
class ReadResource:
    uri: str
    kind = RequestKind.READ_RESOURCE


@dataclass(frozen=True)
class ListTools:
    kind = RequestKind.LIST_TOOLS


@dataclass(frozen=True)
class CallTool:
    name: str
    arguments: dict = field(default_factory=dict)
    kind = RequestKind.CALL_TOOL


Request = Union[ListResources, ReadResource, ListTools, CallTool]


# -----------------------------------------------------------------------------
# Tool argument schemas
# -----------------------------------------------------------------------------
class SearchDocsArguments(BaseModel):
    query: str


class GetWeatherArguments(BaseModel):
    city: str


def _validate(tool: ToolName, model: type[BaseModel], arguments: Optional[dict]) -> Any:
    try:
        return model.model_validate(arguments or {})
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'arguments'}: {error['msg']}"
            for error in exc.errors()
        )
        raise InvalidArgument(tool.value, problems) from exc


class Dispatcher:
    """Routes the four request kinds to the core components."""

    def __init__(
        self,
        store: DocumentStore,
        weather: WeatherGateway,
        registry: Optional[CapabilityRegistry] = None,
        search: Optional[SearchEngine] = None,
    ):
        self.store = store
        self.weather = weather
        self.registry = registry or CapabilityRegistry(store)
        self.search = search or SearchEngine(store)

    def dispatch(self, request: Request) -> Union[
        types.ListResourcesResult,
        types.ReadResourceResult,
        types.ListToolsResult,
        types.CallToolResult,
    ]:
        match request:
            case ListResources():
                return self.list_resources()
            case ReadResource(uri=uri):
                return self.read_resource(uri)
            case ListTools():
                return self.list_tools()
            case CallTool(name=name, arguments=arguments):
                return self.call_tool(name, arguments)
            case _:
                raise TypeError(f"Not a request: {request!r}")

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------
    def list_resources(self) -> types.ListResourcesResult:
        return types.ListResourcesResult(
            resources=[
                types.Resource(
                    uri=descriptor.uri,
                    name=descriptor.name,
                    mimeType=descriptor.mime_type,
                    description=descriptor.description,
                )
                for descriptor in self.registry.list_resources()
            ]
        )

    def read_resource(self, uri: str) -> types.ReadResourceResult:
        identity = identity_from_uri(uri)
        try:
            document = self.store.get(identity)
        except DocumentNotFound as exc:
            raise DocumentNotFound(uri) from exc
        except StorageError as exc:
            raise StorageError(uri, exc.reason) from exc

        return types.ReadResourceResult(
            contents=[
                types.TextResourceContents(uri=uri, mimeType=document.mime_type, text=document.content)
            ]
        )

    # -------------------------------------------------------------------------
    # Tools
    # -------------------------------------------------------------------------
    def list_tools(self) -> types.ListToolsResult:
        return types.ListToolsResult(
            tools=[
                types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
                for tool in self.registry.list_tools()
            ]
        )

    def call_tool(self, name: str, arguments: Optional[dict] = None) -> types.CallToolResult:
        try:
            tool = ToolName(name)
        except ValueError:
            raise UnknownTool(name) from None

        if tool is ToolName.SEARCH_DOCS:
            args = _validate(tool, SearchDocsArguments, arguments)
            results = self.search.search(args.query)
            logger.debug("search_docs(%r) → %d result(s)", args.query, len(results))
            text = json.dumps([asdict(result) for result in results], indent=2, ensure_ascii=False)
        elif tool is ToolName.GET_WEATHER:
            args = _validate(tool, GetWeatherArguments, arguments)
            report = self.weather.get_weather(args.city)
            if report.observation is None:
                logger.debug("get_weather(%r) → no observation", args.city)
            else:
                logger.debug(
                    "get_weather(%r) → %s %d°C, %s",
                    args.city,
                    "demo" if report.demo else "live",
                    report.observation.temperature_c,
                    report.observation.description,
                )
            text = report.text
        else:
            raise UnknownTool(name)

        return types.CallToolResult(content=[types.TextContent(type="text", text=text)])
