# =============================================================================
# core/registry.py  —  Capability Registry
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Declares what the server exposes:
#     - RESOURCES: one per markdown file, re-listed from disk on every call
#     - TOOLS:     exactly two, fixed at import time (search_docs, get_weather)
#
# RESOURCE REFERENCES:
#   docs://<filename>.  Filenames are percent-encoded on the way out and
#   decoded on the way in, so  uri → identity → content  always lands on the
#   same file, even for names with spaces or non-ASCII characters.
# =============================================================================

import urllib.parse

from core.documents import DocumentStore
from core.errors import DocumentNotFound
from core.models import DOC_MIME_TYPE, ResourceDescriptor, ToolDescriptor, ToolParameter, display_name

RESOURCE_SCHEME = "docs"
RESOURCE_PREFIX = f"{RESOURCE_SCHEME}://"


# -----------------------------------------------------------------------------
# Tool catalog
# -----------------------------------------------------------------------------
SEARCH_DOCS = ToolDescriptor(
    name="search_docs",
    description="Search through documentation files for specific content",
    parameters=(
        ToolParameter("query", "string", "Search query string"),
    ),
)

GET_WEATHER = ToolDescriptor(
    name="get_weather",
    description=(
        "Get current weather for a city using OpenWeatherMap API. Supports city names, "
        "'City, Country' format (e.g., 'London, UK'), or 'City, State, Country' for US "
        "cities (e.g., 'Madison, Wisconsin, US')"
    ),
    parameters=(
        ToolParameter(
            "city",
            "string",
            "City name. For best results use: 'City, Country' (e.g., 'Amsterdam, NL') or "
            "'City, State, Country' for US cities (e.g., 'Madison, Wisconsin, US'). State "
            "abbreviations (WI, CA) may not work - use full state names.",
        ),
    ),
)

TOOLS: tuple[ToolDescriptor, ...] = (SEARCH_DOCS, GET_WEATHER)


def uri_for(identity: str) -> str:
    """docs://<identity>, percent-encoding anything not safe in a URI authority."""
    return RESOURCE_PREFIX + urllib.parse.quote(identity, safe="")


def identity_from_uri(uri: str) -> str:
    """Reverse of uri_for().  Raises DocumentNotFound for foreign schemes."""
    if not uri.startswith(RESOURCE_PREFIX):
        raise DocumentNotFound(uri)
    # URL libraries may append a slash to an empty path.
    encoded = uri[len(RESOURCE_PREFIX):].rstrip("/")
    return urllib.parse.unquote(encoded)


def describe(identity: str) -> ResourceDescriptor:
    return ResourceDescriptor(
        uri=uri_for(identity),
        name=f"Documentation: {display_name(identity)}",
        mime_type=DOC_MIME_TYPE,
        description=f"Internal documentation from {identity}",
    )


class CapabilityRegistry:
    def __init__(self, store: DocumentStore):
        self.store = store

    def list_resources(self) -> list[ResourceDescriptor]:
        """One descriptor per document currently in the store."""
        return [describe(identity) for identity in self.store.list_documents()]

    def list_tools(self) -> list[ToolDescriptor]:
        return list(TOOLS)
