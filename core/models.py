# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of every piece of information that flows
# through the server.  They carry no behavior beyond small derived properties.
#
# LIFECYCLES:
#   - Document is materialized fresh from disk on every list/read request.
#   - ResourceDescriptor, SearchResult and WeatherObservation live only for
#     the duration of one response.
#   - ToolDescriptor instances are static: exactly two exist per process.
# =============================================================================

from dataclasses import dataclass
from typing import Optional

DOC_MIME_TYPE = "text/markdown"


def display_name(identity: str) -> str:
    """The identity minus its extension ("guide.md" → "guide")."""
    stem, _, _ = identity.rpartition(".")
    return stem or identity


# -----------------------------------------------------------------------------
# Document — one markdown file in the documentation directory
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Document:
    """A documentation file, identified by its bare filename."""

    identity: str                      # "guide.md" — the filename, extension included
    content: str                       # Raw UTF-8 text
    mime_type: str = DOC_MIME_TYPE


# -----------------------------------------------------------------------------
# ResourceDescriptor — a Document as presented in the resource catalog
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ResourceDescriptor:
    uri: str                           # "docs://guide.md"
    name: str                          # "Documentation: guide"
    mime_type: str                     # "text/markdown"
    description: str                   # "Internal documentation from guide.md"


# -----------------------------------------------------------------------------
# ToolParameter / ToolDescriptor — static tool metadata
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolParameter:
    name: str
    type: str                          # JSON-schema type, e.g. "string"
    description: str
    required: bool = True


@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description and input schema of a callable tool."""

    name: str
    description: str
    parameters: tuple[ToolParameter, ...] = ()

    @property
    def input_schema(self) -> dict:
        """The parameters rendered as a JSON-schema object."""
        return {
            "type": "object",
            "properties": {
                p.name: {"type": p.type, "description": p.description}
                for p in self.parameters
            },
            "required": [p.name for p in self.parameters if p.required],
        }


# -----------------------------------------------------------------------------
# SearchResult — one matching document, returned whole
# -----------------------------------------------------------------------------
# No scoring, no snippets: membership is binary and order follows the
# directory listing.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchResult:
    file: str
    content: str


# -----------------------------------------------------------------------------
# WeatherObservation — current conditions, normalized
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class WeatherObservation:
    """Current conditions for one place.

    Either synthesized as fixed placeholder values (demo mode) or derived
    from the provider's response (live mode).
    """

    city: str
    country: str
    temperature_c: int                 # Rounded to the nearest whole degree
    description: str                   # Provider's first-listed condition
    humidity_pct: float                # Passed through unrounded
    wind_speed_ms: float               # Passed through unrounded
    pressure_hpa: Optional[int] = None # Only reported by the demo placeholder
