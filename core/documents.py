# =============================================================================
# core/documents.py  —  Document Store
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads markdown files from a fixed documentation directory, on demand.
#   The filesystem is the source of truth: nothing is cached between calls,
#   nothing is ever written.
#
# IDENTITY:
#   A document is identified by its bare filename ("guide.md").  Anything
#   that looks like a path ("../secrets.md", "sub/dir.md") is not an identity
#   and is reported as not found, so reads can never leave the directory.
#
# ERRORS:
#   DocumentNotFound  the identity does not name a readable .md file
#   StorageError      the directory or a file could not be read
#   Both carry only the identity, never the directory path.
# =============================================================================

import logging
from pathlib import Path
from typing import Union

from core.errors import DocumentNotFound, StorageError
from core.models import Document

logger = logging.getLogger(__name__)

DOC_EXTENSION = ".md"


class DocumentStore:
    """Read-only view over a directory of markdown documents."""

    def __init__(self, docs_dir: Union[str, Path]):
        self.docs_dir = Path(docs_dir)

    def list_documents(self) -> list[str]:
        """Return the identities of every .md file, in directory listing order."""
        try:
            entries = list(self.docs_dir.iterdir())
        except OSError as exc:
            reason = exc.strerror or type(exc).__name__
            logger.warning("Could not list documentation directory: %s", reason)
            raise StorageError("documentation directory", reason) from exc

        return [
            entry.name
            for entry in entries
            if entry.name.endswith(DOC_EXTENSION) and entry.is_file()
        ]

    def read_document(self, identity: str) -> str:
        """Return the full text of one document."""
        path = self._resolve(identity)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise DocumentNotFound(identity) from exc
        except IsADirectoryError as exc:
            raise DocumentNotFound(identity) from exc
        except UnicodeDecodeError as exc:
            raise StorageError(identity, "content is not valid UTF-8") from exc
        except OSError as exc:
            raise StorageError(identity, exc.strerror or type(exc).__name__) from exc

    def get(self, identity: str) -> Document:
        return Document(identity=identity, content=self.read_document(identity))

    def _resolve(self, identity: str) -> Path:
        if (
            not identity
            or identity in (".", "..")
            or "/" in identity
            or "\\" in identity
            or "\x00" in identity
            or not identity.endswith(DOC_EXTENSION)
        ):
            raise DocumentNotFound(identity)
        return self.docs_dir / identity
