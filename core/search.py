# =============================================================================
# core/search.py  —  Search Engine
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Case-insensitive substring search over every document in the store.
#
# MATCH SEMANTICS:
#   A document matches iff  query.lower() in content.lower().
#   - The query is used verbatim: no regex, no tokenizing, no stemming.
#   - The empty query matches every document.
#   - Results keep the store's listing order and carry the FULL content.
#
# There is no index: every call lists and reads the whole directory.  A read
# failure on any document fails the whole search (StorageError); partial
# results are never returned.
# =============================================================================

import logging

from core.documents import DocumentStore
from core.models import SearchResult

logger = logging.getLogger(__name__)


class SearchEngine:
    def __init__(self, store: DocumentStore):
        self.store = store

    def search(self, query: str) -> list[SearchResult]:
        needle = query.lower()
        results = []
        for identity in self.store.list_documents():
            content = self.store.read_document(identity)
            if needle in content.lower():
                results.append(SearchResult(file=identity, content=content))

        logger.debug("search %r matched %d document(s)", query, len(results))
        return results
