"""
Retrieval service for officer data.

Combines the snapshot loader, the officer index and the lookup/search engines
behind one object that the Discord bot, the MCP server and the CLI share.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from .data_loader import DataLoader
from .index import OfficerIndex
from .lookup import LookupEngine
from .models import LookupMatch, Officer, OfficerComparison, PartialFailure, SearchResult
from .search import AUTOCOMPLETE_LIMIT, SEARCH_DISPLAY_LIMIT, SearchEngine

logger = logging.getLogger(__name__)


class RetrievalService:
    """
    Unified retrieval over a single officer snapshot.

    The snapshot is read once; every query afterwards is an in-memory scan
    against the same immutable index.
    """

    def __init__(self, data_path: str | Path | None = None):
        """
        Initialize the retrieval service.

        Args:
            data_path: Snapshot file or directory. May be None when the
                       service is built with ``from_officers``.
        """
        self.data_loader = DataLoader(data_path) if data_path is not None else None
        self.load_diagnostic: str | None = None
        self._skipped = 0
        self._set_index(OfficerIndex.build([]))
        self._initialized = False

    @classmethod
    def from_officers(cls, officers: Iterable[Officer]) -> "RetrievalService":
        """Build a ready-to-use service from already parsed officers."""
        service = cls()
        service._set_index(OfficerIndex.build(officers))
        service._initialized = True
        return service

    def _set_index(self, index: OfficerIndex) -> None:
        self.index = index
        self.lookup = LookupEngine(index)
        self.search_engine = SearchEngine(index)

    def initialize(self) -> dict[str, int]:
        """
        Load the snapshot and build the index (once).

        Returns:
            Dictionary with counts of indexed and skipped officers.
        """
        if self._initialized:
            return self.stats()

        if self.data_loader is not None:
            result = self.data_loader.load_officers()
            self.load_diagnostic = result.diagnostic
            self._skipped = result.skipped
            self._set_index(OfficerIndex.build(result.officers))

        self._initialized = True
        stats = self.stats()
        logger.info(f"Initialized retrieval service: {stats}")
        return stats

    def stats(self) -> dict[str, int]:
        return {"officers": len(self.index), "skipped": self._skipped}

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def resolve(self, query: str) -> Officer | None:
        return self.lookup.resolve(query)

    def match(self, query: str) -> LookupMatch | None:
        return self.lookup.match(query)

    def resolve_pair(self, first: str, second: str) -> OfficerComparison | PartialFailure:
        return self.lookup.resolve_pair(first, second)

    # =========================================================================
    # SEARCH
    # =========================================================================

    def search(self, query: str) -> list[Officer]:
        return self.search_engine.search(query)

    def search_page(self, query: str, limit: int = SEARCH_DISPLAY_LIMIT) -> SearchResult:
        return self.search_engine.search_page(query, limit=limit)

    def autocomplete(self, query: str, limit: int = AUTOCOMPLETE_LIMIT) -> list[str]:
        return self.search_engine.autocomplete(query, limit=limit)

    def list_names(self) -> list[str]:
        return self.index.names()
