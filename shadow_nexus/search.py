"""
Officer search and name autocomplete.

Both are plain substring filters over the index in load order. There is no
relevance ranking.
"""

import logging

from .index import OfficerIndex
from .models import Officer, SearchResult

logger = logging.getLogger(__name__)

SEARCH_DISPLAY_LIMIT = 20
AUTOCOMPLETE_LIMIT = 25


class SearchEngine:
    """Free-text search across officer names, rarity, group, traits and abilities."""

    def __init__(self, index: OfficerIndex):
        self.index = index

    def search(self, query: str) -> list[Officer]:
        """
        Every officer with a field containing ``query`` (case-insensitive).

        Matched fields: name, rarity, group, traits, captain ability
        description, officer ability description.
        """
        query = query.lower()
        if not query:
            return []
        return [
            officer
            for officer in self.index.all()
            if any(query in text for text in officer.searchable_text())
        ]

    def search_page(self, query: str, limit: int = SEARCH_DISPLAY_LIMIT) -> SearchResult:
        """Search, keeping the first ``limit`` matches and the full count."""
        matches = self.search(query)
        logger.debug(f"Search '{query}' matched {len(matches)} officers")
        return SearchResult(query=query, total=len(matches), officers=matches[: max(limit, 0)])

    def autocomplete(self, query: str, limit: int = AUTOCOMPLETE_LIMIT) -> list[str]:
        """Officer names containing ``query``, for typeahead suggestions."""
        query = query.lower()
        suggestions = []
        for officer in self.index.all():
            if len(suggestions) >= limit:
                break
            if query in officer.lookup_key:
                suggestions.append(officer.name)
        return suggestions
