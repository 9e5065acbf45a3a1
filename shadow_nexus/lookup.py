"""
Officer lookup: resolve a free-form query to a single officer.
"""

import logging

from .index import OfficerIndex
from .models import LookupMatch, MatchTier, Officer, OfficerComparison, PartialFailure

logger = logging.getLogger(__name__)


class LookupEngine:
    """
    Resolves a query with the fallback chain exact -> alias -> prefix -> substring.

    Prefix and substring ties go to the first officer in load order.
    """

    def __init__(self, index: OfficerIndex):
        self.index = index

    def match(self, query: str) -> LookupMatch | None:
        """
        Resolve a query and report which rule matched.

        Args:
            query: Officer name or fragment, any case.

        Returns:
            LookupMatch, or None when nothing matches (a normal outcome).
        """
        query = query.lower()
        if not query.strip():
            return None

        officer = self.index.exact_match(query)
        if officer:
            return LookupMatch(officer=officer, tier=MatchTier.EXACT)

        officer = self.index.alias_match(query)
        if officer:
            return LookupMatch(officer=officer, tier=MatchTier.ALIAS)

        officers = self.index.all()
        for officer in officers:
            if officer.lookup_key.startswith(query):
                return LookupMatch(officer=officer, tier=MatchTier.PREFIX)

        for officer in officers:
            if query in officer.lookup_key:
                return LookupMatch(officer=officer, tier=MatchTier.SUBSTRING)

        logger.debug(f"No officer matches '{query}'")
        return None

    def resolve(self, query: str) -> Officer | None:
        """Officer for ``query``, or None."""
        found = self.match(query)
        return found.officer if found else None

    def resolve_pair(
        self,
        first_query: str,
        second_query: str,
    ) -> OfficerComparison | PartialFailure:
        """
        Resolve both sides of a comparison independently.

        Returns:
            OfficerComparison when both resolve, otherwise a PartialFailure
            naming the side(s) that did not.
        """
        first = self.resolve(first_query)
        second = self.resolve(second_query)
        if first is None or second is None:
            return PartialFailure(
                first_query=first_query,
                second_query=second_query,
                first_missing=first is None,
                second_missing=second is None,
            )
        return OfficerComparison(first=first, second=second)
