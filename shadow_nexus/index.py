"""
In-memory officer index.

Built once from a loaded snapshot and never mutated afterwards; the lookup
and search engines receive it explicitly.
"""

import logging
from collections.abc import Iterable, Iterator
from types import MappingProxyType

from .models import Officer

logger = logging.getLogger(__name__)


class OfficerIndex:
    """
    Case-insensitive exact-name table plus the ordered list of officers.

    Records without a name are dropped entirely. When two records share a
    name the later one owns the exact-match entry; both stay in the ordered
    list used for scans.
    """

    def __init__(self, officers: tuple[Officer, ...], by_name: dict[str, Officer]):
        self._officers = officers
        self._by_name = MappingProxyType(by_name)

    @classmethod
    def build(cls, records: Iterable[Officer]) -> "OfficerIndex":
        """
        Index a sequence of officer records.

        Args:
            records: Parsed officers in load order; may be empty.

        Returns:
            A read-only OfficerIndex.
        """
        officers = []
        by_name: dict[str, Officer] = {}
        unnamed = 0
        for officer in records:
            if not officer.has_name:
                unnamed += 1
                continue
            officers.append(officer)
            by_name[officer.lookup_key] = officer

        if unnamed:
            logger.warning(f"Ignored {unnamed} officer records without a name")
        if len(by_name) < len(officers):
            logger.info(f"{len(officers) - len(by_name)} duplicate officer names; later records win")
        return cls(tuple(officers), by_name)

    @property
    def by_name(self) -> MappingProxyType:
        """Read-only view of the lowercased-name table."""
        return self._by_name

    def exact_match(self, query: str) -> Officer | None:
        """Officer whose name equals ``query``, ignoring case."""
        return self._by_name.get(query.lower())

    def alias_match(self, query: str) -> Officer | None:
        """First officer (load order) listing ``query`` as an alias."""
        query = query.lower()
        for officer in self._officers:
            if any(alias.lower() == query for alias in officer.aliases):
                return officer
        return None

    def all(self) -> tuple[Officer, ...]:
        """Every named officer in load order."""
        return self._officers

    def names(self) -> list[str]:
        return [officer.name for officer in self._officers]

    def __len__(self) -> int:
        return len(self._officers)

    def __iter__(self) -> Iterator[Officer]:
        return iter(self._officers)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._by_name
