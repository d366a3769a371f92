"""
Catalog aggregation for pyxgettext.

The catalog collects findings from every processed file, grouped by
``(context, id)``. Each group keeps its occurrences in the order they were
recorded, which is the order the files were processed and, within a file,
the order the calls were visited.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from .types import CatalogKey, Finding

logger = logging.getLogger(__name__)


class Catalog:
    """Ordered mapping from catalog keys to their occurrences."""

    def __init__(self) -> None:
        self._entries: Dict[CatalogKey, List[Finding]] = {}

    def record(self, finding: Finding) -> None:
        """
        Append a finding to the bucket for its key.

        No de-duplication is done: recording the same call site twice yields
        two occurrences, so each file must be processed at most once.

        Args:
            finding: Finding to add
        """
        bucket = self._entries.setdefault(finding.key, [])

        if finding.plural_id is not None:
            first = self.plural_id_for(finding.key)
            if first is not None and first != finding.plural_id:
                logger.warning(
                    "Conflicting plural forms for %r at %s: keeping %r, ignoring %r",
                    finding.id,
                    finding.location,
                    first,
                    finding.plural_id,
                )

        bucket.append(finding)

    def keys(self, sort: bool = False) -> List[CatalogKey]:
        """
        Return catalog keys.

        Args:
            sort: Order by id, then context, instead of insertion order

        Returns:
            List of keys
        """
        keys = list(self._entries)
        if sort:
            keys.sort(key=lambda k: (k.id, k.context))
        return keys

    def occurrences(self, key: CatalogKey) -> List[Finding]:
        return list(self._entries.get(key, []))

    def plural_id_for(self, key: CatalogKey) -> Optional[str]:
        """Return the plural id of the first occurrence that has one."""
        for finding in self._entries.get(key, []):
            if finding.plural_id is not None:
                return finding.plural_id
        return None

    def format_hint_for(self, key: CatalogKey) -> Optional[str]:
        """Return the format hint of the first occurrence that has one."""
        for finding in self._entries.get(key, []):
            if finding.format_hint:
                return finding.format_hint
        return None

    def items(self) -> Iterator[Tuple[CatalogKey, List[Finding]]]:
        for key, findings in self._entries.items():
            yield key, list(findings)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[CatalogKey]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Catalog):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"Catalog({len(self)} entries)"
