"""Inverted name index over one entity collection."""

from typing import Callable, Iterator, Sequence

from ..data.schemas import Row
from .fuzzy import fold_case


class NameIndex:
    """Maps case-folded entity names to the row positions carrying that name.

    Keys iterate in order of first occurrence; rows sharing a name keep the
    order they were encountered in. An index is never patched in place: build
    a new one whenever the backing collection is replaced.
    """

    def __init__(self, by_name: dict[str, list[int]] | None = None):
        self._by_name: dict[str, list[int]] = by_name or {}

    @classmethod
    def build(cls, rows: Sequence[Row]) -> "NameIndex":
        """Build an index from a collection.

        Args:
            rows: The collection; row position is the row's identity

        Returns:
            A new NameIndex
        """
        by_name: dict[str, list[int]] = {}
        for position, row in enumerate(rows):
            if not row.name:
                continue
            by_name.setdefault(fold_case(row.name), []).append(position)
        return cls(by_name)

    def lookup(self, predicate: Callable[[str], bool]) -> Iterator[int]:
        """Scan every key and yield the rows of keys accepted by ``predicate``.

        Row indices come out in key order, not collection order.
        """
        for name, positions in self._by_name.items():
            if predicate(name):
                yield from positions

    def keys(self) -> list[str]:
        return list(self._by_name)

    @property
    def row_count(self) -> int:
        """Number of rows held by the index."""
        return sum(len(positions) for positions in self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)
