"""Bounded FIFO cache for search results."""

import logging
from typing import Generic, TypeVar

from pydantic import BaseModel

from .fuzzy import fold_case

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 50

T = TypeVar("T", bound=BaseModel)


def make_cache_key(domain: str, filter_mode: str, keyword: str, fingerprint: int | str) -> str:
    """Build the composite key for one search.

    Args:
        domain: Entity kind searched ("items", "monsters", ...)
        filter_mode: Display filter applied to the matches
        keyword: Search keyword; case-folded here
        fingerprint: Dataset fingerprint, changes whenever the dataset does
    """
    return f"{domain}:{filter_mode}:{fingerprint}:{fold_case(keyword)}"


class SearchCache(Generic[T]):
    """Insertion-ordered cache holding at most ``capacity`` result lists.

    When full, ``put`` evicts the oldest inserted entry. Reads do not refresh
    an entry's position. Values are deep-copied on the way in and on the way
    out, so callers can mutate what they get back.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"Cache capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._entries: dict[str, list[T]] = {}

    def get(self, key: str) -> list[T] | None:
        """Get a copy of the cached results for ``key``, or None on a miss."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        return [value.model_copy(deep=True) for value in entry]

    def put(self, key: str, values: list[T]) -> None:
        """Store a copy of ``values`` under ``key``."""
        if key not in self._entries and len(self._entries) >= self.capacity:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug("Evicted search cache entry %s", oldest)
        self._entries[key] = [value.model_copy(deep=True) for value in values]

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
