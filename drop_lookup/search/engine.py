"""Keyword search over one entity collection.

Combines the name index, the fuzzy matcher and the result cache. One engine is
created per entity kind; all of them share this code and differ only in their
domain tag and display filters.
"""

import logging
from typing import Callable, Literal, Sequence

from pydantic import BaseModel, Field

from ..config import DEFAULT_ITEM_FILTER, DEFAULT_MONSTER_FILTER, SEARCH_CACHE_SIZE
from ..data.schemas import NO_RELATION, Row
from .cache import SearchCache, make_cache_key
from .fuzzy import fold_case, is_subsequence
from .index import NameIndex

logger = logging.getLogger(__name__)

DisplayFilter = Callable[[Row], bool]


def _show_all(row: Row) -> bool:
    return True


def _item_has_source(row: Row) -> bool:
    return row.monster_refs != NO_RELATION or row.npc_refs != NO_RELATION


def _monster_drops_items(row: Row) -> bool:
    return row.drop_refs != NO_RELATION


# Display filters available per entity kind, default first
DOMAIN_FILTERS: dict[str, dict[str, DisplayFilter]] = {
    "items": {"related": _item_has_source, "all": _show_all},
    "monsters": {"drops_items": _monster_drops_items, "all": _show_all},
    "maps": {"all": _show_all},
    "npcs": {"all": _show_all},
}

DEFAULT_FILTERS: dict[str, str] = {
    "items": DEFAULT_ITEM_FILTER,
    "monsters": DEFAULT_MONSTER_FILTER,
    "maps": "all",
    "npcs": "all",
}


class SearchHit(BaseModel):
    """One matching row."""

    index: int  # row position in the collection
    display_name: str
    row: Row

    @property
    def label(self) -> str:
        """List label as shown on the site: 1-based position and name."""
        return f"{self.index + 1}、{self.display_name}"


class SearchResult(BaseModel):
    """Result of a search over one collection.

    ``status`` is "no_data" when the collection itself is empty, which views
    must report differently from a search with zero matches.
    """

    domain: str
    keyword: str
    filter_mode: str
    status: Literal["ok", "no_data"] = "ok"
    hits: list[SearchHit] = Field(default_factory=list)
    cached: bool = False

    @property
    def has_data(self) -> bool:
        return self.status == "ok"

    def indices(self) -> list[int]:
        return [hit.index for hit in self.hits]


class SearchEngine:
    """Fuzzy name search over a single collection."""

    def __init__(
        self,
        domain: str,
        rows: Sequence[Row] | None = None,
        cache: SearchCache | None = None,
        filters: dict[str, DisplayFilter] | None = None,
        default_filter: str | None = None,
        fingerprint: int = 0,
    ):
        """Initialize the engine.

        Args:
            domain: Entity kind, used as the cache domain tag
            rows: Initial collection (an index is built from it)
            cache: Result cache (a private one is created if omitted)
            filters: Display filters by mode (defaults to the domain's filters)
            default_filter: Mode used when search() gets none
            fingerprint: Dataset fingerprint mixed into cache keys
        """
        self.domain = domain
        self.filters = filters if filters is not None else DOMAIN_FILTERS.get(domain, {"all": _show_all})
        if default_filter is None:
            default_filter = DEFAULT_FILTERS.get(domain)
            if default_filter not in self.filters:
                default_filter = next(iter(self.filters))
        self.default_filter = default_filter
        if self.default_filter not in self.filters:
            raise ValueError(
                f"Unknown default filter '{self.default_filter}' for {domain}. "
                f"Available: {list(self.filters)}"
            )
        self.cache = cache if cache is not None else SearchCache(SEARCH_CACHE_SIZE)
        self.rows: Sequence[Row] = []
        self.index = NameIndex()
        self.fingerprint = fingerprint
        if rows is not None:
            self.rebuild_index(rows, fingerprint)

    def rebuild_index(self, rows: Sequence[Row], fingerprint: int | None = None) -> None:
        """Replace the collection, rebuild the index and drop cached results."""
        self.cache.clear()
        self.rows = rows
        self.index = NameIndex.build(rows)
        if fingerprint is not None:
            self.fingerprint = fingerprint
        logger.debug(
            "Indexed %d %s rows under %d names", self.index.row_count, self.domain, len(self.index)
        )

    def clear_cache(self) -> None:
        self.cache.clear()

    def get_filter(self, filter_mode: str | None) -> tuple[str, DisplayFilter]:
        """Resolve a filter mode to its predicate."""
        mode = filter_mode or self.default_filter
        try:
            return mode, self.filters[mode]
        except KeyError:
            raise ValueError(
                f"Unknown filter '{mode}' for {self.domain}. Available: {list(self.filters)}"
            ) from None

    def search(self, keyword: str, filter_mode: str | None = None) -> SearchResult:
        """Find rows whose name fuzzily matches ``keyword``.

        An empty keyword lists every row passing the filter and clears the
        cache. Otherwise the keyword is case-folded (not trimmed) and results
        are served from the cache when possible. Both paths return hits in
        collection order.

        Args:
            keyword: Search keyword
            filter_mode: Display filter name; the domain default if None

        Returns:
            SearchResult for this collection
        """
        mode, display_filter = self.get_filter(filter_mode)
        keyword = keyword or ""
        result = SearchResult(domain=self.domain, keyword=keyword, filter_mode=mode)

        if not self.rows:
            result.status = "no_data"
            return result

        if keyword == "":
            self.cache.clear()
            result.hits = [
                self._hit(position, row)
                for position, row in enumerate(self.rows)
                if display_filter(row)
            ]
            return result

        needle = fold_case(keyword)
        key = make_cache_key(self.domain, mode, needle, self.fingerprint)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Search cache hit: %s", key)
            result.hits = cached
            result.cached = True
            return result

        matches = sorted(self.index.lookup(lambda name: is_subsequence(name, needle)))
        result.hits = [
            self._hit(position, self.rows[position])
            for position in matches
            if display_filter(self.rows[position])
        ]
        self.cache.put(key, result.hits)
        return result

    def _hit(self, position: int, row: Row) -> SearchHit:
        return SearchHit(index=position, display_name=row.name, row=row)
