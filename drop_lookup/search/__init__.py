"""Fuzzy name search: matcher, inverted index, result cache and engine."""

from .cache import SearchCache, make_cache_key
from .engine import DOMAIN_FILTERS, SearchEngine, SearchHit, SearchResult
from .fuzzy import fold_case, is_subsequence
from .index import NameIndex

__all__ = [
    "DOMAIN_FILTERS",
    "NameIndex",
    "SearchCache",
    "SearchEngine",
    "SearchHit",
    "SearchResult",
    "fold_case",
    "is_subsequence",
    "make_cache_key",
]
