"""Drop-rate lookup: fuzzy name search and relation traversal over game data."""

from .data import Dataset, GameMap, Item, Monster, Npc, VersionCatalog, load_dataset
from .errors import (
    DatasetFormatError,
    DatasetNotLoadedError,
    DropLookupError,
    EntityNotFoundError,
    UnknownVersionError,
)
from .lookup import DropLookup
from .relations import resolve_refs
from .sanitize import escape
from .search import SearchResult, is_subsequence

__version__ = "0.1.0"

__all__ = [
    "Dataset",
    "DatasetFormatError",
    "DatasetNotLoadedError",
    "DropLookup",
    "DropLookupError",
    "EntityNotFoundError",
    "GameMap",
    "Item",
    "Monster",
    "Npc",
    "SearchResult",
    "UnknownVersionError",
    "VersionCatalog",
    "escape",
    "is_subsequence",
    "load_dataset",
    "resolve_refs",
]
