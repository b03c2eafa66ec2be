"""Dataset schemas and loading."""

from .schemas import (
    ENTITY_KINDS,
    NO_RELATION,
    Dataset,
    GameMap,
    Item,
    Monster,
    Npc,
    Row,
    VersionInfo,
)
from .loader import VersionCatalog, build_dataset, load_dataset, parse_data_blob

__all__ = [
    "ENTITY_KINDS",
    "NO_RELATION",
    "Dataset",
    "GameMap",
    "Item",
    "Monster",
    "Npc",
    "Row",
    "VersionInfo",
    "VersionCatalog",
    "build_dataset",
    "load_dataset",
    "parse_data_blob",
]
