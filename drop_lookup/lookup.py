"""Lookup facade over one installed dataset.

DropLookup owns the current Dataset and one SearchEngine per entity kind.
Views call install() after loading a version, then search() and the
drill-down methods.
"""

import logging
from typing import Any, Literal

from pydantic import BaseModel, Field

from .config import SEARCH_CACHE_SIZE
from .data.loader import build_dataset
from .data.schemas import ENTITY_KINDS, Dataset, GameMap, Item, Monster, Npc, Row
from .errors import DatasetNotLoadedError, EntityNotFoundError
from .relations import referrers, resolve_indexed, resolve_refs, split_entries
from .search import SearchCache, SearchEngine, SearchResult

logger = logging.getLogger(__name__)


class RelatedRow(BaseModel):
    """A row together with its position in its collection."""

    index: int
    row: Row

    @property
    def label(self) -> str:
        return f"{self.index + 1}、{self.row.name}"


class ItemSources(BaseModel):
    """Where an item comes from."""

    item: RelatedRow
    monsters: list[RelatedRow] = Field(default_factory=list)  # monsters dropping it
    npcs: list[RelatedRow] = Field(default_factory=list)  # NPCs handing it out


class MonsterDetails(BaseModel):
    """What a monster drops and where it spawns."""

    monster: RelatedRow
    drops: list[RelatedRow] = Field(default_factory=list)
    maps: list[RelatedRow] = Field(default_factory=list)
    spawn_schedule: list[str] = Field(default_factory=list)


class RouteStep(BaseModel):
    """One way of reaching a map."""

    kind: Literal["npc_transfer", "path"]
    text: str
    npc: RelatedRow | None = None


class MapDetails(BaseModel):
    """Monsters on a map and how to get there."""

    map: RelatedRow
    monsters: list[RelatedRow] = Field(default_factory=list)
    route: list[RouteStep] = Field(default_factory=list)


class NpcDetails(BaseModel):
    """What an NPC takes, gives, and where it can send the player."""

    npc: RelatedRow
    items_taken: list[str] = Field(default_factory=list)
    items_given: list[str] = Field(default_factory=list)
    transfer_maps: list[RelatedRow] = Field(default_factory=list)


def _related(pairs: list[tuple[int, Row]]) -> list[RelatedRow]:
    return [RelatedRow(index=index, row=row) for index, row in pairs]


class DropLookup:
    """Search and relation lookups over the installed dataset."""

    def __init__(self, dataset: Dataset | None = None, cache_size: int = SEARCH_CACHE_SIZE):
        """Initialize the lookup.

        Args:
            dataset: Dataset to install right away (optional)
            cache_size: Result cache capacity per entity kind
        """
        self._dataset: Dataset | None = None
        self.generation = 0
        self.engines: dict[str, SearchEngine] = {
            kind: SearchEngine(kind, cache=SearchCache(cache_size)) for kind in ENTITY_KINDS
        }
        if dataset is not None:
            self.install(dataset)

    @property
    def dataset(self) -> Dataset:
        """The installed dataset.

        Raises:
            DatasetNotLoadedError: If nothing was installed yet
        """
        if self._dataset is None:
            raise DatasetNotLoadedError("No dataset installed; load a data version first")
        return self._dataset

    @property
    def is_loaded(self) -> bool:
        return self._dataset is not None

    def install(self, dataset: Dataset | dict[str, Any]) -> None:
        """Swap in a new dataset.

        Raw collections are validated before anything changes, so a rejected
        dataset leaves the previous one active. Every index is rebuilt and
        every cache cleared under a new generation number.
        """
        if not isinstance(dataset, Dataset):
            dataset = build_dataset(dataset)

        generation = self.generation + 1
        for kind, engine in self.engines.items():
            engine.rebuild_index(dataset.collection(kind), fingerprint=generation)
        self._dataset = dataset
        self.generation = generation
        logger.info("Installed dataset %r (generation %d)", dataset.name, generation)

    def rebuild_index(self, kind: str | None = None) -> None:
        """Rebuild the name index of one entity kind, or of all of them."""
        dataset = self.dataset
        kinds = [kind] if kind else list(ENTITY_KINDS)
        for name in kinds:
            self._engine(name).rebuild_index(dataset.collection(name))

    def clear_cache(self) -> None:
        for engine in self.engines.values():
            engine.clear_cache()

    def search(self, kind: str, keyword: str = "", filter_mode: str | None = None) -> SearchResult:
        """Search one entity kind by name.

        Args:
            kind: "items", "monsters", "maps" or "npcs"
            keyword: Fuzzy keyword; empty lists everything the filter keeps
            filter_mode: Display filter (domain default if None)
        """
        if not self.is_loaded:
            raise DatasetNotLoadedError("No dataset installed; load a data version first")
        return self._engine(kind).search(keyword, filter_mode)

    def resolve_refs(self, refs: str, kind: str) -> list[Row]:
        """Resolve a relation field against the collection of ``kind``."""
        return resolve_refs(refs, self.dataset.collection(kind))

    def get_row(self, kind: str, index: int) -> Row:
        """Get one row by position.

        Raises:
            EntityNotFoundError: If the index is outside the collection
        """
        rows = self.dataset.collection(kind)
        if not 0 <= index < len(rows):
            raise EntityNotFoundError(kind, index)
        return rows[index]

    def item_sources(self, index: int) -> ItemSources:
        """Monsters and NPCs an item can be obtained from."""
        item: Item = self.get_row("items", index)
        dataset = self.dataset
        return ItemSources(
            item=RelatedRow(index=index, row=item),
            monsters=_related(resolve_indexed(item.monster_refs, dataset.monsters)),
            npcs=_related(resolve_indexed(item.npc_refs, dataset.npcs)),
        )

    def monster_details(self, index: int) -> MonsterDetails:
        """Drops, spawn maps and timed spawns of a monster.

        Drops combine the monster's own drop list with every item that names
        this monster as a source, in item order without duplicates.
        """
        monster: Monster = self.get_row("monsters", index)
        dataset = self.dataset

        drops: dict[int, Row] = dict(resolve_indexed(monster.drop_refs, dataset.items))
        for item_index, item in referrers(dataset.items, "monster_refs", index):
            drops.setdefault(item_index, item)

        return MonsterDetails(
            monster=RelatedRow(index=index, row=monster),
            drops=_related(sorted(drops.items())),
            maps=_related(resolve_indexed(monster.map_refs, dataset.maps)),
            spawn_schedule=split_entries(monster.spawn_schedule),
        )

    def map_details(self, index: int) -> MapDetails:
        """Monsters spawning on a map and the route to it.

        The route lists NPC transfers first, then the free-text path steps.
        """
        game_map: GameMap = self.get_row("maps", index)
        dataset = self.dataset

        route = []
        for npc_index, npc in resolve_indexed(game_map.npc_refs, dataset.npcs):
            route.append(
                RouteStep(
                    kind="npc_transfer",
                    text=f"{npc.name}【{npc.location}】",
                    npc=RelatedRow(index=npc_index, row=npc),
                )
            )
        for step in split_entries(game_map.path_steps):
            route.append(RouteStep(kind="path", text=step))

        return MapDetails(
            map=RelatedRow(index=index, row=game_map),
            monsters=_related(referrers(dataset.monsters, "map_refs", index)),
            route=route,
        )

    def npc_details(self, index: int) -> NpcDetails:
        """Trades and transfer destinations of an NPC."""
        npc: Npc = self.get_row("npcs", index)
        return NpcDetails(
            npc=RelatedRow(index=index, row=npc),
            items_taken=split_entries(npc.items_taken),
            items_given=split_entries(npc.items_given),
            transfer_maps=_related(resolve_indexed(npc.transfer_targets, self.dataset.maps)),
        )

    def _engine(self, kind: str) -> SearchEngine:
        try:
            return self.engines[kind]
        except KeyError:
            raise ValueError(f"Unknown entity kind: {kind}. Available: {list(ENTITY_KINDS)}") from None
