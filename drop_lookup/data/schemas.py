"""Row and dataset schemas.

Rows keep the short field names used by the published data files as aliases
(``mon``, ``std``, ``mxy`` ...) so a blob can be validated directly, while code
uses the descriptive attribute names.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

NO_RELATION = "-1"

ENTITY_KINDS: tuple[str, ...] = ("items", "monsters", "maps", "npcs")


def _relation_field(value: Any) -> Any:
    """Repair a comma-list relation value before validation."""
    if value is None:
        return NO_RELATION
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    # Fractional and non-finite floats are left for validation to reject
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str) and value.strip() == "":
        return NO_RELATION
    return value


def _text_field(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class Row(BaseModel):
    """Base class for every dataset row."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def repair_name(cls, value: Any) -> Any:
        return _text_field(value)


class Item(Row):
    """An item; relations point at monsters that drop it and NPCs that give it."""

    monster_refs: str = Field(default=NO_RELATION, alias="mon")
    npc_refs: str = Field(default=NO_RELATION, alias="npc")

    @field_validator("monster_refs", "npc_refs", mode="before")
    @classmethod
    def repair_refs(cls, value: Any) -> Any:
        return _relation_field(value)


class Monster(Row):
    """A monster with its spawn maps, drops, and timed spawn entries."""

    map_refs: str = Field(default=NO_RELATION, alias="map")
    drop_refs: str = Field(default=NO_RELATION, alias="std")
    spawn_schedule: str = Field(default=NO_RELATION, alias="bot")  # free text, comma-joined

    @field_validator("map_refs", "drop_refs", "spawn_schedule", mode="before")
    @classmethod
    def repair_refs(cls, value: Any) -> Any:
        return _relation_field(value)


class GameMap(Row):
    """A map with its transfer NPCs and route steps."""

    npc_refs: str = Field(default=NO_RELATION, alias="npc")
    path_steps: str = Field(default=NO_RELATION, alias="path")  # free text, comma-joined

    @field_validator("npc_refs", "path_steps", mode="before")
    @classmethod
    def repair_refs(cls, value: Any) -> Any:
        return _relation_field(value)


class Npc(Row):
    """An NPC, where to find it, and what it trades."""

    map_name: str = Field(default="", alias="mname")
    map_coord: str = Field(default="", alias="mxy")
    items_taken: str = Field(default=NO_RELATION, alias="consumes")
    items_given: str = Field(default=NO_RELATION, alias="rewards")
    transfer_targets: str = Field(default=NO_RELATION, alias="transfer")

    @field_validator("map_name", "map_coord", mode="before")
    @classmethod
    def repair_text(cls, value: Any) -> Any:
        return _text_field(value)

    @field_validator("items_taken", "items_given", "transfer_targets", mode="before")
    @classmethod
    def repair_refs(cls, value: Any) -> Any:
        return _relation_field(value)

    @property
    def location(self) -> str:
        """Location label as shown on the site, e.g. "Town(120,45)"."""
        return f"{self.map_name}({self.map_coord})"


ROW_TYPES: dict[str, type[Row]] = {
    "items": Item,
    "monsters": Monster,
    "maps": GameMap,
    "npcs": Npc,
}


class Dataset(BaseModel):
    """One data version: four parallel collections swapped as a unit."""

    name: str = ""
    items: list[Item] = Field(default_factory=list)
    monsters: list[Monster] = Field(default_factory=list)
    maps: list[GameMap] = Field(default_factory=list)
    npcs: list[Npc] = Field(default_factory=list)

    def collection(self, kind: str) -> list[Row]:
        """Get the rows for an entity kind."""
        if kind not in ROW_TYPES:
            raise ValueError(f"Unknown entity kind: {kind}. Available: {list(ENTITY_KINDS)}")
        return getattr(self, kind)

    def is_empty(self) -> bool:
        """Check whether all four collections are empty."""
        return not (self.items or self.monsters or self.maps or self.npcs)

    def counts(self) -> dict[str, int]:
        """Row count per entity kind."""
        return {kind: len(self.collection(kind)) for kind in ENTITY_KINDS}


class VersionInfo(BaseModel):
    """A selectable data version: display name plus data file stem."""

    name: str
    data: str
