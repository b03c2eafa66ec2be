"""Tests for the DropLookup facade."""

import pytest

from drop_lookup.data.loader import build_dataset
from drop_lookup.data.schemas import Dataset, Item, Npc
from drop_lookup.errors import DatasetFormatError, DatasetNotLoadedError, EntityNotFoundError
from drop_lookup.lookup import DropLookup


class TestNotLoaded:
    """Calls before any dataset is installed."""

    def test_search_unready(self):
        """search() should signal the unready state."""
        with pytest.raises(DatasetNotLoadedError):
            DropLookup().search("items", "fire")

    def test_resolve_unready(self):
        """resolve_refs() should signal the unready state."""
        with pytest.raises(DatasetNotLoadedError):
            DropLookup().resolve_refs("0", "npcs")

    def test_drill_down_unready(self):
        """Drill-down views should signal the unready state."""
        with pytest.raises(DatasetNotLoadedError):
            DropLookup().item_sources(0)

    def test_is_loaded(self, dataset: Dataset):
        """is_loaded should track installation."""
        lookup = DropLookup()
        assert lookup.is_loaded is False

        lookup.install(dataset)
        assert lookup.is_loaded is True


class TestInstall:
    """Tests for dataset installation."""

    def test_generation_bumps(self, dataset: Dataset):
        """Every install should bump the generation."""
        lookup = DropLookup()
        lookup.install(dataset)
        lookup.install(dataset)

        assert lookup.generation == 2
        assert all(engine.fingerprint == 2 for engine in lookup.engines.values())

    def test_accepts_raw_collections(self, sample_raw):
        """Raw dicts should be validated on install."""
        lookup = DropLookup()
        lookup.install(sample_raw)

        assert lookup.dataset.name == "Test Season"

    def test_rejected_dataset_keeps_previous(self, lookup: DropLookup):
        """A dataset failing validation should not replace the active one."""
        with pytest.raises(DatasetFormatError):
            lookup.install({"Stdlist": [{"name": ["bad"]}]})

        assert lookup.generation == 1
        assert lookup.search("items", "firesw").indices() == [0, 4]

    def test_swap_supersedes_cached_results(self, lookup: DropLookup):
        """Results cached for one dataset must not leak into the next."""
        lookup.search("items", "fire")
        same_size = build_dataset(
            {
                "Stdlist": [
                    {"name": "Frost Axe", "mon": "0"},
                    {"name": "Fire Bow", "mon": "0"},
                    {"name": "Rope", "mon": "0"},
                    {"name": "Torch", "mon": "0"},
                    {"name": "Flint", "mon": "0"},
                ]
            }
        )

        lookup.install(same_size)
        result = lookup.search("items", "fire")

        assert result.cached is False
        assert [hit.display_name for hit in result.hits] == ["Fire Bow"]

    def test_clear_cache(self, lookup: DropLookup):
        """clear_cache() should empty every engine's cache."""
        lookup.search("items", "fire")
        lookup.search("monsters", "gob")

        lookup.clear_cache()

        assert all(len(engine.cache) == 0 for engine in lookup.engines.values())

    def test_rebuild_index(self, lookup: DropLookup):
        """rebuild_index() should pick up changes to the installed rows."""
        lookup.dataset.items.append(Item(name="Fire Ring", npc="0"))

        lookup.rebuild_index("items")

        assert lookup.search("items", "fring").indices() == [5]


class TestSearch:
    """Tests for DropLookup.search."""

    def test_spec_scenario(self):
        """A single related item should be found and resolve to its NPC."""
        lookup = DropLookup(
            build_dataset(
                {
                    "Stdlist": [{"name": "Fire Sword", "mon": "-1", "npc": "0"}],
                    "Npclist": [{"name": "Blacksmith"}],
                }
            )
        )

        result = lookup.search("items", "firesw", "all")
        assert result.indices() == [0]

        npcs = lookup.resolve_refs(result.hits[0].row.npc_refs, "npcs")
        assert [npc.name for npc in npcs] == ["Blacksmith"]

    def test_empty_kind_reports_no_data(self):
        """A kind without rows should report no data."""
        lookup = DropLookup(build_dataset({"Stdlist": [{"name": "Gem", "npc": "0"}]}))

        assert lookup.search("maps", "").status == "no_data"
        assert lookup.search("items", "").status == "ok"

    def test_unknown_kind(self, lookup: DropLookup):
        """Unknown kinds should raise ValueError."""
        with pytest.raises(ValueError, match="Unknown entity kind"):
            lookup.search("quests", "x")

    def test_monster_filter(self, lookup: DropLookup):
        """Monsters without drops should be hidden unless asked for."""
        assert lookup.search("monsters", "").indices() == [0, 2]
        assert lookup.search("monsters", "", "all").indices() == [0, 1, 2]


class TestDrillDown:
    """Tests for the drill-down views."""

    def test_item_sources(self, lookup: DropLookup):
        """Item sources should list monsters and NPCs."""
        sources = lookup.item_sources(1)

        assert sources.item.row.name == "Ice Blade"
        assert [m.index for m in sources.monsters] == [0, 2]
        assert sources.npcs == []

    def test_item_sources_npc(self, lookup: DropLookup):
        """NPC sources should resolve."""
        sources = lookup.item_sources(0)

        assert sources.monsters == []
        assert [n.row.name for n in sources.npcs] == ["Blacksmith"]

    def test_monster_details(self, lookup: DropLookup):
        """Monster details should merge own drops with reverse lookups."""
        details = lookup.monster_details(0)

        assert [d.index for d in details.drops] == [1, 4]
        assert [m.row.name for m in details.maps] == ["Green Field", "Lava Cave"]
        assert details.spawn_schedule == ["Every 2h", "Midnight"]

    def test_monster_details_reverse_only(self, lookup: DropLookup):
        """Drops found only through item relations should be listed."""
        details = lookup.monster_details(1)

        assert [d.row.name for d in details.drops] == ["Fire Staff"]
        assert details.spawn_schedule == []

    def test_monster_details_skips_bad_map_ids(self, lookup: DropLookup):
        """Malformed and out-of-range map ids should be skipped."""
        details = lookup.monster_details(2)

        assert [m.index for m in details.maps] == [0]
        assert [d.index for d in details.drops] == [1]

    def test_map_details(self, lookup: DropLookup):
        """Map details should list monsters then the route."""
        details = lookup.map_details(0)

        assert [m.row.name for m in details.monsters] == ["Goblin", "Snow Wolf"]
        assert [step.kind for step in details.route] == ["npc_transfer", "path", "path"]
        assert details.route[0].text == "Blacksmith【Town(120,45)】"
        assert details.route[0].npc.index == 0
        assert [step.text for step in details.route[1:]] == ["Town north", "Cross bridge"]

    def test_map_without_route(self, lookup: DropLookup):
        """Maps entered by trigger should have no route."""
        details = lookup.map_details(1)

        assert [m.index for m in details.monsters] == [0, 1]
        assert details.route == []

    def test_npc_details(self, lookup: DropLookup):
        """NPC details should list trades and transfer maps."""
        details = lookup.npc_details(0)

        assert details.items_taken == ["Iron Ore", "Gold"]
        assert details.items_given == ["Fire Sword"]
        assert [m.row.name for m in details.transfer_maps] == ["Lava Cave"]

    def test_npc_without_trades(self):
        """An NPC with no data should have empty details."""
        lookup = DropLookup(Dataset(npcs=[Npc(name="Guard")]))

        details = lookup.npc_details(0)

        assert details.items_taken == []
        assert details.transfer_maps == []

    @pytest.mark.parametrize(
        "method,index",
        [
            ("item_sources", 5),
            ("monster_details", -1),
            ("map_details", 2),
            ("npc_details", 1),
        ],
    )
    def test_out_of_range(self, lookup: DropLookup, method: str, index: int):
        """Unknown rows should raise EntityNotFoundError."""
        with pytest.raises(EntityNotFoundError):
            getattr(lookup, method)(index)

    def test_entity_not_found_is_index_error(self, lookup: DropLookup):
        """EntityNotFoundError should also be an IndexError."""
        with pytest.raises(IndexError):
            lookup.get_row("items", 99)
