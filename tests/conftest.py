"""Root pytest configuration for drop-lookup tests."""

import json
from pathlib import Path
from typing import Any

import pytest

from drop_lookup.data.loader import build_dataset
from drop_lookup.data.schemas import Dataset
from drop_lookup.lookup import DropLookup


def sample_collections() -> dict[str, Any]:
    """Small dataset covering every relation kind.

    Row positions matter: relation fields point at them.
    """
    return {
        "DataName": "Test Season",
        "Stdlist": [
            {"name": "Fire Sword", "mon": "-1", "npc": "0"},
            {"name": "Ice Blade", "mon": "0,2", "npc": "-1"},
            {"name": "Fire Staff", "mon": "1,", "npc": "-1"},
            {"name": "Junk", "mon": "-1", "npc": "-1"},
            {"name": "fire sword", "mon": "0", "npc": "-1"},
        ],
        "Monlist": [
            {"name": "Goblin", "map": "0,1", "std": "1,4", "bot": "Every 2h,Midnight"},
            {"name": "Fire Imp", "map": "1", "std": "-1", "bot": "-1"},
            {"name": "Snow Wolf", "map": "x,7,0", "std": "1", "bot": "-1"},
        ],
        "Maplist": [
            {"name": "Green Field", "npc": "0", "path": "Town north,Cross bridge"},
            {"name": "Lava Cave", "npc": "-1", "path": "-1"},
        ],
        "Npclist": [
            {
                "name": "Blacksmith",
                "mname": "Town",
                "mxy": "120,45",
                "consumes": "Iron Ore,Gold",
                "rewards": "Fire Sword",
                "transfer": "1",
            },
        ],
    }


@pytest.fixture
def sample_raw() -> dict[str, Any]:
    """Raw collections keyed by data-file variable names."""
    return sample_collections()


@pytest.fixture
def dataset(sample_raw: dict[str, Any]) -> Dataset:
    """Validated sample dataset."""
    return build_dataset(sample_raw)


@pytest.fixture
def lookup(dataset: Dataset) -> DropLookup:
    """DropLookup with the sample dataset installed."""
    return DropLookup(dataset)


@pytest.fixture
def data_dir(tmp_path: Path, sample_raw: dict[str, Any]) -> Path:
    """Data directory with a version catalog and one JSON data file."""
    (tmp_path / "versions.json").write_text(
        json.dumps([{"name": "Test Season", "data": "season1"}]), encoding="utf-8"
    )
    (tmp_path / "season1.json").write_text(json.dumps(sample_raw), encoding="utf-8")
    return tmp_path
