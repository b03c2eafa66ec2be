"""Configuration settings for drop-lookup."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("DATA_DIR", BASE_DIR / "data"))
VERSIONS_FILE = os.getenv("VERSIONS_FILE", "versions.json")

# Version selected when the CLI gets neither --version nor --data-file
DEFAULT_VERSION = os.getenv("DEFAULT_VERSION", "")

# Search settings
SEARCH_CACHE_SIZE = int(os.getenv("SEARCH_CACHE_SIZE", "50"))
DEFAULT_ITEM_FILTER = os.getenv("DEFAULT_ITEM_FILTER", "related")  # related, all
DEFAULT_MONSTER_FILTER = os.getenv("DEFAULT_MONSTER_FILTER", "drops_items")  # drops_items, all

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
