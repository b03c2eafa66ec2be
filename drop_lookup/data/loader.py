"""Dataset loading and the data version catalog.

Published data versions are script files of the form::

    var DataName = "Season 3";
    var Stdlist = [{name: "Fire Sword", mon: "4,9", npc: "-1"}, ...];
    var Monlist = [...];
    var Maplist = [...];
    var Npclist = [...];

Object keys may be bare identifiers and strings may use single quotes, so the
literals are normalised to JSON before decoding. Nothing here is evaluated.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..config import DATA_DIR, VERSIONS_FILE
from ..errors import DatasetFormatError, UnknownVersionError
from ..sanitize import sanitize_version_name
from .schemas import Dataset, VersionInfo

logger = logging.getLogger(__name__)

# Blob variable name -> Dataset field
BLOB_FIELDS = {
    "DataName": "name",
    "Stdlist": "items",
    "Monlist": "monsters",
    "Maplist": "maps",
    "Npclist": "npcs",
}
COLLECTION_VARS = ("Stdlist", "Monlist", "Maplist", "Npclist")

_ASSIGNMENT_RE = re.compile(
    r"(?:\b(?:var|let|const)\s+|\bwindow\.)(DataName|Stdlist|Monlist|Maplist|Npclist)\s*=\s*"
)


def _read_string(text: str, start: int) -> tuple[str, int]:
    """Read a quoted JS string starting at ``start`` and re-quote it for JSON."""
    quote = text[start]
    out = ['"']
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\" and i + 1 < len(text):
            nxt = text[i + 1]
            if nxt == "'":
                out.append("'")
            else:
                out.append(ch + nxt)
            i += 2
            continue
        if ch == quote:
            out.append('"')
            return "".join(out), i + 1
        if ch == '"':
            out.append('\\"')
        else:
            out.append(ch)
        i += 1
    raise DatasetFormatError(f"Unterminated string starting at offset {start}")


def _drop_trailing_comma(out: list[str]) -> None:
    j = len(out) - 1
    while j >= 0 and out[j].isspace():
        j -= 1
    if j >= 0 and out[j] == ",":
        del out[j]


def _skip_comment(text: str, i: int) -> int:
    if text.startswith("//", i):
        end = text.find("\n", i)
        return len(text) if end == -1 else end
    end = text.find("*/", i + 2)
    if end == -1:
        raise DatasetFormatError(f"Unterminated comment at offset {i}")
    return end + 2


def _read_literal(text: str, start: int) -> tuple[str, int]:
    """Read one JS literal at ``start`` and return it as JSON text plus the end offset."""
    out: list[str] = []
    depth = 0
    i = start
    while i < len(text):
        ch = text[i]
        if ch in "\"'":
            chunk, i = _read_string(text, i)
            out.append(chunk)
            if depth == 0:
                return "".join(out), i
            continue
        if text.startswith("//", i) or text.startswith("/*", i):
            i = _skip_comment(text, i)
            continue
        if ch in "[{":
            depth += 1
        elif ch in "]}":
            _drop_trailing_comma(out)
            depth -= 1
            out.append(ch)
            i += 1
            if depth == 0:
                return "".join(out), i
            if depth < 0:
                break
            continue
        elif ch.isalpha() or ch in "_$":
            j = i
            while j < len(text) and (text[j].isalnum() or text[j] in "_$"):
                j += 1
            word = text[i:j]
            k = j
            while k < len(text) and text[k].isspace():
                k += 1
            if depth > 0 and k < len(text) and text[k] == ":":
                out.append(json.dumps(word))
            else:
                out.append(word)
            i = j
            if depth == 0:
                return "".join(out), i
            continue
        elif depth == 0 and ch in ";\n":
            break
        out.append(ch)
        i += 1
    if depth != 0 or not "".join(out).strip():
        raise DatasetFormatError(f"Unbalanced or empty literal at offset {start}")
    return "".join(out), i


def parse_data_blob(text: str) -> Dataset:
    """Parse a data version script into a Dataset.

    Args:
        text: Contents of a data version file

    Returns:
        The validated Dataset

    Raises:
        DatasetFormatError: If no collection is defined or a literal is invalid
    """
    if not text or not text.strip():
        raise DatasetFormatError("Data blob is empty")

    raw: dict[str, Any] = {}
    pos = 0
    while True:
        match = _ASSIGNMENT_RE.search(text, pos)
        if match is None:
            break
        var_name = match.group(1)
        # Resume after the literal so assignments quoted inside it are skipped
        literal, pos = _read_literal(text, match.end())
        try:
            raw[var_name] = json.loads(literal, strict=False)
        except json.JSONDecodeError as e:
            raise DatasetFormatError(f"Cannot decode {var_name}: {e}") from e

    if not any(var in raw for var in COLLECTION_VARS):
        raise DatasetFormatError("Data blob defines none of " + ", ".join(COLLECTION_VARS))

    return build_dataset(raw)


def build_dataset(raw: dict[str, Any]) -> Dataset:
    """Validate raw collections into a Dataset.

    Accepts either blob variable names (``Stdlist``...) or Dataset field names
    (``items``...). Missing collections become empty; ``null`` rows become
    empty rows so that row positions stay intact.
    """
    fields: dict[str, Any] = {}
    for key, value in raw.items():
        field = BLOB_FIELDS.get(key, key)
        if field not in Dataset.model_fields:
            continue
        if field == "name":
            fields["name"] = "" if value is None else str(value)
            continue
        if value is None:
            value = []
        if not isinstance(value, list):
            raise DatasetFormatError(f"{key} must be a list, got {type(value).__name__}")
        fields[field] = [{} if row is None else row for row in value]

    try:
        dataset = Dataset.model_validate(fields)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise DatasetFormatError(
            f"Invalid row at {location}: {first['msg']} ({e.error_count()} error(s))"
        ) from e

    logger.info("Loaded dataset %r: %s", dataset.name, dataset.counts())
    return dataset


def load_dataset(path: Path | str) -> Dataset:
    """Load a dataset from a ``.json`` file or a data version script."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        text = f.read()

    if path.suffix.lower() == ".json":
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise DatasetFormatError(f"Cannot decode {path.name}: {e}") from e
        if not isinstance(raw, dict):
            raise DatasetFormatError(f"{path.name} must hold a JSON object")
        return build_dataset(raw)

    return parse_data_blob(text)


class VersionCatalog:
    """The list of selectable data versions.

    Versions are read from ``versions.json`` in the data directory, a JSON
    list of ``{"name": ..., "data": ...}`` objects where ``data`` is the stem
    of the version's data file.
    """

    def __init__(self, versions: list[VersionInfo], data_dir: Path | None = None):
        self.versions = versions
        self.data_dir = data_dir or DATA_DIR

    @classmethod
    def from_file(cls, data_dir: Path | None = None) -> "VersionCatalog":
        """Load the catalog from the data directory.

        A missing catalog file yields an empty catalog.
        """
        data_dir = data_dir or DATA_DIR
        file_path = data_dir / VERSIONS_FILE
        if not file_path.exists():
            logger.warning("No version catalog at %s", file_path)
            return cls([], data_dir)

        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
        try:
            versions = [VersionInfo(**entry) for entry in data]
        except (TypeError, ValidationError) as e:
            raise DatasetFormatError(f"Invalid version catalog {file_path}: {e}") from e
        return cls(versions, data_dir)

    def is_valid(self, data: str) -> bool:
        """Check that ``data`` names a listed version."""
        return isinstance(data, str) and any(v.data == data for v in self.versions)

    def get(self, data: str) -> VersionInfo:
        """Get a version by its data stem.

        Raises:
            UnknownVersionError: If the version is not listed
        """
        for version in self.versions:
            if version.data == data:
                return version
        raise UnknownVersionError(f"Unknown data version '{data}'")

    def data_path(self, data: str) -> Path:
        """Path of the data file for a listed version.

        ``.json`` is preferred when both a JSON and a ``.js`` file exist.
        """
        version = self.get(data)
        stem = sanitize_version_name(version.data)
        if not stem:
            raise UnknownVersionError(f"Data version '{data}' has no usable file name")
        json_path = self.data_dir / f"{stem}.json"
        if json_path.exists():
            return json_path
        return self.data_dir / f"{stem}.js"

    def load(self, data: str) -> Dataset:
        """Load the dataset of a listed version."""
        dataset = load_dataset(self.data_path(data))
        if not dataset.name:
            dataset.name = self.get(data).name
        return dataset

    def __len__(self) -> int:
        return len(self.versions)

    def __iter__(self):
        return iter(self.versions)
