"""Resolution of comma-list relation fields.

Every relation in the dataset uses the same convention: the field is either
"-1" (no relation) or a comma-separated list of row positions in a target
collection. Missing or malformed ids are a normal data condition here and are
skipped, never raised.
"""

import logging
from typing import Sequence, TypeVar

from .data.schemas import NO_RELATION, Row

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Row)


def split_entries(field: str | None) -> list[str]:
    """Split a comma-joined field into its non-empty entries.

    Used directly for free-text lists (spawn schedules, route steps).
    """
    if not field or field == NO_RELATION:
        return []
    return [entry for entry in field.split(",") if entry != ""]


def parse_refs(refs: str | None) -> list[int]:
    """Parse a relation field into row ids, dropping segments that are not integers."""
    ids = []
    for segment in split_entries(refs):
        try:
            ids.append(int(segment.strip()))
        except ValueError:
            logger.debug("Skipping malformed relation id %r in %r", segment, refs)
    return ids


def resolve_refs(refs: str | None, target: Sequence[R]) -> list[R]:
    """Resolve a relation field against its target collection.

    Args:
        refs: Relation field value ("-1" or comma-separated row ids)
        target: Collection the ids point into

    Returns:
        Target rows in the order their ids appear in ``refs``. Ids outside
        the collection are skipped.
    """
    rows = []
    for row_id in parse_refs(refs):
        if 0 <= row_id < len(target):
            rows.append(target[row_id])
        else:
            logger.debug("Relation id %d out of range (0..%d)", row_id, len(target) - 1)
    return rows


def resolve_indexed(refs: str | None, target: Sequence[R]) -> list[tuple[int, R]]:
    """Like resolve_refs, but keep each row's position alongside it."""
    return [
        (row_id, target[row_id])
        for row_id in parse_refs(refs)
        if 0 <= row_id < len(target)
    ]


def referrers(rows: Sequence[R], field: str, target_index: int) -> list[tuple[int, R]]:
    """Find rows whose relation ``field`` points at ``target_index``.

    This is the reverse direction of resolve_refs, e.g. every item listing a
    given monster in its ``monster_refs``.

    Returns:
        (position, row) pairs in collection order
    """
    found = []
    for position, row in enumerate(rows):
        if target_index in parse_refs(getattr(row, field, NO_RELATION)):
            found.append((position, row))
    return found
