"""Tag filtering, the global tag index, and chronological ordering."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from enum import Enum

from .tags import extract_tags
from .types import Note


class SortOrder(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"


def filter_by_tag(notes: Iterable[Note], tag: str | None) -> list[Note]:
    """Return the notes whose tag set contains *tag* exactly.

    A component match, not a prefix match: ``proj`` matches ``#proj/a`` but
    ``pro`` does not. No tag means no filter.
    """
    if not tag:
        return list(notes)
    return [n for n in notes if tag in extract_tags(n.body)]


def collect_tags(notes: Iterable[Note]) -> set[str]:
    """Union of every note's tags."""
    tags: set[str] = set()
    for note in notes:
        tags |= extract_tags(note.body)
    return tags


def count_tags(notes: Iterable[Note]) -> Counter[str]:
    """Number of notes carrying each tag."""
    counts: Counter[str] = Counter()
    for note in notes:
        counts.update(extract_tags(note.body))
    return counts


def sort_notes(
    notes: Iterable[Note], order: SortOrder | str = SortOrder.NEWEST
) -> list[Note]:
    """Sort notes by created_at; ties keep their input order.

    Notes with an invalid timestamp go last, in input order, whichever
    direction is requested.
    """
    order = SortOrder(order)
    valid: list[Note] = []
    invalid: list[Note] = []
    for note in notes:
        (valid if note.has_valid_timestamp else invalid).append(note)
    # list.sort stays stable with reverse=True
    valid.sort(key=lambda n: n.created_at, reverse=order is SortOrder.NEWEST)
    return valid + invalid
