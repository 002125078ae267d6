"""In-memory note collection — load, add, edit, delete, and view notes.

Composes the segmenter, tag extractor and filtering helpers into the state a
note-taking front end keeps: one list of notes in insertion order, with
filtered and sorted views computed on demand. The collection does not read
or write files; callers hand it document text and persist notes themselves.

Key class: NoteCollection.
"""

import dataclasses
import logging
import uuid
from collections import Counter
from collections.abc import Iterable, Iterator
from datetime import datetime
from zoneinfo import ZoneInfo

from .filtering import SortOrder, collect_tags, count_tags, filter_by_tag, sort_notes
from .segmenter import DEFAULT_DATE_SUFFIXES, segment_document, segment_documents
from .types import Note, SegmentedDocument

logger = logging.getLogger(__name__)


def new_note_id() -> str:
    """Synthetic source id for a manually created note."""
    return f"note-{uuid.uuid4().hex[:8]}"


class NoteCollection:
    """Caller-owned list of notes. Not thread-safe."""

    def __init__(
        self,
        notes: Iterable[Note] | None = None,
        timezone: str = "",
        date_suffixes: Iterable[str] = DEFAULT_DATE_SUFFIXES,
        sort_order: SortOrder | str = SortOrder.NEWEST,
    ) -> None:
        self._notes: list[Note] = list(notes or [])
        self.sort_order = SortOrder(sort_order)
        self._tz = ZoneInfo(timezone) if timezone else None
        self.date_suffixes = tuple(date_suffixes)

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(self._notes)

    def __getitem__(self, index: int) -> Note:
        return self._notes[index]

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, source_id: str, raw_text: str) -> SegmentedDocument:
        """Segment a document and append its notes."""
        doc = segment_document(source_id, raw_text, self.date_suffixes)
        self._notes.extend(doc.notes)
        return doc

    def load_many(self, documents: Iterable[tuple[str, str]]) -> list[SegmentedDocument]:
        """Segment a batch of documents; failed documents add no notes."""
        docs = segment_documents(documents, self.date_suffixes)
        for doc in docs:
            self._notes.extend(doc.notes)
        return docs

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def _wall_minute(self, when: datetime | None = None) -> datetime:
        """*when* (default: now) as a naive minute in the configured timezone.

        Aware datetimes are converted to the configured zone (or local time)
        before tzinfo is dropped, so every stored timestamp stays comparable.
        """
        if when is None:
            when = datetime.now(self._tz) if self._tz else datetime.now()
        elif when.tzinfo is not None:
            when = when.astimezone(self._tz)
        return when.replace(second=0, microsecond=0, tzinfo=None)

    def add(self, body: str, now: datetime | None = None) -> Note:
        """Create a note from user input, stamped with the current minute."""
        created_at = self._wall_minute(now)
        note = Note(source_id=new_note_id(), body=body, created_at=created_at)
        self._notes.append(note)
        logger.debug("Added note %s", note.source_id)
        return note

    def edit(self, index: int, body: str) -> Note:
        """Replace the body of the note at *index*. Id and timestamp are kept."""
        note = dataclasses.replace(self._notes[index], body=body)
        self._notes[index] = note
        logger.debug("Edited note %s", note.source_id)
        return note

    def delete(self, index: int) -> Note:
        """Remove and return the note at *index*."""
        note = self._notes.pop(index)
        logger.debug("Deleted note %s", note.source_id)
        return note

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def tags(self) -> set[str]:
        return collect_tags(self._notes)

    def tag_counts(self) -> Counter[str]:
        return count_tags(self._notes)

    def view(
        self,
        active_tag: str | None = None,
        order: SortOrder | str | None = None,
    ) -> list[Note]:
        """Notes carrying *active_tag* (all notes when None), sorted by time.

        *order* defaults to the collection's sort_order.
        """
        return sort_notes(
            filter_by_tag(self._notes, active_tag), order or self.sort_order
        )
