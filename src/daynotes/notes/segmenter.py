"""Segmenter — split a daily markdown file into time-stamped notes.

A daily file is named after its date and holds one entry per time marker:

    2024-05-01.md
        - 09:00
        hello
        - 10:30
        world

Each ``- HH:MM`` line opens a new note; the lines that follow, up to the
next marker, are its body. The note's timestamp is the file's date plus the
marker's time. Lines before the first marker belong to no note and are
dropped, which SegmentedDocument reports so callers can decide what to do.

Key functions: segment(), segment_document(), segment_documents(),
               build_timestamp().
"""

import logging
import re
from collections.abc import Iterable
from datetime import date, datetime

from .patterns import DATE_STEM_RE, ENTRY_MARKER_RE
from .types import InvalidTimestamp, Note, SegmentedDocument

logger = logging.getLogger(__name__)

DEFAULT_DATE_SUFFIXES: tuple[str, ...] = (".md", ".markdown")

_PATH_SEP_RE = re.compile(r"[\\/]")


def date_stem(source_id: str, suffixes: Iterable[str] = DEFAULT_DATE_SUFFIXES) -> str:
    """Return the last path component of *source_id* without its date suffix.

    >>> date_stem('journal/2024-05-01.md')
    '2024-05-01'
    """
    name = _PATH_SEP_RE.split(source_id)[-1]
    lowered = name.lower()
    for suffix in suffixes:
        if suffix and lowered.endswith(suffix.lower()):
            return name[: -len(suffix)]
    return name


def build_timestamp(
    source_id: str,
    hour: str,
    minute: str,
    suffixes: Iterable[str] = DEFAULT_DATE_SUFFIXES,
) -> datetime | InvalidTimestamp:
    """Combine the date encoded in *source_id* with an ``HH``/``MM`` pair.

    Returns an InvalidTimestamp instead of guessing when the date cannot be
    parsed or the time is out of range.
    """
    stem = date_stem(source_id, suffixes)
    text = f"{stem}T{hour}:{minute}"

    if not DATE_STEM_RE.match(stem):
        return InvalidTimestamp(
            text=text,
            reason=f"source id {source_id!r} does not name a yyyy-MM-dd date",
        )
    try:
        day = date.fromisoformat(stem)
    except ValueError as e:
        return InvalidTimestamp(text=text, reason=f"invalid date {stem!r}: {e}")

    h, m = int(hour), int(minute)
    if h > 23 or m > 59:
        return InvalidTimestamp(text=text, reason=f"time out of range: {hour}:{minute}")
    return datetime(day.year, day.month, day.day, h, m)


def _split_lines(raw_text: str) -> list[str]:
    """Split on newline; a trailing newline does not start another line."""
    lines = raw_text.split("\n")
    if raw_text.endswith("\n"):
        lines.pop()
    return lines


def _finish_body(parts: list[str]) -> str:
    """Collapse trailing line terminators to a single newline."""
    body = "".join(parts).rstrip("\r\n")
    return body + "\n" if body else ""


def segment_document(
    source_id: str,
    raw_text: str,
    suffixes: Iterable[str] = DEFAULT_DATE_SUFFIXES,
) -> SegmentedDocument:
    """Split one document into notes and report what was dropped."""
    suffixes = tuple(suffixes)
    doc = SegmentedDocument(source_id=source_id)

    created_at: datetime | InvalidTimestamp | None = None
    parts: list[str] = []

    def flush(stamp: datetime | InvalidTimestamp) -> None:
        doc.notes.append(
            Note(source_id=source_id, body=_finish_body(parts), created_at=stamp)
        )

    for line in _split_lines(raw_text):
        m = ENTRY_MARKER_RE.match(line)
        if m:
            if created_at is not None:
                flush(created_at)
            created_at = build_timestamp(source_id, m.group(1), m.group(2), suffixes)
            if isinstance(created_at, InvalidTimestamp):
                logger.warning(
                    "Invalid timestamp in %s: %s (%s)",
                    source_id,
                    created_at.text,
                    created_at.reason,
                )
            parts = []
        elif created_at is not None:
            parts.append(line + "\n")
        elif line.strip():
            doc.dropped_leading_content = True

    if created_at is not None:
        flush(created_at)
    else:
        doc.no_markers_found = True

    if doc.no_markers_found:
        logger.debug("No entry markers in %s", source_id)
    elif doc.dropped_leading_content:
        logger.debug("Dropped content before first entry marker in %s", source_id)
    logger.debug("Segmented %s: %d notes", source_id, len(doc.notes))
    return doc


def segment(
    source_id: str,
    raw_text: str,
    suffixes: Iterable[str] = DEFAULT_DATE_SUFFIXES,
) -> list[Note]:
    """Split one document into notes.

    >>> [n.body for n in segment('2024-05-01.md', '- 09:00\\nhello\\n- 10:30\\nworld\\n')]
    ['hello\\n', 'world\\n']
    """
    return segment_document(source_id, raw_text, suffixes).notes


def segment_documents(
    documents: Iterable[tuple[str, str]],
    suffixes: Iterable[str] = DEFAULT_DATE_SUFFIXES,
) -> list[SegmentedDocument]:
    """Segment many ``(source_id, raw_text)`` pairs.

    A document that fails is logged and returned with ``error`` set; the
    rest of the batch is still processed.
    """
    suffixes = tuple(suffixes)
    results: list[SegmentedDocument] = []
    for index, entry in enumerate(documents):
        # Label used when the entry is too malformed to yield its own source id
        label = f"<document {index}>"
        try:
            source_id, raw_text = entry
            label = str(source_id)
            results.append(segment_document(source_id, raw_text, suffixes))
        except Exception as e:
            logger.exception("Failed to segment %s", label)
            results.append(SegmentedDocument(source_id=label, error=str(e)))
    if results:
        total = sum(len(d.notes) for d in results)
        failed = sum(1 for d in results if not d.ok)
        logger.info(
            "Segmented %d documents: %d notes, %d failed", len(results), total, failed
        )
    return results
