"""Data models for notes and tokenized note content."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Union

# Wire format for created_at in to_dict()/from_dict()
_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M"


@dataclass(frozen=True)
class InvalidTimestamp:
    """Stands in for a created_at that could not be built.

    Falsy, so ``if note.created_at:`` reads naturally at call sites.
    """

    text: str  # the attempted "yyyy-MM-ddTHH:MM" string
    reason: str

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"invalid({self.text})"


@dataclass(frozen=True)
class Note:
    """A single note: one time-stamped entry of a daily file, or a manual note."""

    source_id: str  # filename for segmented notes, note-<hex> for manual ones
    body: str
    created_at: datetime | InvalidTimestamp

    @property
    def has_valid_timestamp(self) -> bool:
        return isinstance(self.created_at, datetime)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"source_id": self.source_id, "body": self.body}
        if isinstance(self.created_at, datetime):
            d["created_at"] = self.created_at.strftime(_TIMESTAMP_FORMAT)
        else:
            d["created_at"] = None
            d["created_at_error"] = self.created_at.reason
            d["created_at_text"] = self.created_at.text
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Note:
        raw = data.get("created_at")
        created_at: datetime | InvalidTimestamp
        if raw:
            try:
                created_at = datetime.strptime(raw, _TIMESTAMP_FORMAT)
            except ValueError as e:
                created_at = InvalidTimestamp(text=raw, reason=str(e))
        else:
            created_at = InvalidTimestamp(
                text=data.get("created_at_text", ""),
                reason=data.get("created_at_error", "missing timestamp"),
            )
        return cls(
            source_id=data.get("source_id", ""),
            body=data.get("body", ""),
            created_at=created_at,
        )


# ---------------------------------------------------------------------------
# Content segments
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextSegment:
    """A run of plain text, kept byte-for-byte."""

    kind: ClassVar[str] = "text"

    value: str

    @property
    def raw(self) -> str:
        return self.value


@dataclass(frozen=True)
class TagSegment:
    """A ``#a/b/c`` tag token and its decomposed path."""

    kind: ClassVar[str] = "tag"

    raw: str  # "#a/b/c"
    path: tuple[str, ...]  # ("a", "b", "c")

    def activate(self, on_tag: Callable[[str], None]) -> None:
        """Notify *on_tag* once per path component, left to right."""
        for component in self.path:
            on_tag(component)


@dataclass(frozen=True)
class ImageSegment:
    """An ``![alt](url)`` image reference. The URL is not validated."""

    kind: ClassVar[str] = "image"

    url: str
    alt_text: str
    raw: str


Segment = Union[TextSegment, TagSegment, ImageSegment]


# ---------------------------------------------------------------------------
# Segmentation result
# ---------------------------------------------------------------------------


@dataclass
class SegmentedDocument:
    """Notes produced from one source document, plus what was left behind."""

    source_id: str
    notes: list[Note] = field(default_factory=list)
    no_markers_found: bool = False
    dropped_leading_content: bool = False
    error: str = ""  # set only when segmentation raised inside a batch

    @property
    def invalid_timestamps(self) -> int:
        return sum(1 for n in self.notes if not n.has_valid_timestamp)

    @property
    def ok(self) -> bool:
        return not self.error
