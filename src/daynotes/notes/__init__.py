"""Note engine — segmentation, tag extraction, tokenization and filtering.

Provides segment()/segment_document() for splitting daily files into notes,
extract_tags() for hierarchical tags, tokenize() for render-ready segments,
and NoteCollection for caller-owned note state.
"""

from .collection import NoteCollection
from .filtering import SortOrder, collect_tags, count_tags, filter_by_tag, sort_notes
from .segmenter import segment, segment_document, segment_documents
from .tags import extract_tags, extract_tags_ordered, tag_paths
from .tokenizer import image_urls, render_plain, tokenize
from .types import (
    ImageSegment,
    InvalidTimestamp,
    Note,
    Segment,
    SegmentedDocument,
    TagSegment,
    TextSegment,
)

__all__ = [
    "ImageSegment",
    "InvalidTimestamp",
    "Note",
    "NoteCollection",
    "Segment",
    "SegmentedDocument",
    "SortOrder",
    "TagSegment",
    "TextSegment",
    "collect_tags",
    "count_tags",
    "extract_tags",
    "extract_tags_ordered",
    "filter_by_tag",
    "image_urls",
    "render_plain",
    "segment",
    "segment_document",
    "segment_documents",
    "sort_notes",
    "tag_paths",
    "tokenize",
]
