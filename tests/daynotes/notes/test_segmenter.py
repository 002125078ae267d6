"""Tests for notes/segmenter.py — splitting daily files into notes."""

import logging
from datetime import datetime

import pytest

from daynotes.notes.segmenter import (
    build_timestamp,
    date_stem,
    segment,
    segment_document,
    segment_documents,
)
from daynotes.notes.types import InvalidTimestamp


class TestSegment:
    def test_two_entries(self):
        notes = segment("2024-05-01.md", "- 09:00\nhello\n- 10:30\nworld\n")
        assert [n.body for n in notes] == ["hello\n", "world\n"]
        assert notes[0].created_at == datetime(2024, 5, 1, 9, 0)
        assert notes[1].created_at == datetime(2024, 5, 1, 10, 30)
        assert all(n.source_id == "2024-05-01.md" for n in notes)

    def test_orphan_line_dropped(self):
        notes = segment("2024-05-01.md", "orphan line\n- 09:00\nreal note\n")
        assert len(notes) == 1
        assert notes[0].body == "real note\n"

    def test_empty_input(self):
        assert segment("2024-05-01.md", "") == []

    def test_no_markers(self):
        assert segment("2024-05-01.md", "just some text\n#tag\n") == []

    def test_consecutive_markers_give_empty_body(self):
        notes = segment("2024-05-01.md", "- 09:00\n- 09:30\nsecond\n")
        assert [n.body for n in notes] == ["", "second\n"]

    def test_internal_blank_lines_kept(self):
        notes = segment("2024-05-01.md", "- 09:00\na\n\nb\n\n\n- 10:00\n")
        assert notes[0].body == "a\n\nb\n"
        assert notes[1].body == ""

    def test_missing_trailing_newline(self):
        notes = segment("2024-05-01.md", "- 09:00\nhello")
        assert notes[0].body == "hello\n"

    def test_lines_kept_verbatim(self):
        notes = segment("2024-05-01.md", "- 09:00\n  indented  \n\t- bullet\n")
        assert notes[0].body == "  indented  \n\t- bullet\n"

    def test_crlf_line_endings(self):
        notes = segment("2024-05-01.md", "- 09:00\r\nhello\r\nthere\r\n")
        assert len(notes) == 1
        assert notes[0].body == "hello\r\nthere\n"
        assert notes[0].created_at == datetime(2024, 5, 1, 9, 0)

    def test_deterministic(self):
        text = "- 08:15\nfirst #a\n- 12:00\n![x](y.png)\n"
        first = segment("2024-05-01.md", text)
        second = segment("2024-05-01.md", text)
        assert first == second


class TestEntryMarker:
    @pytest.mark.parametrize(
        "line",
        ["- 09:00", "-09:00", "   - 09:00", "\t-\t09:00", "- 09:00 standup", "- 09:001"],
    )
    def test_recognized(self, line: str):
        notes = segment("2024-05-01.md", f"{line}\nbody\n")
        assert len(notes) == 1
        assert notes[0].created_at == datetime(2024, 5, 1, 9, 0)

    @pytest.mark.parametrize(
        "line",
        ["* 09:00", "- 9:00", "09:00", "- 09.00", "text - 09:00", "- ０９:００"],
    )
    def test_not_a_marker(self, line: str):
        assert segment("2024-05-01.md", f"{line}\nbody\n") == []

    def test_marker_line_text_not_in_body(self):
        notes = segment("2024-05-01.md", "- 09:00 standup\nbody\n")
        assert notes[0].body == "body\n"

    def test_marker_inside_note_splits_it(self):
        notes = segment("2024-05-01.md", "- 09:00\nlist:\n  - 10:00\n")
        assert [n.body for n in notes] == ["list:\n", ""]


class TestInvalidTimestamps:
    def test_out_of_range_time(self):
        notes = segment("2024-05-01.md", "- 27:99\nlate\n")
        assert len(notes) == 1
        ts = notes[0].created_at
        assert isinstance(ts, InvalidTimestamp)
        assert ts.text == "2024-05-01T27:99"
        assert "out of range" in ts.reason
        assert notes[0].body == "late\n"
        assert not notes[0].has_valid_timestamp

    def test_minute_out_of_range(self):
        ts = build_timestamp("2024-05-01.md", "23", "60")
        assert isinstance(ts, InvalidTimestamp)

    def test_edges_in_range(self):
        assert build_timestamp("2024-05-01.md", "00", "00") == datetime(2024, 5, 1, 0, 0)
        assert build_timestamp("2024-05-01.md", "23", "59") == datetime(2024, 5, 1, 23, 59)

    def test_source_without_date(self):
        notes = segment("scratch.md", "- 09:00\nhello\n")
        ts = notes[0].created_at
        assert isinstance(ts, InvalidTimestamp)
        assert "scratch.md" in ts.reason

    def test_impossible_calendar_date(self):
        ts = build_timestamp("2024-02-30.md", "09", "00")
        assert isinstance(ts, InvalidTimestamp)
        assert "invalid date" in ts.reason

    def test_leap_day(self):
        assert build_timestamp("2024-02-29.md", "09", "00") == datetime(2024, 2, 29, 9, 0)

    def test_invalid_timestamp_logged(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="daynotes.notes.segmenter"):
            segment("2024-05-01.md", "- 25:00\nx\n")
        assert "Invalid timestamp" in caplog.text
        assert "2024-05-01T25:00" in caplog.text

    def test_other_notes_unaffected(self):
        notes = segment("2024-05-01.md", "- 99:00\na\n- 09:00\nb\n")
        assert not notes[0].has_valid_timestamp
        assert notes[1].created_at == datetime(2024, 5, 1, 9, 0)


class TestDateStem:
    def test_plain(self):
        assert date_stem("2024-05-01.md") == "2024-05-01"

    def test_nested_path(self):
        assert date_stem("journal/2024/05/2024-05-01.md") == "2024-05-01"

    def test_windows_path(self):
        assert date_stem("C:\\notes\\2024-05-01.md") == "2024-05-01"

    def test_markdown_suffix(self):
        assert date_stem("2024-05-01.markdown") == "2024-05-01"

    def test_suffix_case_insensitive(self):
        assert date_stem("2024-05-01.MD") == "2024-05-01"

    def test_no_suffix(self):
        assert date_stem("2024-05-01") == "2024-05-01"

    def test_custom_suffixes(self):
        assert date_stem("2024-05-01.txt", suffixes=(".txt",)) == "2024-05-01"
        assert date_stem("2024-05-01.txt") == "2024-05-01.txt"

    def test_path_source_builds_timestamp(self):
        notes = segment("journal/2024-05-01.md", "- 07:45\nrun\n")
        assert notes[0].created_at == datetime(2024, 5, 1, 7, 45)


class TestSegmentDocument:
    def test_clean_document(self):
        doc = segment_document("2024-05-01.md", "- 09:00\nhello\n")
        assert len(doc.notes) == 1
        assert doc.no_markers_found is False
        assert doc.dropped_leading_content is False
        assert doc.ok

    def test_reports_dropped_leading_content(self):
        doc = segment_document("2024-05-01.md", "---\ndate: 2024-05-01\n---\n- 09:00\nx\n")
        assert doc.dropped_leading_content is True
        assert doc.no_markers_found is False

    def test_blank_leading_lines_not_reported(self):
        doc = segment_document("2024-05-01.md", "\n   \n- 09:00\nx\n")
        assert doc.dropped_leading_content is False

    def test_reports_no_markers(self):
        doc = segment_document("2024-05-01.md", "whole file, no entries\n")
        assert doc.notes == []
        assert doc.no_markers_found is True
        assert doc.dropped_leading_content is True

    def test_empty_document(self):
        doc = segment_document("2024-05-01.md", "")
        assert doc.no_markers_found is True
        assert doc.dropped_leading_content is False

    def test_counts_invalid_timestamps(self):
        doc = segment_document("2024-05-01.md", "- 09:00\na\n- 30:00\nb\n- 24:00\nc\n")
        assert doc.invalid_timestamps == 2


class TestSegmentDocuments:
    def test_batch(self):
        docs = segment_documents(
            [
                ("2024-05-01.md", "- 09:00\na\n"),
                ("2024-05-02.md", "- 10:00\nb\n- 11:00\nc\n"),
            ]
        )
        assert [len(d.notes) for d in docs] == [1, 2]
        assert [d.source_id for d in docs] == ["2024-05-01.md", "2024-05-02.md"]

    def test_failure_isolated(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.ERROR, logger="daynotes.notes.segmenter"):
            docs = segment_documents(
                [
                    ("2024-05-01.md", "- 09:00\na\n"),
                    ("2024-05-02.md", None),  # type: ignore[list-item]
                    ("2024-05-03.md", "- 08:00\nb\n"),
                ]
            )
        assert len(docs) == 3
        assert docs[0].ok and len(docs[0].notes) == 1
        assert not docs[1].ok
        assert docs[1].error
        assert docs[1].notes == []
        assert docs[2].ok and docs[2].notes[0].body == "b\n"
        assert "Failed to segment 2024-05-02.md" in caplog.text

    def test_empty_batch(self):
        assert segment_documents([]) == []

    @pytest.mark.parametrize(
        "entry",
        [None, ("2024-05-02.md",), ("a.md", "b", "c"), 42],
    )
    def test_malformed_entry_isolated(self, entry, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.ERROR, logger="daynotes.notes.segmenter"):
            docs = segment_documents(
                [
                    ("2024-05-01.md", "- 09:00\na\n"),
                    entry,  # type: ignore[list-item]
                    ("2024-05-03.md", "- 08:00\nb\n"),
                ]
            )
        assert len(docs) == 3
        assert docs[0].notes[0].body == "a\n"
        assert not docs[1].ok
        assert docs[1].source_id == "<document 1>"
        assert docs[1].notes == []
        assert docs[2].notes[0].body == "b\n"
        assert "Failed to segment <document 1>" in caplog.text
