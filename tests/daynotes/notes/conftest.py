"""Shared fixtures for note engine tests."""

from collections.abc import Callable
from datetime import datetime

import pytest

from daynotes.notes.types import InvalidTimestamp, Note


@pytest.fixture
def make_note() -> Callable[..., Note]:
    """Build a Note with sensible defaults.

    ``when`` is either a datetime, an "HH:MM" string on 2024-05-01,
    or None for an invalid timestamp.
    """

    def _make(
        body: str, when: datetime | str | None = "09:00", source_id: str = "2024-05-01.md"
    ) -> Note:
        if when is None:
            created_at: datetime | InvalidTimestamp = InvalidTimestamp(
                text="bogus", reason="test"
            )
        elif isinstance(when, str):
            hour, minute = when.split(":")
            created_at = datetime(2024, 5, 1, int(hour), int(minute))
        else:
            created_at = when
        return Note(source_id=source_id, body=body, created_at=created_at)

    return _make
