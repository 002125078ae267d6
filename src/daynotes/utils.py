"""Shared helpers — config directory resolution."""

import os
from pathlib import Path

_DIR_ENV = "DAYNOTES_DIR"


def daynotes_dir() -> Path:
    """Return the daynotes config directory.

    ``DAYNOTES_DIR`` wins when set; otherwise ``~/.daynotes``.
    """
    raw = os.environ.get(_DIR_ENV, "").strip()
    if raw:
        return Path(os.path.expanduser(raw))
    return Path.home() / ".daynotes"
