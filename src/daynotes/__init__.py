"""daynotes - parsing and tagging engine for daily markdown notes.

Splits one-file-per-day markdown documents into time-stamped notes, extracts
hierarchical ``#a/b/c`` tags, and tokenizes note bodies into text, tag and
image segments for a rendering layer.

Package entry point. Exports the version string only; the engine lives in
``daynotes.notes`` and configuration in ``daynotes.settings``.
"""

__version__ = "0.1.0"
