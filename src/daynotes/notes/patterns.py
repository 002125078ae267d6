"""Regex patterns for note segmentation and inline tokens.

Single source of truth for the entry-marker, tag and image grammars used by
the segmenter, the tokenizer and the tag extractor.
"""

import re

# Entry marker: "- HH:MM" after optional indentation. Digits are ASCII only;
# range checks happen when the timestamp is built.
ENTRY_MARKER_RE = re.compile(r"^\s*-\s*([0-9]{2}):([0-9]{2})")

# Daily filename stem: yyyy-MM-dd
DATE_STEM_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")

# Tag token: #seg(/seg)*, where seg is a run of Unicode word characters
# (letters of any script, digits, underscore). Greedy per segment, so
# "#a/" stops before the slash and "#a//b" yields only "a".
TAG_RE = re.compile(r"#(\w+(?:/\w+)*)")

# Image reference: ![alt](url). Alt may be empty, url may not.
IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")

# Characters where a tag or image token can start
TOKEN_START_RE = re.compile(r"[#!]")

TAG_SEPARATOR = "/"
