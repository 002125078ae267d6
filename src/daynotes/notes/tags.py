"""Hierarchical tag extraction.

A token ``#a/b/c`` contributes every path component (``a``, ``b`` and ``c``)
as an independent tag, so filtering on ``project`` finds notes that only
ever wrote ``#project/sub``. Case is preserved.

Tags are read off the tokenizer's output, so a ``#`` inside an image
reference (``![x](page#anchor)``) never becomes a tag.
"""

from .tokenizer import tokenize
from .types import TagSegment


def tag_paths(body: str) -> list[tuple[str, ...]]:
    """Return the component path of every tag token in *body*, in order."""
    return [s.path for s in tokenize(body) if isinstance(s, TagSegment)]


def extract_tags(body: str) -> set[str]:
    """Return the set of tag components in *body*.

    >>> sorted(extract_tags("#a/b/c content"))
    ['a', 'b', 'c']
    """
    return {component for path in tag_paths(body) for component in path}


def extract_tags_ordered(body: str) -> list[str]:
    """Like extract_tags(), but de-duplicated in order of first appearance."""
    seen: set[str] = set()
    tags: list[str] = []
    for path in tag_paths(body):
        for component in path:
            if component not in seen:
                seen.add(component)
                tags.append(component)
    return tags
