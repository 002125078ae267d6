"""Content tokenizer — split a note body into text, tag and image segments.

A single left-to-right scan. The scanner only stops at ``#`` and ``!``;
at each stop it tries the matching grammar anchored at that position and,
if it fails, leaves the character in the surrounding text run. Text between
tokens is emitted as one ``TextSegment`` per run, so joining every segment's
``raw`` gives back the original body.

Key function: tokenize().
"""

from collections.abc import Iterable

from .patterns import IMAGE_RE, TAG_RE, TAG_SEPARATOR, TOKEN_START_RE
from .types import ImageSegment, Segment, TagSegment, TextSegment


def tokenize(body: str) -> list[Segment]:
    """Split *body* into an ordered list of segments.

    >>> [s.kind for s in tokenize("see #proj/a and ![pic](http://e/i.png)")]
    ['text', 'tag', 'text', 'image']
    """
    segments: list[Segment] = []
    text_start = 0
    pos = 0
    end = len(body)

    while pos < end:
        m = TOKEN_START_RE.search(body, pos)
        if m is None:
            break
        pos = m.start()

        if body[pos] == "!":
            token = IMAGE_RE.match(body, pos)
            if token:
                segment: Segment = ImageSegment(
                    url=token.group(2),
                    alt_text=token.group(1),
                    raw=token.group(0),
                )
        else:
            token = TAG_RE.match(body, pos)
            if token:
                segment = TagSegment(
                    raw=token.group(0),
                    path=tuple(token.group(1).split(TAG_SEPARATOR)),
                )

        if token is None:
            pos += 1
            continue

        if text_start < pos:
            segments.append(TextSegment(body[text_start:pos]))
        segments.append(segment)
        pos = token.end()
        text_start = pos

    if text_start < end:
        segments.append(TextSegment(body[text_start:]))
    return segments


def render_plain(segments: Iterable[Segment]) -> str:
    """Join segments back into their source text."""
    return "".join(s.raw for s in segments)


def image_urls(body: str) -> list[str]:
    """Return the URL of every image reference in *body*, in order."""
    return [s.url for s in tokenize(body) if isinstance(s, ImageSegment)]
