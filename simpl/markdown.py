"""Front-matter parsing and Markdown rendering.

A content file may start with a front-matter block delimited by ``---``
lines. The block holds flat ``key: value`` pairs; everything after the
closing delimiter is Markdown rendered to HTML with mistune.

Key objects:
- parse_frontmatter: split a document into metadata and body.
- render_markdown: render a Markdown body to HTML.
- MarkdownProcessor: combines both for the request pipeline.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import mistune

FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<meta>.*?)^---[ \t]*(?:\r?\n|\Z)(?P<body>.*)",
    re.DOTALL | re.MULTILINE,
)


@dataclass
class ProcessedContent:
    """Result of processing one content file.

    Attributes:
        metadata: Front-matter values, all strings.
        content: Rendered HTML body.
    """

    metadata: dict[str, Any] = field(default_factory=dict)
    content: str = ""


def parse_frontmatter(text: str) -> tuple[dict[str, str], str]:
    """Split front-matter from the body of a document.

    Lines of the front-matter block are split on their first colon into a
    key and a value, both trimmed. Lines without a colon are ignored and
    values are never coerced.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (metadata dict, body). Without front-matter the metadata is
        empty and the body is the input unchanged; otherwise the body is the
        trimmed text after the closing delimiter.
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    metadata: dict[str, str] = {}
    for line in match.group("meta").splitlines():
        key, sep, value = line.partition(":")
        key = key.strip()
        if not sep or not key:
            continue
        metadata[key] = value.strip()
    return metadata, match.group("body").strip()


def render_markdown(body: str) -> str:
    """Render Markdown to HTML.

    A new parser is created for every call so concurrent renders share no
    state. Raw HTML in the source is passed through.

    Args:
        body: Markdown source.

    Returns:
        Rendered HTML string.
    """
    markdown = mistune.create_markdown(escape=False)
    return markdown(body)


class MarkdownProcessor:
    """Turns a raw content file into metadata and HTML."""

    def execute(self, raw: str) -> ProcessedContent:
        """Parse front-matter and render the body.

        Args:
            raw: Raw file content.

        Returns:
            ProcessedContent with string metadata and rendered HTML.
        """
        metadata, body = parse_frontmatter(raw)
        return ProcessedContent(metadata=dict(metadata), content=render_markdown(body))
