"""Table of contents plugin.

Scans rendered HTML for plain-text headings, gives headings inside the
configured depth range an ``id`` when they lack one, and prepends a nested
list of links to them. Headings outside the range are left untouched.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from ..html_utils import heading_slug
from ..protocols import PluginContext, TransformResult
from .base import FilteredPlugin

logger = logging.getLogger(__name__)

HEADING_RE = re.compile(r'<h([1-6])(?:\s+id="([^"]*)")?>([^<]+)</h\1>')


@dataclass(frozen=True)
class TocItem:
    """A heading listed in the table of contents."""

    level: int
    text: str
    slug: str


class TableOfContentsPlugin(FilteredPlugin):
    """Generates a table of contents for matching pages.

    Options:
        routes: Route prefixes the plugin applies to.
        content_types: Content types the plugin applies to.
        min_depth: Shallowest heading level listed (default 1).
        max_depth: Deepest heading level listed (default 6).
    """

    name = "TableOfContentsPlugin"

    def __init__(
        self,
        routes: Iterable[str] | None = None,
        content_types: Iterable[str] | None = None,
        min_depth: int = 1,
        max_depth: int = 6,
    ):
        super().__init__(routes=routes, content_types=content_types)
        self.min_depth = int(min_depth)
        self.max_depth = int(max_depth)

    async def transform(self, content: str, context: PluginContext) -> TransformResult:
        if not self.applies_to(context):
            return TransformResult(content=content)

        items: list[TocItem] = []

        def repl(match: re.Match) -> str:
            level = int(match.group(1))
            existing_id = match.group(2)
            text = match.group(3)
            if not self.min_depth <= level <= self.max_depth:
                return match.group(0)
            slug = existing_id or heading_slug(text)
            items.append(TocItem(level=level, text=text, slug=slug))
            if existing_id:
                return match.group(0)
            return f'<h{level} id="{slug}">{text}</h{level}>'

        content = HEADING_RE.sub(repl, content)
        if items:
            content = self.render_toc(items) + content
            logger.debug("Generated TOC with %d items for %s", len(items), context.route)

        return TransformResult(
            content=content,
            metadata={"tocGenerated": bool(items), "tocItemCount": len(items)},
        )

    def render_toc(self, items: list[TocItem]) -> str:
        """Render TOC items as an indented list wrapped in a div."""
        lines = ['<div class="table-of-contents">', "<h2>Table of Contents</h2>", "<ul>"]
        for item in items:
            indent = "  " * (item.level - self.min_depth)
            lines.append(f'{indent}<li><a href="#{item.slug}">{item.text}</a></li>')
        lines.extend(["</ul>", "</div>"])
        return "\n".join(lines) + "\n"
