"""HTML utility functions for Simpl.

Functions:
    escape_html: Escape special HTML characters in a string.
    heading_slug: Convert heading text to an anchor id.
    join_root_url: Join a base URL with a path.
"""

from __future__ import annotations

import re

_SLUG_STRIP_RE = re.compile(r"[^a-z0-9]+")


def escape_html(text: str) -> str:
    """Escape special HTML characters in a string.

    Examples:
        >>> escape_html('<b>"Tom" & Jerry</b>')
        '&lt;b&gt;&quot;Tom&quot; &amp; Jerry&lt;/b&gt;'
    """
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def heading_slug(text: str) -> str:
    """Generate an anchor id from heading text.

    Lowercases the text and collapses every run of characters outside
    ``a-z0-9`` into a single hyphen, trimming hyphens at either end.

    Examples:
        >>> heading_slug("Getting Started!")
        'getting-started'
    """
    return _SLUG_STRIP_RE.sub("-", text.lower()).strip("-")


def join_root_url(root_url: str, path: str) -> str:
    """Safely join a root URL and a path, avoiding double slashes.

    Examples:
        >>> join_root_url('https://example.com/', 'about')
        'https://example.com/about'
    """
    if not root_url:
        return path
    base = root_url.rstrip("/")
    suffix = path if path.startswith("/") else f"/{path}"
    return f"{base}{suffix}"
