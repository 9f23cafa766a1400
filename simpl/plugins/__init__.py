"""Bundled plugins for Simpl.

- TableOfContentsPlugin: builds a table of contents from rendered headings.
- LastModifiedPlugin: stamps pages with their source file's modification date.
- SiteGlobalsPlugin: adds fixed values to every template context.
"""

from .base import FilteredPlugin
from .last_modified import LastModifiedPlugin
from .site_globals import SiteGlobalsPlugin
from .toc import TableOfContentsPlugin

__all__ = [
    "FilteredPlugin",
    "LastModifiedPlugin",
    "SiteGlobalsPlugin",
    "TableOfContentsPlugin",
]
