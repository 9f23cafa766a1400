"""Request path routing for Simpl.

A request path is matched against the configured content sources in
declaration order; the first source whose route is a prefix of the path
wins. Paths that match no route fall back to the default content type.

Key objects:
- normalize_path: strip leading slashes and map the empty path to "index".
- Resolution: the content source, type and relative file chosen for a path.
- Router: resolves paths and reads the resolved content files.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .config import ContentSource
from .errors import ContentNotFound, UnknownContentType

logger = logging.getLogger(__name__)

CONTENT_SUFFIX = ".md"


def normalize_path(path: str) -> str:
    """Strip leading slashes; the empty path becomes "index".

    Examples:
        >>> normalize_path("/blog/hello")
        'blog/hello'
        >>> normalize_path("/")
        'index'
    """
    path = path.lstrip("/")
    return path or "index"


@dataclass(frozen=True)
class Resolution:
    """Where the content for a request lives.

    Attributes:
        source_path: Directory of the matched content source.
        content_type: Content type of the matched source.
        relative_path: File path relative to source_path, ending in .md.
    """

    source_path: Path
    content_type: str
    relative_path: str

    @property
    def file_path(self) -> Path:
        return self.source_path / self.relative_path


class Router:
    """Maps normalized request paths to content files.

    Attributes:
        sources: Content sources in declaration order.
        default_content_type: Type used when no route matches.
    """

    def __init__(self, sources: Sequence[ContentSource], default_content_type: str):
        self.sources = tuple(sources)
        self.default_content_type = default_content_type

    def resolve(self, path: str) -> Resolution:
        """Resolve a normalized request path.

        Args:
            path: Request path without a leading slash.

        Returns:
            Resolution for the first matching source, or for the default
            content type using the full path.

        Raises:
            UnknownContentType: If no route matches and the default content
                type has no content source.
        """
        for source in self.sources:
            if path.startswith(source.route):
                relative = _with_suffix(path[len(source.route) :])
                return Resolution(source.path, source.type, relative)

        for source in self.sources:
            if source.type == self.default_content_type:
                return Resolution(source.path, source.type, _with_suffix(path))
        raise UnknownContentType(self.default_content_type)

    async def read(self, resolution: Resolution) -> str:
        """Read the content file of a resolution.

        Raises:
            ContentNotFound: If the file does not exist or lies outside its
                content source directory.
        """
        file_path = resolution.file_path

        def load() -> str:
            root = resolution.source_path.resolve()
            target = file_path.resolve()
            if not target.is_relative_to(root) or not target.is_file():
                raise ContentNotFound(file_path)
            return target.read_text(encoding="utf-8")

        try:
            return await asyncio.to_thread(load)
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise ContentNotFound(file_path) from exc


def _with_suffix(path: str) -> str:
    return path if path.endswith(CONTENT_SUFFIX) else f"{path}{CONTENT_SUFFIX}"
