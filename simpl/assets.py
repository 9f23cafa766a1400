"""Static asset serving for Simpl.

Files under the assets directory are returned byte-for-byte with a MIME
type guessed from their extension. A request that does not name an asset
falls through to content rendering.
"""

from __future__ import annotations

import asyncio
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path

from .errors import StaticAssetReadFailure

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class StaticAsset:
    """A static file read from the assets directory."""

    path: Path
    content: bytes
    content_type: str


def guess_content_type(path: Path) -> str:
    """Return the MIME type for a file name, defaulting to octet-stream."""
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or DEFAULT_MIME_TYPE


class StaticFileResponder:
    """Looks up request paths under the assets directory.

    Attributes:
        assets_dir: Root of the static files.
    """

    def __init__(self, assets_dir: Path):
        self.assets_dir = assets_dir

    async def find(self, path: str) -> StaticAsset | None:
        """Return the asset for a normalized request path.

        Args:
            path: Request path without a leading slash.

        Returns:
            StaticAsset when a file exists under the assets directory, None
            when it does not (including paths escaping the directory).

        Raises:
            StaticAssetReadFailure: If the file exists but cannot be read.
        """
        candidate = self.assets_dir / path

        def load() -> StaticAsset | None:
            root = self.assets_dir.resolve()
            target = candidate.resolve()
            if not target.is_relative_to(root) or not target.is_file():
                return None
            try:
                content = target.read_bytes()
            except FileNotFoundError:
                return None
            except OSError as exc:
                raise StaticAssetReadFailure(target, exc) from exc
            return StaticAsset(target, content, guess_content_type(target))

        try:
            asset = await asyncio.to_thread(load)
        except NotADirectoryError:
            return None
        if asset is not None:
            logger.debug("Serving static file: %s", asset.path)
        return asset
