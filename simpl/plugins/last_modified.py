"""Last-modified date plugin.

Looks up the source file behind a request and prepends its modification
date to the content, also exposing it as ``lastModified`` metadata.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import PurePosixPath

from ..protocols import PluginContext, TransformResult
from .base import FilteredPlugin

logger = logging.getLogger(__name__)


class LastModifiedPlugin(FilteredPlugin):
    """Adds the source file's modification date to matching pages.

    Options:
        routes: Route prefixes the plugin applies to.
        content_types: Content types the plugin applies to.
    """

    name = "LastModifiedPlugin"

    async def transform(self, content: str, context: PluginContext) -> TransformResult:
        if not self.applies_to(context):
            return TransformResult(content=content)

        source_dir = context.content_sources.get(context.content_type)
        if source_dir is None:
            logger.warning("No source path found for content type: %s", context.content_type)
            return TransformResult(content=content)

        filename = PurePosixPath(context.route).name or "index"
        if not filename.endswith(".md"):
            filename += ".md"
        file_path = source_dir / filename

        try:
            stat = await asyncio.to_thread(file_path.stat)
        except OSError as exc:
            logger.warning("Could not stat %s: %s", file_path, exc)
            return TransformResult(content=content)

        modified = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).strftime("%Y-%m-%d")
        return TransformResult(
            content=f"Last modified: {modified}\n\n{content}",
            metadata={"lastModified": modified},
        )
