"""Plugin pipeline for Simpl.

The pipeline threads content and metadata through every plugin's
transform hook in registration order, then threads the template context
through every extend_template hook in the same order.

Failure handling follows a single policy for both hooks:
- "skip": log the failure, keep the input of the failed hook and continue.
- "abort": raise PluginFailure and let the request fail.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .errors import PluginFailure
from .protocols import Metadata, Plugin, PluginContext, TransformResult

logger = logging.getLogger(__name__)


class PluginPipeline:
    """Ordered collection of plugins applied to each request.

    Attributes:
        plugins: Plugins in registration order.
        template_dir: Template directory exposed to plugins.
        content_sources: Mapping of content type to source directory.
        site_url: Base URL exposed to plugins.
        failure_policy: "skip" or "abort".
    """

    def __init__(
        self,
        plugins: Iterable[Plugin],
        template_dir: Path,
        content_sources: Mapping[str, Path],
        site_url: str,
        failure_policy: str = "skip",
    ):
        self.plugins: tuple[Plugin, ...] = tuple(plugins)
        self.template_dir = template_dir
        self.content_sources = MappingProxyType(dict(content_sources))
        self.site_url = site_url
        self.failure_policy = failure_policy

    def build_context(self, content_type: str, route: str) -> PluginContext:
        """Create the per-request context handed to transform hooks."""
        return PluginContext(
            content_type=content_type,
            route=route,
            template_dir=self.template_dir,
            content_sources=self.content_sources,
            site_url=self.site_url,
        )

    async def transform(
        self,
        content: str,
        content_type: str,
        route: str,
        metadata: Metadata | None = None,
    ) -> tuple[str, Metadata]:
        """Run every plugin's transform hook.

        Args:
            content: Rendered HTML content.
            content_type: Content type of the request.
            route: Request path with a leading slash.
            metadata: Base metadata, usually from front-matter.

        Returns:
            Tuple of (final content, merged metadata). Later plugins win on
            key collisions, and any plugin key overrides the base metadata.

        Raises:
            PluginFailure: If a hook fails and the policy is "abort".
        """
        merged: Metadata = dict(metadata or {})
        for plugin in self.plugins:
            context = self.build_context(content_type, route)
            try:
                result = await plugin.transform(content, context)
                if not isinstance(result, TransformResult):
                    # plain {"content": ..., "metadata": ...} mappings
                    result = TransformResult(**result)
            except Exception as exc:
                self._handle_failure(plugin, "transform", exc)
                continue
            content = result.content
            if result.metadata:
                merged.update(result.metadata)
        return content, merged

    async def extend_template(self, template_context: dict[str, Any]) -> dict[str, Any]:
        """Thread the template context through every extend_template hook.

        Args:
            template_context: Context built from content, metadata and route.

        Returns:
            The context returned by the last plugin.

        Raises:
            PluginFailure: If a hook fails and the policy is "abort".
        """
        for plugin in self.plugins:
            try:
                extended = await plugin.extend_template(dict(template_context))
                if not isinstance(extended, dict):
                    raise TypeError(
                        f"extend_template returned {type(extended).__name__}, expected dict"
                    )
            except Exception as exc:
                self._handle_failure(plugin, "extend_template", exc)
                continue
            template_context = extended
        return template_context

    def _handle_failure(self, plugin: Plugin, hook: str, exc: Exception) -> None:
        if self.failure_policy == "abort":
            raise PluginFailure(plugin.name, hook, exc) from exc
        logger.exception("Plugin %s failed in %s; skipping it", plugin.name, hook)
