"""Plugin capability interface for Simpl.

A plugin has two hooks, both optional in practice because the base class
implements each as a no-op:

- transform: rewrite rendered content and contribute metadata.
- extend_template: add fields to the template context.

The pipeline calls both hooks on every plugin without checking for their
presence. Whether a plugin applies to a given content type or route is
decided inside the plugin.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

Scalar = Union[str, int, float, bool, None]
Metadata = dict[str, Scalar]


@dataclass(frozen=True)
class PluginContext:
    """Read-only snapshot of request details passed to transform.

    Attributes:
        content_type: Type of the content being rendered.
        route: Request path with a leading slash.
        template_dir: Base template directory.
        content_sources: Mapping of content type to source directory.
        site_url: Base URL of the site.
    """

    content_type: str
    route: str
    template_dir: Path
    content_sources: Mapping[str, Path]
    site_url: str


@dataclass(frozen=True)
class TransformResult:
    """Output of a transform hook.

    Attributes:
        content: The (possibly rewritten) HTML content.
        metadata: Keys to merge over the accumulated metadata, if any.
    """

    content: str
    metadata: Metadata | None = None


class Plugin:
    """Base class for plugins.

    Subclasses override the hooks they need. Constructors receive the
    ``options`` mapping of the plugin configuration as keyword arguments.
    """

    name = "Plugin"

    async def transform(self, content: str, context: PluginContext) -> TransformResult:
        """Return the content unchanged."""
        return TransformResult(content=content)

    async def extend_template(self, template_context: dict[str, Any]) -> dict[str, Any]:
        """Return the template context unchanged."""
        return template_context

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
