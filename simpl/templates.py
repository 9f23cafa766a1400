"""Template rendering engine for Simpl.

This module uses Jinja2 to render page templates wrapped in a layout.

Templates are compiled on first use and cached by their resolved file path;
pages and layouts share one cache. Partials are read once at construction
and can be included from any template by their name without extension,
e.g. ``{% include "header" %}``.

Key class:
- TemplateEngine: page and layout rendering with a compiled-template cache.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import DictLoader, Environment, Template, select_autoescape
from markupsafe import Markup

from .errors import TemplateNotFound
from .html_utils import join_root_url

logger = logging.getLogger(__name__)

__all__ = ["TemplateEngine"]


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        base_dir: Directory holding page templates.
        extname: Template file extension, including the dot.
        layouts_dir: Layout directory, relative to base_dir.
        partials_dir: Partial directory, relative to base_dir.
        default_layout: Name of the layout wrapped around every page.
        root_url: Base URL used by the ``url_for`` template global.
        env: Jinja2 environment.
    """

    def __init__(
        self,
        base_dir: Path,
        extname: str = ".html",
        layouts_dir: str = "layouts",
        partials_dir: str = "partials",
        default_layout: str = "base",
        root_url: str = "",
        helpers: Mapping[str, Callable[..., Any]] | None = None,
        options: Mapping[str, Any] | None = None,
    ):
        """Initialize the template engine.

        Args:
            base_dir: Directory with page templates, layouts and partials.
            extname: Template file extension.
            layouts_dir: Layout subdirectory name.
            partials_dir: Partial subdirectory name.
            default_layout: Layout name used for every page.
            root_url: Optional base URL for links.
            helpers: Callables installed as template globals.
            options: Extra keyword arguments for the Jinja2 Environment.
        """
        self.base_dir = Path(base_dir)
        self.extname = extname
        self.layouts_dir = layouts_dir
        self.partials_dir = partials_dir
        self.default_layout = default_layout
        self.root_url = root_url
        env_options: dict[str, Any] = {
            "autoescape": select_autoescape(
                ["html", "xml"], default_for_string=True, default=True
            ),
        }
        env_options.update(options or {})
        self.env = Environment(loader=DictLoader(self._load_partials()), **env_options)
        self._compiled: dict[Path, Template] = {}
        self._lock = threading.Lock()
        self._generation = 0
        self._install_globals(helpers or {})

    def _load_partials(self) -> dict[str, str]:
        """Read every partial template, keyed by filename without extension."""
        partials: dict[str, str] = {}
        partials_path = self.base_dir / self.partials_dir
        if not partials_path.is_dir():
            return partials
        for path in sorted(partials_path.iterdir()):
            if path.is_file() and path.name.endswith(self.extname):
                name = path.name[: -len(self.extname)]
                partials[name] = path.read_text(encoding="utf-8")
                logger.debug("Registered partial %s", name)
        return partials

    def _install_globals(self, helpers: Mapping[str, Callable[..., Any]]) -> None:
        self.env.globals["url_for"] = self._url_for
        self.env.globals.update(helpers)

    def _url_for(self, path: str) -> str:
        """Generate a URL for a path, applying root_url if configured."""
        if path.startswith(("http://", "https://", "//")):
            return path
        if self.root_url:
            return join_root_url(self.root_url, path)
        return path if path.startswith("/") else f"/{path}"

    def template_path(self, name: str) -> Path:
        """Return the page template path for a template name."""
        return self.base_dir / f"{name}{self.extname}"

    def layout_path(self) -> Path:
        """Return the path of the default layout."""
        return self.base_dir / self.layouts_dir / f"{self.default_layout}{self.extname}"

    async def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        """Render a page template inside the default layout.

        Args:
            template_name: Page template name, usually the content type.
            context: Template context.

        Returns:
            Rendered HTML. When no layout file exists the page output is
            returned as is.

        Raises:
            TemplateNotFound: If the page template does not exist.
        """
        page_path = await _existing(self.template_path(template_name))
        if page_path is None:
            raise TemplateNotFound(self.template_path(template_name))
        page = await self._get_compiled(page_path)
        result = page.render(context)

        layout_path = await _existing(self.layout_path())
        if layout_path is not None:
            layout = await self._get_compiled(layout_path)
            result = layout.render({**context, "body": Markup(result)})
        logger.debug("Rendered template %s", template_name)
        return result

    async def _get_compiled(self, path: Path) -> Template:
        """Return the compiled template for a resolved path, compiling at most once.

        The source is read without holding the lock; the check, compile and
        store happen under a threading lock so the cache stays consistent
        across event loops and threads.
        """
        with self._lock:
            cached = self._compiled.get(path)
            generation = self._generation
        if cached is not None:
            logger.debug("Using cached template: %s", path)
            return cached
        try:
            source = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError as exc:
            raise TemplateNotFound(path) from exc
        with self._lock:
            cached = self._compiled.get(path)
            if cached is not None:
                return cached
            logger.debug("Compiling template: %s", path)
            template = self.env.from_string(source)
            # a clear_cache() during the read must not be undone
            if generation == self._generation:
                self._compiled[path] = template
            return template

    def clear_cache(self) -> None:
        """Drop every compiled template."""
        logger.debug("Clearing template cache")
        with self._lock:
            self._compiled = {}
            self._generation += 1

    def cache_stats(self) -> dict[str, Any]:
        """Return the number and paths of cached templates."""
        with self._lock:
            cached = list(self._compiled)
        return {
            "cache_size": len(cached),
            "cached_templates": [str(path) for path in cached],
        }


async def _existing(path: Path) -> Path | None:
    """Return the resolved path if it is an existing file, else None."""

    def probe() -> Path | None:
        return path.resolve() if path.is_file() else None

    return await asyncio.to_thread(probe)
