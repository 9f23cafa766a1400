"""Request handling for Simpl.

SimplSite wires the pieces of the rendering pipeline together:

1. Normalize the request path.
2. Serve a static asset if one matches (terminal).
3. Resolve the path to a content file.
4. Parse front-matter and Markdown, run the plugin transform chain, build
   the template context, run the extend_template chain and render the
   page inside its layout.
5. Return a Response. Errors are converted into error responses here and
   nowhere else.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from markupsafe import Markup

from .assets import StaticFileResponder
from .config import SiteConfig
from .errors import ContentNotFound, SimplError, UnknownContentType
from .html_utils import escape_html
from .markdown import MarkdownProcessor
from .pipeline import PluginPipeline
from .registry import PluginRegistry, default_registry
from .router import Router, normalize_path
from .templates import TemplateEngine

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = "text/html"
TEXT_CONTENT_TYPE = "text/plain"

_STATUS_MESSAGES = {
    404: "404 Not Found",
    500: "500 Internal Server Error",
}


@dataclass(frozen=True)
class Response:
    """Result of handling one request.

    Attributes:
        content: HTML text, or raw bytes for static assets.
        content_type: MIME type of the content.
        status: HTTP-style status code.
        size: Length of the encoded content in bytes.
    """

    content: str | bytes
    content_type: str
    status: int
    size: int | None = None

    @property
    def ok(self) -> bool:
        return self.status < 400


class SimplSite:
    """A single website served from Markdown content.

    Attributes:
        config: Site configuration.
        router: Resolves request paths to content files.
        markdown: Front-matter and Markdown processor.
        pipeline: Plugin pipeline owned by this site.
        template_engine: Template engine owned by this site.
        static_files: Static asset responder.
    """

    def __init__(self, config: SiteConfig, registry: PluginRegistry | None = None):
        """Initialize the site.

        Args:
            config: Site configuration.
            registry: Plugin registry used to resolve config.plugins;
                defaults to the bundled plugins.

        Raises:
            PluginNotRegistered: If a configured plugin is not registered.
        """
        self.config = config
        registry = registry if registry is not None else default_registry()
        self.router = Router(config.content_sources, config.default_content_type)
        self.markdown = MarkdownProcessor()
        self.static_files = StaticFileResponder(config.assets_dir)
        self.pipeline = PluginPipeline(
            registry.resolve_all(config.plugins),
            template_dir=config.template_dir,
            content_sources={s.type: s.path for s in config.content_sources},
            site_url=config.site_url,
            failure_policy=config.plugin_failure,
        )
        self.template_engine = TemplateEngine(
            config.template_dir,
            extname=config.template_ext,
            default_layout=config.default_layout,
            root_url=config.site_url,
            helpers=config.template_helpers,
            options=config.template_options,
        )

    async def handle_request(self, path: str) -> Response:
        """Handle one request path.

        Never raises; every failure becomes an error Response.

        Args:
            path: Request path, with or without a leading slash.

        Returns:
            Response with the rendered page, a static asset, or an error.
        """
        logger.debug("Handling request for path: %s", path)
        try:
            return await self._handle(normalize_path(path))
        except (ContentNotFound, UnknownContentType) as exc:
            logger.warning("Not found: %s (%s)", path, exc.message)
            return self._error_response(404, exc)
        except SimplError as exc:
            logger.error("Error handling %s: %s", path, exc.message)
            return self._error_response(500, exc)
        except Exception as exc:
            logger.exception("Unexpected error handling %s", path)
            return self._error_response(500, exc)

    async def _handle(self, path: str) -> Response:
        asset = await self.static_files.find(path)
        if asset is not None:
            return Response(
                content=asset.content,
                content_type=asset.content_type,
                status=200,
                size=len(asset.content),
            )
        html = await self.render_content(path)
        return Response(
            content=html,
            content_type=HTML_CONTENT_TYPE,
            status=200,
            size=len(html.encode("utf-8")),
        )

    async def render_content(self, path: str) -> str:
        """Render the content page for a normalized path.

        Raises:
            ContentNotFound: If the resolved file does not exist.
            UnknownContentType: If the path cannot be mapped to a source.
            TemplateNotFound: If the page template is missing.
            PluginFailure: If a plugin fails under the "abort" policy.
        """
        resolution = self.router.resolve(path)
        route = f"/{path}"
        raw = await self.router.read(resolution)

        processed = self.markdown.execute(raw)
        content, metadata = await self.pipeline.transform(
            processed.content,
            resolution.content_type,
            route,
            metadata=processed.metadata,
        )
        template_context: dict[str, Any] = {
            "content": Markup(content),
            "metadata": metadata,
            "route": route,
        }
        template_context = await self.pipeline.extend_template(template_context)
        return await self.template_engine.render(resolution.content_type, template_context)

    def _error_response(self, status: int, exc: Exception) -> Response:
        body = _STATUS_MESSAGES[status]
        if self.config.debug:
            body = f"{body}\n\n{escape_html(str(exc))}"
        return Response(
            content=body,
            content_type=TEXT_CONTENT_TYPE,
            status=status,
            size=len(body.encode("utf-8")),
        )
