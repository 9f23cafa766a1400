"""Simpl request-time site renderer.

This package renders Markdown content into HTML pages on request. A request
path is resolved to a content file, its front-matter and body are parsed,
the result flows through an ordered chain of plugins, and the final page is
rendered with Jinja2 templates wrapped in a layout.

The main entry point is SimplSite.handle_request, which always returns a
Response value. The CLI module exposes the same pipeline from the shell.
"""

from .config import ContentSource, PluginConfig, SiteConfig, load_config
from .protocols import Plugin, PluginContext, TransformResult
from .registry import PluginRegistry, default_registry
from .site import Response, SimplSite

__all__ = [
    "ContentSource",
    "Plugin",
    "PluginConfig",
    "PluginContext",
    "PluginRegistry",
    "Response",
    "SimplSite",
    "SiteConfig",
    "TransformResult",
    "__version__",
    "default_registry",
    "load_config",
]
__version__ = "0.1.0"
