"""Shared eligibility filter for bundled plugins."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..protocols import Plugin, PluginContext

logger = logging.getLogger(__name__)


class FilteredPlugin(Plugin):
    """Plugin that only applies to listed content types or route prefixes.

    A plugin with neither list configured applies nowhere.

    Attributes:
        routes: Route prefixes, compared against the request route.
        content_types: Content types the plugin applies to.
    """

    def __init__(
        self,
        routes: Iterable[str] | None = None,
        content_types: Iterable[str] | None = None,
    ):
        self.routes = tuple(routes or ())
        self.content_types = tuple(content_types or ())

    def applies_to(self, context: PluginContext) -> bool:
        applies = context.content_type in self.content_types or any(
            context.route.startswith(route) for route in self.routes
        )
        logger.debug(
            "%s applies to %s %s: %s",
            self.name,
            context.content_type,
            context.route,
            applies,
        )
        return applies
