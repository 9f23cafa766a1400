"""Plugin registry for Simpl.

The registry maps plugin names to factories. It is populated by the
integrator before a site is constructed and then only read, so several
sites with different registries can live in the same process.

Key objects:
- PluginRegistry: name to factory mapping with resolution from PluginConfig.
- default_registry: a registry holding the bundled plugins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from .config import PluginConfig
from .errors import PluginNotRegistered
from .protocols import Plugin

logger = logging.getLogger(__name__)

PluginFactory = Callable[..., Plugin]


class PluginRegistry:
    """Registry of plugin factories.

    New plugins can be added without modifying the pipeline.
    """

    def __init__(self):
        self._factories: dict[str, PluginFactory] = {}

    def register(self, name: str, factory: PluginFactory) -> PluginRegistry:
        """Register a plugin factory under a name.

        Args:
            name: Name used in plugin configuration.
            factory: Callable accepting the plugin options as keyword arguments.

        Returns:
            The registry, so calls can be chained.
        """
        if name in self._factories:
            logger.warning("Replacing plugin factory registered as %s", name)
        self._factories[name] = factory
        return self

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def names(self) -> list[str]:
        """Return registered names in registration order."""
        return list(self._factories)

    def resolve(self, config: PluginConfig) -> Plugin:
        """Instantiate the plugin named by a configuration entry.

        Args:
            config: Plugin configuration.

        Returns:
            A live plugin instance.

        Raises:
            PluginNotRegistered: If no factory is registered under the name.
        """
        factory = self._factories.get(config.name)
        if factory is None:
            raise PluginNotRegistered(config.name)
        plugin = factory(**config.options)
        logger.debug("Initialized plugin %s with options %s", config.name, config.options)
        return plugin

    def resolve_all(self, configs: Iterable[PluginConfig]) -> list[Plugin]:
        """Instantiate every configured plugin, preserving order."""
        plugins = [self.resolve(config) for config in configs]
        logger.info(
            "Loaded plugins: %s", ", ".join(p.name for p in plugins) or "(none)"
        )
        return plugins


def default_registry() -> PluginRegistry:
    """Return a new registry holding the bundled plugins."""
    from .plugins import LastModifiedPlugin, SiteGlobalsPlugin, TableOfContentsPlugin

    return (
        PluginRegistry()
        .register("TableOfContentsPlugin", TableOfContentsPlugin)
        .register("LastModifiedPlugin", LastModifiedPlugin)
        .register("SiteGlobalsPlugin", SiteGlobalsPlugin)
    )

