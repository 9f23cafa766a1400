"""Site configuration for Simpl.

Configuration lives in simpl.yaml at the project root. Values from the file
are layered over DEFAULT_CONFIG and turned into a SiteConfig, with relative
directories resolved against the project root.

Key objects:
- ContentSource: a directory, content type and route prefix triple.
- PluginConfig: declarative plugin entry resolved through a PluginRegistry.
- SiteConfig: the complete, validated configuration of one site.
- load_config: read simpl.yaml and build a SiteConfig.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

CONFIG_FILENAME = "simpl.yaml"

PLUGIN_FAILURE_POLICIES = ("skip", "abort")

DEFAULT_CONFIG: dict[str, Any] = {
    "content_sources": [],
    "plugins": [],
    "default_content_type": "page",
    "template_dir": "templates",
    "assets_dir": "assets",
    "site_url": "http://localhost:8000",
    "template_ext": ".html",
    "default_layout": "base",
    "plugin_failure": "skip",
    "debug": False,
    "template_options": {},
}


@dataclass(frozen=True)
class ContentSource:
    """Where one type of content lives and how its URLs are formed.

    Attributes:
        path: Directory holding the Markdown files.
        type: Content type identifier, also the page template name.
        route: Route prefix matched against the normalized request path.
    """

    path: Path
    type: str
    route: str


@dataclass(frozen=True)
class PluginConfig:
    """A plugin entry: registry name plus constructor options."""

    name: str
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class SiteConfig:
    """Configuration for a single site.

    Attributes:
        content_sources: Content sources in declaration order.
        plugins: Plugin entries in registration order.
        default_content_type: Type used when no route prefix matches.
        template_dir: Directory with page templates, layouts/ and partials/.
        assets_dir: Directory of static files served verbatim.
        site_url: Base URL exposed to plugins.
        template_ext: Extension of template files, including the dot.
        default_layout: Layout name under layouts/.
        plugin_failure: "skip" to isolate failing plugins, "abort" to fail the request.
        debug: Include error details in error responses.
        template_options: Extra keyword arguments for the Jinja2 Environment.
        template_helpers: Callables installed as template globals.
    """

    content_sources: list[ContentSource]
    plugins: list[PluginConfig] = field(default_factory=list)
    default_content_type: str = "page"
    template_dir: Path = Path("templates")
    assets_dir: Path = Path("assets")
    site_url: str = "http://localhost:8000"
    template_ext: str = ".html"
    default_layout: str = "base"
    plugin_failure: str = "skip"
    debug: bool = False
    template_options: dict[str, Any] = field(default_factory=dict)
    template_helpers: dict[str, Callable[..., Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.plugin_failure not in PLUGIN_FAILURE_POLICIES:
            raise ConfigError(
                f"plugin_failure must be one of {', '.join(PLUGIN_FAILURE_POLICIES)}, "
                f"got {self.plugin_failure!r}"
            )
        if not self.template_ext.startswith("."):
            self.template_ext = f".{self.template_ext}"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base_dir: Path) -> SiteConfig:
        """Build a SiteConfig from a plain mapping.

        Args:
            data: Configuration values, typically parsed YAML.
            base_dir: Directory relative paths are resolved against.

        Returns:
            SiteConfig instance.

        Raises:
            ConfigError: If the mapping has the wrong shape.
        """
        values = DEFAULT_CONFIG.copy()
        values.update(data)
        return cls(
            content_sources=_parse_sources(values["content_sources"], base_dir),
            plugins=_parse_plugins(values["plugins"]),
            default_content_type=str(values["default_content_type"]),
            template_dir=_resolve(base_dir, values["template_dir"]),
            assets_dir=_resolve(base_dir, values["assets_dir"]),
            site_url=str(values["site_url"]),
            template_ext=str(values["template_ext"]),
            default_layout=str(values["default_layout"]),
            plugin_failure=str(values["plugin_failure"]),
            debug=bool(values["debug"]),
            template_options=dict(values["template_options"] or {}),
        )


def _resolve(base_dir: Path, value: Any) -> Path:
    path = Path(str(value))
    return path if path.is_absolute() else base_dir / path


def _parse_sources(raw: Any, base_dir: Path) -> list[ContentSource]:
    if not isinstance(raw, list):
        raise ConfigError("content_sources must be a list")
    sources: list[ContentSource] = []
    for entry in raw:
        if not isinstance(entry, dict) or not {"path", "type"} <= entry.keys():
            raise ConfigError(f"Invalid content source: {entry!r}")
        sources.append(
            ContentSource(
                path=_resolve(base_dir, entry["path"]),
                type=str(entry["type"]),
                route=str(entry.get("route") or ""),
            )
        )
    return sources


def _parse_plugins(raw: Any) -> list[PluginConfig]:
    if not isinstance(raw, list):
        raise ConfigError("plugins must be a list")
    plugins: list[PluginConfig] = []
    for entry in raw:
        if isinstance(entry, str):
            plugins.append(PluginConfig(name=entry))
            continue
        if not isinstance(entry, dict) or "name" not in entry:
            raise ConfigError(f"Invalid plugin entry: {entry!r}")
        plugins.append(
            PluginConfig(name=str(entry["name"]), options=dict(entry.get("options") or {}))
        )
    return plugins


def load_config(project_root: Path) -> SiteConfig:
    """Load site configuration from simpl.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        SiteConfig with defaults applied for missing keys.
    """
    config_path = project_root / CONFIG_FILENAME
    loaded: Any = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"{config_path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ConfigError(f"{config_path}: expected a mapping at the top level")
    return SiteConfig.from_mapping(loaded, project_root)
