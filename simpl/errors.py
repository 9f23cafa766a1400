"""Error types raised by the rendering pipeline.

Every error derives from SimplError. Components raise them where the failure
happens; SimplSite.handle_request is the only place they are turned into
responses.
"""

from __future__ import annotations

from pathlib import Path


class SimplError(Exception):
    """Base class for pipeline errors.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigError(SimplError):
    """Site configuration is malformed."""


class ContentNotFound(SimplError):
    """The resolved content file does not exist.

    Attributes:
        path: Path that was looked up.
    """

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Content not found: {path}")


class UnknownContentType(SimplError):
    """A content type has no configured content source."""

    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(f"Unknown content type: {content_type}")


class TemplateNotFound(SimplError):
    """The page template for a content type is missing."""

    def __init__(self, template_path: Path):
        self.template_path = template_path
        super().__init__(f"Template not found: {template_path}")


class PluginFailure(SimplError):
    """A plugin hook raised while processing a request.

    Attributes:
        plugin_name: Name of the failing plugin.
        hook: Hook that failed ("transform" or "extend_template").
        original_error: The exception raised by the plugin.
    """

    def __init__(self, plugin_name: str, hook: str, original_error: Exception):
        self.plugin_name = plugin_name
        self.hook = hook
        self.original_error = original_error
        super().__init__(
            f"Plugin {plugin_name} failed in {hook}: "
            f"{type(original_error).__name__}: {original_error}"
        )


class PluginNotRegistered(SimplError):
    """A plugin configuration names a plugin the registry does not know."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Plugin {name} not found in registry")


class StaticAssetReadFailure(SimplError):
    """An asset exists but could not be read."""

    def __init__(self, path: Path, original_error: Exception):
        self.path = path
        self.original_error = original_error
        super().__init__(f"Failed to read static asset {path}: {original_error}")
