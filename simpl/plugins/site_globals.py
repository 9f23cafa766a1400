"""Adds fixed site-wide values, such as the site title, to template contexts."""

from __future__ import annotations

from typing import Any

from ..protocols import Plugin


class SiteGlobalsPlugin(Plugin):
    """Copies its options into every template context.

    Keys already present in the context are kept, so ``content``,
    ``metadata`` and ``route`` can never be replaced.
    """

    name = "SiteGlobalsPlugin"

    def __init__(self, **values: Any):
        self.values = values

    async def extend_template(self, template_context: dict[str, Any]) -> dict[str, Any]:
        return {**self.values, **template_context}
