"""
Page Rendering Port.

Interactive responses are HTML pages rendered by the host's template
facility.
"""

from typing import Protocol, Any


class PageRendererPort(Protocol):
    """Port for rendering interactive pages."""

    def render(self, template: str, context: dict[str, Any]) -> str:
        """Render ``template`` with ``context`` into an HTML string."""
        ...
