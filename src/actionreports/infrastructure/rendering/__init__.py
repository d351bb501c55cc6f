"""
Default renderers, one per (format, action kind).
"""

from actionreports.infrastructure.rendering.html import (
    HtmlActionRenderer,
    HtmlMacroActionRenderer,
)
from actionreports.infrastructure.rendering.json import (
    JsonActionRenderer,
    JsonMacroActionRenderer,
)

__all__ = [
    "HtmlActionRenderer",
    "HtmlMacroActionRenderer",
    "JsonActionRenderer",
    "JsonMacroActionRenderer",
]
