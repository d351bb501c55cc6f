"""
Renderer Registry with Entry Points Discovery.

Maps (report format, action kind) to a renderer. External packages can add
renderers for their own action kinds in their pyproject.toml:

    [project.entry-points."actionreports.renderers"]
    "html.table_check" = "mypackage.reports:TableCheckHtmlRenderer"

The entry point name is "<format>.<kind>"; the object it points to is a
renderer class constructed without arguments.
"""

import warnings
from importlib.metadata import entry_points

from actionreports.domain.interfaces import (
    FormatRendererInterface,
    RendererRegistryInterface,
)
from actionreports.domain.models import ReportFormat
from actionreports.infrastructure.rendering import (
    HtmlActionRenderer,
    HtmlMacroActionRenderer,
    JsonActionRenderer,
    JsonMacroActionRenderer,
)

ENTRY_POINT_GROUP = "actionreports.renderers"
DEFAULT_KIND = "action"


class RendererRegistry(RendererRegistryInterface):
    """
    Variant-dispatch table of renderers.

    Kinds without a dedicated renderer fall back to the DEFAULT_KIND renderer
    of the same format.

    Example usage:
        registry = RendererRegistry.with_defaults()
        renderer = registry.resolve("macro", ReportFormat.HTML)
    """

    def __init__(self) -> None:
        self._renderers: dict[tuple[ReportFormat, str], FormatRendererInterface] = {}

    @classmethod
    def with_defaults(cls, load_entry_points: bool = False) -> "RendererRegistry":
        """
        Create a registry holding the built-in HTML and JSON renderers.

        Args:
            load_entry_points: Also register renderers published by installed
                packages (they override built-ins of the same name)
        """
        registry = cls()
        registry.register(ReportFormat.HTML, DEFAULT_KIND, HtmlActionRenderer())
        registry.register(ReportFormat.HTML, "macro", HtmlMacroActionRenderer())
        registry.register(ReportFormat.JSON, DEFAULT_KIND, JsonActionRenderer())
        registry.register(ReportFormat.JSON, "macro", JsonMacroActionRenderer())
        if load_entry_points:
            registry.load_entry_points()
        return registry

    def register(
        self, fmt: ReportFormat, kind: str, renderer: FormatRendererInterface
    ) -> None:
        self._renderers[(fmt, kind)] = renderer

    def resolve(self, kind: str, fmt: ReportFormat) -> FormatRendererInterface:
        renderer = self._renderers.get((fmt, kind)) or self._renderers.get(
            (fmt, DEFAULT_KIND)
        )
        if renderer is None:
            available = ", ".join(self.available()) or "(none)"
            raise KeyError(
                f"No renderer for kind '{kind}' in {fmt.value} format. "
                f"Available renderers: {available}"
            )
        return renderer

    def load_entry_points(self) -> int:
        """
        Register renderers from the 'actionreports.renderers' group.

        Returns:
            Number of renderers loaded
        """
        loaded = 0
        for ep in entry_points(group=ENTRY_POINT_GROUP):
            try:
                fmt_name, kind = ep.name.split(".", 1)
                renderer_class = ep.load()
                self.register(ReportFormat(fmt_name), kind, renderer_class())
            except Exception as e:
                warnings.warn(
                    f"Failed to load renderer '{ep.name}' from entry point: {e}",
                    stacklevel=2,
                )
                continue
            loaded += 1
        return loaded

    def available(self) -> list[str]:
        """Registered renderers as "<format>.<kind>" names."""
        return sorted(f"{fmt.value}.{kind}" for fmt, kind in self._renderers)
