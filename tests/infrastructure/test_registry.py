"""Tests for RendererRegistry - renderer lookup and entry points discovery."""

from types import SimpleNamespace

import pytest

from actionreports.domain.interfaces import FormatRendererInterface
from actionreports.domain.models import ReportFormat
from actionreports.infrastructure import registry as registry_module
from actionreports.infrastructure.registry import RendererRegistry
from actionreports.infrastructure.rendering import (
    HtmlActionRenderer,
    HtmlMacroActionRenderer,
    JsonActionRenderer,
)


class _StubRenderer(FormatRendererInterface):
    def render(self, action, context) -> str:
        return "stub"


class TestResolve:
    """Tests for resolving renderers by kind and format."""

    def test_defaults_cover_both_formats(self) -> None:
        registry = RendererRegistry.with_defaults()

        assert isinstance(registry.resolve("action", ReportFormat.HTML), HtmlActionRenderer)
        assert isinstance(registry.resolve("action", ReportFormat.JSON), JsonActionRenderer)

    def test_macro_kind(self) -> None:
        registry = RendererRegistry.with_defaults()

        assert isinstance(
            registry.resolve("macro", ReportFormat.HTML), HtmlMacroActionRenderer
        )

    def test_unknown_kind_falls_back_to_default(self) -> None:
        registry = RendererRegistry.with_defaults()

        renderer = registry.resolve("table_check", ReportFormat.JSON)

        assert type(renderer) is JsonActionRenderer

    def test_missing_format_raises_with_available_list(self) -> None:
        registry = RendererRegistry()
        registry.register(ReportFormat.HTML, "action", _StubRenderer())

        with pytest.raises(KeyError, match="html.action"):
            registry.resolve("action", ReportFormat.JSON)

    def test_register_overrides(self) -> None:
        registry = RendererRegistry.with_defaults()
        stub = _StubRenderer()

        registry.register(ReportFormat.HTML, "action", stub)

        assert registry.resolve("action", ReportFormat.HTML) is stub

    def test_available(self) -> None:
        assert RendererRegistry.with_defaults().available() == [
            "html.action",
            "html.macro",
            "json.action",
            "json.macro",
        ]


class TestEntryPointsLoading:
    """Tests for entry points discovery and loading."""

    def _patch_entry_points(self, monkeypatch, eps) -> None:
        monkeypatch.setattr(
            registry_module, "entry_points", lambda group: eps
        )

    def test_loads_published_renderers(self, monkeypatch) -> None:
        eps = [SimpleNamespace(name="html.table_check", load=lambda: _StubRenderer)]
        self._patch_entry_points(monkeypatch, eps)
        registry = RendererRegistry.with_defaults()

        assert registry.load_entry_points() == 1
        assert isinstance(
            registry.resolve("table_check", ReportFormat.HTML), _StubRenderer
        )

    def test_broken_entry_point_warns(self, monkeypatch) -> None:
        eps = [
            SimpleNamespace(name="no_format_separator", load=lambda: _StubRenderer),
            SimpleNamespace(name="pdf.action", load=lambda: _StubRenderer),
        ]
        self._patch_entry_points(monkeypatch, eps)
        registry = RendererRegistry()

        with pytest.warns(UserWarning, match="Failed to load renderer"):
            loaded = registry.load_entry_points()

        assert loaded == 0
        assert registry.available() == []

    def test_with_defaults_can_load_entry_points(self, monkeypatch) -> None:
        eps = [SimpleNamespace(name="json.action", load=lambda: _StubRenderer)]
        self._patch_entry_points(monkeypatch, eps)

        registry = RendererRegistry.with_defaults(load_entry_points=True)

        assert isinstance(registry.resolve("action", ReportFormat.JSON), _StubRenderer)
