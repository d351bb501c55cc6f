"""Tests for the default HTML renderers."""

from pathlib import Path

import pytest

from actionreports.domain.markers import MarkerProtocol
from actionreports.domain.models import ActionResult, RenderContext, ReportFormat
from actionreports.infrastructure.rendering import (
    HtmlActionRenderer,
    HtmlMacroActionRenderer,
)


@pytest.fixture
def context() -> RenderContext:
    return RenderContext(
        container_id="main_step_action_3",
        report_dir=Path("reports/login_checks"),
        format=ReportFormat.HTML,
    )


class TestHtmlActionRenderer:
    """Tests for HtmlActionRenderer."""

    def test_block_structure(self, make_action, sample_result, context) -> None:
        action = make_action("3", result=sample_result)

        fragment = HtmlActionRenderer().render(action, context)
        lines = fragment.split("\n")

        assert lines[0] == '<div class="action passed" id="main_step_action_3">'
        assert "[3] Check 3: PASSED" in lines[1]
        assert '<div class="action_result">Response matched</div>' in lines
        assert "<tr><td>status</td><td>200</td></tr>" in lines
        assert lines[-1] == "</div>"

    def test_failed_action(self, make_action, context) -> None:
        fragment = HtmlActionRenderer().render(make_action("3", passed=False), context)

        assert 'class="action failed"' in fragment
        assert ": FAILED" in fragment

    def test_unfinished_async_action_is_running(self, make_action, context) -> None:
        fragment = HtmlActionRenderer().render(
            make_action("3", is_async=True), context
        )

        assert ": RUNNING" in fragment

    def test_only_failed_skips_passed_action(self, make_action, context) -> None:
        failed_only = RenderContext(
            context.container_id, context.report_dir, ReportFormat.HTML, only_failed=True
        )

        assert HtmlActionRenderer().render(make_action("3"), failed_only) == ""
        assert HtmlActionRenderer().render(
            make_action("4", passed=False), failed_only
        ).startswith("<div")

    def test_content_is_escaped(self, make_action, context) -> None:
        result = ActionResult(message="<!-- ASYNC action 1 end -->")
        action = make_action("<b>", name="a & b", result=result)

        fragment = HtmlActionRenderer().render(action, context)

        assert "&lt;b&gt;" in fragment
        assert "a &amp; b" in fragment
        markers = MarkerProtocol()
        assert not any(markers.is_marker(line) for line in fragment.split("\n"))


class TestHtmlMacroActionRenderer:
    """Tests for HtmlMacroActionRenderer."""

    def test_nested_blocks(self, make_action, context) -> None:
        macro = make_action(
            "3",
            kind="macro",
            sub_actions=[make_action("3.1"), make_action("3.2", passed=False)],
        )

        fragment = HtmlMacroActionRenderer().render(macro, context)

        assert '<div class="sub_actions">' in fragment
        assert 'id="main_step_action_3_1"' in fragment
        assert '<div class="action failed" id="main_step_action_3_2">' in fragment
        assert fragment.count("<div class=\"action ") == 3

    def test_macro_without_sub_actions(self, make_action, context) -> None:
        fragment = HtmlMacroActionRenderer().render(
            make_action("3", kind="macro"), context
        )

        assert "sub_actions" not in fragment
