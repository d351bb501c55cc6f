"""
Default HTML fragment renderers.

Every piece of action data is escaped, so a fragment can never contain a line
that reads as an async region marker.
"""

from html import escape

from actionreports.domain.interfaces import FormatRendererInterface
from actionreports.domain.models import Action, RenderContext
from actionreports.infrastructure.rendering.base import (
    result_view,
    status_label,
    sub_container_id,
)


class HtmlActionRenderer(FormatRendererInterface):
    """Renders a plain action as one <div> block."""

    def render(self, action: Action, context: RenderContext) -> str:
        if context.only_failed and action.passed:
            return ""
        return "\n".join(self._block(action, context.container_id))

    def _block(self, action: Action, container_id: str) -> list[str]:
        css = "passed" if action.passed else "failed"
        title = escape(action.name or action.id_in_matrix)
        lines = [
            f'<div class="action {css}" id="{escape(container_id)}">',
            f'<div class="action_header">[{escape(action.id_in_matrix)}] '
            f"{title}: {status_label(action)}</div>",
        ]
        lines.extend(self._result_lines(action))
        lines.extend(self._body_lines(action, container_id))
        lines.append("</div>")
        return lines

    def _result_lines(self, action: Action) -> list[str]:
        result = result_view(action)
        if not result:
            return []
        lines = []
        if result.get("message"):
            lines.append(
                f'<div class="action_result">{escape(str(result["message"]))}</div>'
            )
        details = result.get("details") or {}
        if details:
            lines.append('<table class="action_details">')
            for name, value in details.items():
                lines.append(
                    f"<tr><td>{escape(str(name))}</td><td>{escape(str(value))}</td></tr>"
                )
            lines.append("</table>")
        return lines

    def _body_lines(self, action: Action, container_id: str) -> list[str]:
        """Extra content between the result and the closing tag."""
        return []


class HtmlMacroActionRenderer(HtmlActionRenderer):
    """Renders a macro action with the blocks of its nested actions."""

    def _body_lines(self, action: Action, container_id: str) -> list[str]:
        if not action.sub_actions:
            return []
        lines = ['<div class="sub_actions">']
        for position, sub_action in enumerate(action.sub_actions, 1):
            lines.extend(
                self._block(sub_action, sub_container_id(container_id, position))
            )
        lines.append("</div>")
        return lines
