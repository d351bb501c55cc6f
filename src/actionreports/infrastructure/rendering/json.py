"""Default JSON element renderers: one report object per line."""

import json
from typing import Any

from actionreports.domain.interfaces import FormatRendererInterface
from actionreports.domain.models import Action, RenderContext
from actionreports.infrastructure.rendering.base import result_view, sub_container_id


class JsonActionRenderer(FormatRendererInterface):
    """Serializes an action report as a single-line JSON object."""

    def render(self, action: Action, context: RenderContext) -> str:
        return json.dumps(
            self.to_dict(action, context.container_id), ensure_ascii=False
        )

    def to_dict(self, action: Action, container_id: str) -> dict[str, Any]:
        return {
            "actionId": action.id_in_matrix,
            "name": action.name,
            "matrix": action.matrix.name,
            "step": action.step.name,
            "containerId": container_id,
            "passed": action.passed,
            "async": action.is_async,
            "payloadFinished": action.payload_finished,
            "result": result_view(action),
        }


class JsonMacroActionRenderer(JsonActionRenderer):
    """Adds the reports of nested actions under "subActions"."""

    def to_dict(self, action: Action, container_id: str) -> dict[str, Any]:
        data = super().to_dict(action, container_id)
        data["subActions"] = [
            self.to_dict(sub_action, sub_container_id(container_id, position))
            for position, sub_action in enumerate(action.sub_actions, 1)
        ]
        return data
