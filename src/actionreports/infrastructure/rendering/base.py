"""Shared helpers for the default renderers."""

from typing import Any

from actionreports.domain.models import Action


def status_label(action: Action) -> str:
    """PASSED / FAILED, or RUNNING while an async payload is unfinished."""
    if not action.is_final:
        return "RUNNING"
    return "PASSED" if action.passed else "FAILED"


def result_view(action: Action) -> dict[str, Any] | None:
    """Serializable result payload of an action, None if it has none."""
    if action.result is None:
        return None
    to_report = getattr(action.result, "to_report", None)
    if to_report is None:
        return {"message": str(action.result)}
    view: dict[str, Any] = to_report()
    return view


def sub_container_id(container_id: str, position: int) -> str:
    return f"{container_id}_{position}"
