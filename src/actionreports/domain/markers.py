"""
Async region markers.

A region reserves the position of an unfinished asynchronous action inside a
report file. It is bracketed by a start and an end marker line, each a comment
in the report's own syntax so the file stays readable while regions are open.
Recognition is exact line equality, never pattern matching.
"""

import re
from collections.abc import Iterable

from actionreports.domain.models import ReportFormat

_COMMENT_WRAPPERS: dict[ReportFormat, tuple[str, str]] = {
    ReportFormat.HTML: ("<!-- ", " -->"),
    ReportFormat.JSON: ("/* ", " */"),
}

_MARKER_PATTERN = re.compile(
    r"^(?:<!-- |/\* )ASYNC action (?P<id>.+) (?P<edge>start|end)(?: -->| \*/)$"
)


class MarkerProtocol:
    """Builds and recognizes the marker lines of async regions."""

    LABEL = "ASYNC action {action_id} {edge}"

    def start_marker(self, action_id: str, fmt: ReportFormat) -> str:
        return self.wrap_comment(
            self.LABEL.format(action_id=action_id, edge="start"), fmt
        )

    def end_marker(self, action_id: str, fmt: ReportFormat) -> str:
        return self.wrap_comment(self.LABEL.format(action_id=action_id, edge="end"), fmt)

    def wrap_comment(self, label: str, fmt: ReportFormat) -> str:
        """Wrap a label into the comment delimiters of the given format."""
        prefix, suffix = _COMMENT_WRAPPERS[fmt]
        return f"{prefix}{label}{suffix}"

    def parse(self, line: str) -> tuple[str, str] | None:
        """
        Recognize any marker line.

        Returns:
            (action_id, "start" | "end"), or None for ordinary content
        """
        match = _MARKER_PATTERN.match(line)
        if match is None:
            return None
        return match.group("id"), match.group("edge")

    def is_marker(self, line: str) -> bool:
        return self.parse(line) is not None

    def scan_open_regions(self, lines: Iterable[str]) -> list[str]:
        """
        List actions whose region is still outstanding.

        A region is outstanding from its start marker until its end marker.
        Regions never closed before the last line are reported too, so a
        non-empty result on a file at rest means pending or broken updates.
        """
        open_ids: list[str] = []
        for line in lines:
            parsed = self.parse(line.rstrip("\r\n"))
            if parsed is None:
                continue
            action_id, edge = parsed
            if edge == "start":
                open_ids.append(action_id)
            elif action_id in open_ids:
                open_ids.remove(action_id)
        return open_ids
