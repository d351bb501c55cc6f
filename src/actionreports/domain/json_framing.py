"""
Open-array framing for JSON reports.

A JSON report is written one element at a time: the first element is
preceded by an "[" line, every later one by a "," line. The closing "]" line
is only appended when the step completes (sealing) and is stripped again if
more elements arrive afterwards (reopening).
"""

import json
from collections.abc import Iterable
from typing import Any, TextIO

from actionreports.domain.markers import MarkerProtocol

OPEN = "["
SEPARATOR = ","
CLOSE = "]"


class JsonArrayFramer:
    """Framing rules for JSON report files."""

    def __init__(self, markers: MarkerProtocol | None = None) -> None:
        self._markers = markers or MarkerProtocol()

    def element_prefix(self, is_empty: bool) -> str:
        """Line to write before the next element."""
        return OPEN if is_empty else SEPARATOR

    def is_sealed(self, last_line: str | None) -> bool:
        return last_line is not None and last_line.strip() == CLOSE

    def strip_seal(self, source: Iterable[str], target: TextIO) -> bool:
        """
        Copy a report, dropping its trailing "]" line.

        Blank lines after the bracket are dropped with it. A "]" followed by
        anything else is ordinary content and is kept.

        Returns:
            True if a seal was removed
        """
        held: list[str] = []
        for raw in source:
            line = raw.rstrip("\r\n")
            if line.strip() == CLOSE:
                self._write_lines(target, held)
                held = [line]
                continue
            if held and not line.strip():
                held.append(line)
                continue
            self._write_lines(target, held)
            held = []
            target.write(line + "\n")
        return bool(held)

    def load(self, text: str) -> list[Any]:
        """
        Parse a report as a JSON array, whatever its current state.

        Marker lines of open regions are ignored and an open array is closed,
        so an in-progress report reads the same as once sealed.

        Raises:
            ValueError: If the content is not a JSON array
        """
        lines = [
            line for line in text.splitlines() if not self._markers.is_marker(line)
        ]
        if not any(line.strip() for line in lines):
            return []
        last = next(line for line in reversed(lines) if line.strip())
        if not self.is_sealed(last):
            lines.append(CLOSE)
        data = json.loads("\n".join(lines))
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array, got {type(data).__name__}")
        return data

    @staticmethod
    def _write_lines(target: TextIO, lines: list[str]) -> None:
        for line in lines:
            target.write(line + "\n")
