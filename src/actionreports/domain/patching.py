"""
Streaming patch pass over a report file.

Reads the current report line by line and writes a replacement in a single
pass. Lines outside async regions are copied verbatim; every region belonging
to a pending update is dropped as a whole and the update's fresh fragment is
written in its place. Updates whose region is not found are appended after all
copied content so no result is silently lost.

The engine never touches files itself: the caller supplies the source lines
and the target stream, and decides from the returned PatchResult whether the
replacement may be moved over the original.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import TextIO

from actionreports.domain.json_framing import CLOSE, OPEN, JsonArrayFramer
from actionreports.domain.markers import MarkerProtocol
from actionreports.domain.models import ActionUpdate, PatchResult, ReportFormat


class ReportPatchEngine:
    """Replaces marker-bracketed regions of pending actions in one pass."""

    def __init__(
        self,
        markers: MarkerProtocol | None = None,
        framer: JsonArrayFramer | None = None,
    ) -> None:
        self._markers = markers or MarkerProtocol()
        self._framer = framer or JsonArrayFramer(self._markers)

    def patch(
        self,
        source: Iterable[str],
        target: TextIO,
        updates: Sequence[ActionUpdate],
        fmt: ReportFormat,
        render: Callable[[ActionUpdate], str],
    ) -> PatchResult:
        """
        Run one patch pass.

        Args:
            source: Lines of the current report (line endings are stripped)
            target: Stream receiving the replacement report
            updates: Pending updates, one per action
            fmt: Report format, selects marker syntax and JSON framing
            render: Produces the fragment of an update; "" writes nothing

        Returns:
            PatchResult. When it is not complete the target content must be
            discarded: the unterminated region swallowed the rest of the file.
        """
        pending: dict[str, ActionUpdate] = {
            self._markers.start_marker(u.action.id_in_matrix, fmt): u for u in updates
        }
        writer = _LineWriter(target, hold_close=fmt is ReportFormat.JSON)
        replaced: list[str] = []
        inside: ActionUpdate | None = None
        end_to_find = ""

        for raw in source:
            line = raw.rstrip("\r\n")
            if inside is not None:
                # Old preliminary content is replaced wholesale, never merged
                if line == end_to_find:
                    inside = None
                continue

            update = pending.pop(line, None)
            if update is None:
                writer.write(line)
                continue

            inside = update
            action_id = update.action.id_in_matrix
            end_to_find = self._markers.end_marker(action_id, fmt)
            replaced.append(action_id)
            writer.write_fragment(render(update))

        missing = tuple(u.action.id_in_matrix for u in pending.values())
        if inside is not None:
            return PatchResult(
                replaced=tuple(replaced),
                missing=missing,
                unterminated=inside.action.id_in_matrix,
            )

        for update in pending.values():
            fragment = render(update)
            if not fragment:
                continue
            if fmt is ReportFormat.JSON:
                prefix = writer.element_prefix(self._framer)
                if prefix:
                    writer.insert(prefix)
            writer.insert(fragment)
        writer.close()

        return PatchResult(replaced=tuple(replaced), missing=missing)


class _LineWriter:
    """
    Writes report lines, optionally holding back a trailing "]".

    Holding the closing bracket lets elements be appended to a sealed JSON
    report while keeping it sealed.
    """

    def __init__(self, target: TextIO, hold_close: bool) -> None:
        self._target = target
        self._hold_close = hold_close
        self._held: list[str] = []
        self._last = ""
        self._written = False

    def write(self, line: str) -> None:
        if self._hold_close:
            if line.strip() == CLOSE:
                self._flush()
                self._held = [line]
                return
            if self._held and not line.strip():
                self._held.append(line)
                return
            self._flush()
        self._emit(line)

    def write_fragment(self, fragment: str) -> None:
        if fragment:
            self._flush()
            self._emit(fragment)

    def insert(self, text: str) -> None:
        """Write ahead of a held "]" without releasing it."""
        self._emit(text)

    def element_prefix(self, framer: JsonArrayFramer) -> str:
        """Separator needed before appending an element here, "" for none."""
        if self._written and self._last.strip() == OPEN:
            return ""
        return framer.element_prefix(is_empty=not self._written)

    def close(self) -> None:
        self._flush()

    def _flush(self) -> None:
        held, self._held = self._held, []
        for line in held:
            self._emit(line)

    def _emit(self, text: str) -> None:
        self._target.write(text + "\n")
        self._last = text.rsplit("\n", 1)[-1]
        self._written = True
