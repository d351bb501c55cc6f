"""
ActionReportWriter: keeps per-step action reports current during a run.

Appends every executed action to the report files of its matrix and step,
reserves marker-bracketed regions for unfinished asynchronous actions, and
later patches those regions once the actions finish. Report generation is
best-effort: failures are logged and reported as outcomes, never raised into
the caller.
"""

import logging
from collections.abc import Callable, Collection, Sequence
from pathlib import Path
from typing import TextIO

from actionreports.domain.exceptions import (
    PatchError,
    PostProcessingError,
    RenderError,
    ReportReplaceError,
    UnresolvedUpdatesError,
    UnterminatedRegionError,
)
from actionreports.domain.interfaces import (
    RendererRegistryInterface,
    ReportStoreInterface,
)
from actionreports.domain.json_framing import CLOSE, JsonArrayFramer
from actionreports.domain.markers import MarkerProtocol
from actionreports.domain.models import (
    Action,
    ActionUpdate,
    FileUpdateResult,
    MatrixStep,
    PatchResult,
    RenderContext,
    ReportFormat,
    ReportKey,
    ReportsConfig,
)
from actionreports.domain.patching import ReportPatchEngine
from actionreports.domain.sequence import SequenceAllocator

logger = logging.getLogger(__name__)


class ActionReportWriter:
    """
    Orchestrates initial writes, async updates, sealing and reopening.

    One instance per run. Writes to the same report file are serialized
    through the store's per-file lock, so the writer may be called from
    several scheduler threads.
    """

    def __init__(
        self,
        config: ReportsConfig,
        store: ReportStoreInterface,
        renderers: RendererRegistryInterface,
        sequence: SequenceAllocator | None = None,
        markers: MarkerProtocol | None = None,
    ):
        """
        Args:
            config: Which report files to produce
            store: Report file storage
            renderers: Renderer lookup by action kind and format
            sequence: Run-scoped index counter (a fresh one if None)
            markers: Async region marker protocol
        """
        self._config = config
        self._store = store
        self._renderers = renderers
        self._sequence = sequence or SequenceAllocator()
        self._markers = markers or MarkerProtocol()
        self._framer = JsonArrayFramer(self._markers)
        self._engine = ReportPatchEngine(self._markers, self._framer)

    @property
    def action_index(self) -> int:
        """Last sequence index handed out."""
        return self._sequence.current

    def reset(self) -> None:
        """Restart sequence numbering at the beginning of a run."""
        self._sequence.reset()

    @staticmethod
    def build_result_id(step_name: str, index: int) -> str:
        """Container identifier referenced by rendered fragments."""
        return f"{step_name}_action_{index}"

    # =========================================================================
    # INITIAL WRITE
    # =========================================================================

    def write_report(self, action: Action) -> bool:
        """
        Append an executed action to every enabled report of its step.

        Unfinished async actions are bracketed by start/end markers so that
        update_reports() can replace their preliminary content later.

        Returns:
            True if every enabled report received the action
        """
        index = self._sequence.next()
        logger.debug("Writing report for %s", action.describe())

        matrix_dir = action.matrix.short_file_name
        report_dir = self._store.report_dir(matrix_dir)
        try:
            self._process_details(action, report_dir)
        except PostProcessingError as e:
            logger.error("Report for %s skipped: %s", action.describe(), e)
            return False

        written = True
        for key in self._config.enabled_keys(matrix_dir, action.step.safe_name):
            if key.only_failed and action.passed and not action.is_async:
                continue
            context = RenderContext(
                container_id=self.build_result_id(key.step_name, index),
                report_dir=report_dir,
                format=key.format,
                only_failed=key.only_failed,
            )
            try:
                self._append_action(key, action, context)
            except Exception:
                logger.error(
                    "Could not write %s report for %s",
                    key.format.value,
                    action.describe(),
                    exc_info=True,
                )
                written = False
        return written

    def _append_action(
        self, key: ReportKey, action: Action, context: RenderContext
    ) -> None:
        fragment = self._render(action, context)
        action_id = action.id_in_matrix

        lines: list[str] = []
        if action.is_final:
            if fragment:
                lines.append(fragment)
        else:
            lines.append(self._markers.start_marker(action_id, key.format))
            if fragment:
                lines.append(fragment)
            lines.append(self._markers.end_marker(action_id, key.format))
        if not lines:
            return

        with self._store.lock(key):
            if key.format is ReportFormat.JSON:
                self._reopen_if_sealed(key)
                lines.insert(0, self._framer.element_prefix(self._store.is_empty(key)))
            self._store.append(key, lines)

    # =========================================================================
    # ASYNC UPDATES
    # =========================================================================

    def update_reports(self, actions: Collection[Action]) -> list[FileUpdateResult]:
        """
        Replace the preliminary content of finished async actions.

        Each affected report file is rewritten in one patch pass and swapped
        in only if the pass succeeds; otherwise it stays exactly as it was.

        Returns:
            One outcome per report file touched
        """
        logger.debug("Updating reports for %d action(s)", len(actions))

        results: list[FileUpdateResult] = []
        for group, updates in self._prepare_updates(actions).items():
            matrix_dir = group.matrix.short_file_name
            report_dir = self._store.report_dir(matrix_dir)
            for update in updates:
                try:
                    self._process_details(update.action, report_dir)
                except PostProcessingError as e:
                    logger.warning(
                        "Updating %s without processed details: %s",
                        update.action.describe(),
                        e,
                    )

            for key in self._config.enabled_keys(matrix_dir, group.step.safe_name):
                results.append(self._update_report(key, updates, report_dir))
        return results

    def _prepare_updates(
        self, actions: Collection[Action]
    ) -> dict[MatrixStep, list[ActionUpdate]]:
        """Group actions by report files, assigning fresh sequence indices."""
        result: dict[MatrixStep, list[ActionUpdate]] = {}
        for action in actions:
            key = MatrixStep(action.matrix, action.step)
            update = ActionUpdate(action, self._sequence.next())
            result.setdefault(key, []).append(update)
        return result

    def _update_report(
        self, key: ReportKey, updates: Sequence[ActionUpdate], report_dir: Path
    ) -> FileUpdateResult:
        path = self._store.report_path(key)
        patch_pass = _PatchPass(
            self._engine,
            path,
            key.format,
            updates,
            lambda update: self._render_update(key, update, report_dir),
            strict=self._config.strict_unmatched,
        )
        try:
            with self._store.lock(key):
                self._store.rewrite(key, patch_pass)
        except PatchError as e:
            logger.warning(
                "%s. Report is not updated to not affect other data, "
                "%d action update(s) unresolved",
                e,
                e.unresolved,
            )
            return FileUpdateResult(key, path, False, patch_pass.result, str(e))
        except ReportReplaceError as e:
            logger.error("%s. Update of %d action(s) is lost", e, len(updates))
            return FileUpdateResult(key, path, False, patch_pass.result, str(e))
        except Exception as e:
            logger.error("Could not update report '%s'", path, exc_info=True)
            return FileUpdateResult(key, path, False, patch_pass.result, str(e))

        logger.debug("Updated %d action(s) in '%s'", len(updates), path)
        return FileUpdateResult(key, path, True, patch_pass.result)

    def _render_update(
        self, key: ReportKey, update: ActionUpdate, report_dir: Path
    ) -> str:
        if key.only_failed and update.action.passed:
            return ""
        context = RenderContext(
            container_id=self.build_result_id(key.step_name, update.index),
            report_dir=report_dir,
            format=key.format,
            only_failed=key.only_failed,
        )
        return self._render(update.action, context)

    # =========================================================================
    # STEP COMPLETION
    # =========================================================================

    def make_reports_ending(self, step_name: str) -> list[Path]:
        """
        Seal the JSON report of a completed step in every matrix directory.

        A failure in one directory does not stop the others.

        Returns:
            Reports that received the closing bracket
        """
        if not self._config.complete_json:
            return []

        sealed: list[Path] = []
        for matrix_dir in self._store.matrix_dirs():
            key = ReportKey(matrix_dir, step_name, ReportFormat.JSON)
            try:
                with self._store.lock(key):
                    if self._store.is_empty(key):
                        continue
                    if self._framer.is_sealed(self._store.last_line(key)):
                        logger.debug(
                            "Report '%s' is already sealed",
                            self._store.report_path(key),
                        )
                        continue
                    self._store.append(key, [CLOSE])
            except Exception:
                logger.error(
                    "Cannot complete step JSON report in '%s'",
                    matrix_dir,
                    exc_info=True,
                )
                continue
            sealed.append(self._store.report_path(key))
        return sealed

    def prepare_reports_to_update(self, matrix_dir: str, step_name: str) -> bool:
        """
        Reopen a sealed JSON report so more elements can be appended.

        Returns:
            True if a closing bracket was removed
        """
        if not self._config.complete_json:
            return False

        key = ReportKey(matrix_dir, step_name, ReportFormat.JSON)
        try:
            with self._store.lock(key):
                if not self._store.exists(key):
                    return False
                return self._store.rewrite(key, self._framer.strip_seal)
        except Exception:
            logger.error(
                "Could not prepare report '%s' for update",
                self._store.report_path(key),
                exc_info=True,
            )
            return False

    def _reopen_if_sealed(self, key: ReportKey) -> None:
        if self._framer.is_sealed(self._store.last_line(key)):
            logger.info("Reopening sealed report '%s'", self._store.report_path(key))
            self._store.rewrite(key, self._framer.strip_seal)

    # =========================================================================
    # COLLABORATORS
    # =========================================================================

    def _process_details(self, action: Action, report_dir: Path) -> None:
        if action.result is None:
            return
        try:
            action.result.process_details(report_dir, action)
        except Exception as e:
            raise PostProcessingError(
                f"Could not process result details: {e}", action.id_in_matrix
            ) from e

    def _render(self, action: Action, context: RenderContext) -> str:
        try:
            renderer = self._renderers.resolve(action.kind, context.format)
            return renderer.render(action, context)
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(
                f"Could not render {action.describe()}: {e}", action.id_in_matrix
            ) from e


class _PatchPass:
    """One patch pass over a report file, used as a store rewrite transform."""

    def __init__(
        self,
        engine: ReportPatchEngine,
        path: Path,
        fmt: ReportFormat,
        updates: Sequence[ActionUpdate],
        render: Callable[[ActionUpdate], str],
        strict: bool,
    ):
        self._engine = engine
        self._path = path
        self._fmt = fmt
        self._updates = updates
        self._render = render
        self._strict = strict
        self.result: PatchResult | None = None

    def __call__(self, source: TextIO, target: TextIO) -> bool:
        self.result = self._engine.patch(
            source, target, self._updates, self._fmt, self._render
        )

        if not self.result.complete:
            raise UnterminatedRegionError(
                self._path,
                self.result.unterminated or "",
                self.result.unresolved_count,
            )
        if self.result.missing:
            if self._strict:
                raise UnresolvedUpdatesError(self._path, self.result.missing)
            logger.warning(
                "Async action start not found for %d action(s) in '%s', "
                "appended at the end",
                len(self.result.missing),
                self._path,
            )
        return True
