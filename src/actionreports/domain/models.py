"""
Domain models for incremental action reports.

Pure data structures describing actions, the report files they are written
to, and the outcome of report updates. All models are immutable (frozen
dataclasses) except Action, whose lifecycle belongs to the execution engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

# =============================================================================
# REPORT FILE IDENTITY
# =============================================================================


class ReportFormat(Enum):
    """Output format of a report file."""

    HTML = "html"
    JSON = "json"


class ReportVariant(Enum):
    """Which actions a report file shows."""

    COMPLETE = "complete"
    FAILED_ONLY = "failed_only"


@dataclass(frozen=True)
class ReportKey:
    """Identity of one physical report file: (matrix, step, format, variant)."""

    matrix_dir: str  # Matrix short file name
    step_name: str  # Step safe name
    format: ReportFormat
    variant: ReportVariant = ReportVariant.COMPLETE

    @property
    def only_failed(self) -> bool:
        return self.variant is ReportVariant.FAILED_ONLY


@dataclass(frozen=True)
class ReportsConfig:
    """Which report files are produced, read once at writer construction."""

    complete_html: bool = True
    failed_html: bool = True
    complete_json: bool = True
    strict_unmatched: bool = False  # Abort a file update when a start marker is missing

    def enabled_keys(self, matrix_dir: str, step_name: str) -> tuple[ReportKey, ...]:
        """Report files to maintain for one (matrix, step), in write order."""
        keys: list[ReportKey] = []
        if self.complete_html:
            keys.append(ReportKey(matrix_dir, step_name, ReportFormat.HTML))
        if self.failed_html:
            keys.append(
                ReportKey(
                    matrix_dir,
                    step_name,
                    ReportFormat.HTML,
                    ReportVariant.FAILED_ONLY,
                )
            )
        if self.complete_json:
            keys.append(ReportKey(matrix_dir, step_name, ReportFormat.JSON))
        return tuple(keys)


# =============================================================================
# EXECUTION ENTITIES (owned by the execution engine)
# =============================================================================


@dataclass(frozen=True)
class Matrix:
    """A named collection of actions (one test script)."""

    name: str
    short_file_name: str


@dataclass(frozen=True)
class Step:
    """A named phase grouping actions across matrices."""

    name: str
    safe_name: str


@dataclass(frozen=True)
class ActionResult:
    """Default result payload attached to an action."""

    success: bool = True
    message: str = ""
    details: tuple[tuple[str, str], ...] = ()

    def process_details(self, report_dir: Path, action: "Action") -> None:
        """Hook for results that write side files next to the report."""

    def to_report(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass
class Action:
    """
    One executable test step.

    Mutable: the execution engine flips payload_finished and passed as an
    asynchronous action completes. The report subsystem only reads it.
    """

    id_in_matrix: str
    matrix: Matrix
    step: Step
    name: str = ""
    kind: str = "action"  # "action" or "macro"
    is_async: bool = False
    payload_finished: bool = False
    passed: bool = True
    result: Any = None  # ActionResultInterface implementation or None
    sub_actions: list["Action"] = field(default_factory=list)

    @property
    def is_final(self) -> bool:
        """Whether the report content of this action will not change anymore."""
        return not self.is_async or self.payload_finished

    def describe(self) -> str:
        return f"action '{self.id_in_matrix}' of matrix '{self.matrix.name}'"


# =============================================================================
# UPDATE BATCHES
# =============================================================================


@dataclass(frozen=True)
class MatrixStep:
    """Groups pending updates that belong to the same report files."""

    matrix: Matrix
    step: Step


@dataclass(frozen=True)
class ActionUpdate:
    """An action paired with the sequence index assigned for this update."""

    action: Action
    index: int


@dataclass(frozen=True)
class RenderContext:
    """Everything a renderer needs besides the action itself."""

    container_id: str  # <step-safe-name>_action_<index>
    report_dir: Path
    format: ReportFormat
    only_failed: bool = False


# =============================================================================
# OUTCOMES
# =============================================================================


@dataclass(frozen=True)
class PatchResult:
    """Outcome of one streaming patch pass."""

    replaced: tuple[str, ...] = ()  # Regions found and replaced
    missing: tuple[str, ...] = ()  # Start marker absent, appended at the end
    unterminated: str | None = None  # Region whose end marker never came

    @property
    def complete(self) -> bool:
        """True when no region was left open."""
        return self.unterminated is None

    @property
    def unresolved_count(self) -> int:
        """Updates that could not be placed where the file expected them."""
        return len(self.missing) + (0 if self.unterminated is None else 1)


@dataclass(frozen=True)
class FileUpdateResult:
    """Outcome of updating one report file during an update batch."""

    key: ReportKey
    path: Path
    success: bool
    patch: PatchResult | None = None
    reason: str = ""
