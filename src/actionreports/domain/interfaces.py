"""
Domain interfaces (Ports) for action report writing.

These abstract base classes define the contracts the report writer depends on.
Concrete renderers and report stores live in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

if TYPE_CHECKING:
    from actionreports.domain.models import (
        Action,
        RenderContext,
        ReportFormat,
        ReportKey,
    )


class ActionResultInterface(ABC):
    """
    Port for an action's result payload.

    Results may write side files (tables, attachments) that rendered fragments
    link to, so process_details() always runs before rendering.
    """

    @abstractmethod
    def process_details(self, report_dir: Path, action: "Action") -> None:
        """
        Prepare result details for reporting.

        Args:
            report_dir: Matrix report directory the fragment will be written to
            action: The action owning this result
        """
        pass

    @abstractmethod
    def to_report(self) -> dict[str, Any]:
        """Serializable view of the result embedded in report fragments."""
        pass


class FormatRendererInterface(ABC):
    """
    Port for rendering one action into a report fragment.

    A fragment may span several lines but must never contain a line equal to
    an async region marker.
    """

    @abstractmethod
    def render(self, action: "Action", context: "RenderContext") -> str:
        """
        Render an action.

        Args:
            action: The action to render
            context: Container id, report directory, format and variant

        Returns:
            The fragment text without a trailing newline. An empty string
            means nothing is written for this action.
        """
        pass


class RendererRegistryInterface(ABC):
    """Port for selecting a renderer by action kind and output format."""

    @abstractmethod
    def resolve(self, kind: str, fmt: "ReportFormat") -> FormatRendererInterface:
        """
        Args:
            kind: Action kind (e.g. "action", "macro")
            fmt: Target report format

        Raises:
            KeyError: If no renderer handles the format
        """
        pass


class ReportStoreInterface(ABC):
    """
    Port for report file storage.

    Implementations own the directory layout and serialize access to each
    physical report file through lock().
    """

    @abstractmethod
    def report_dir(self, matrix_dir: str) -> Path:
        """Directory holding all reports of one matrix (created on demand)."""
        pass

    @abstractmethod
    def report_path(self, key: "ReportKey") -> Path:
        """Location of the report file identified by key."""
        pass

    @abstractmethod
    def matrix_dirs(self) -> list[str]:
        """Names of all matrix report directories under the reports root."""
        pass

    @abstractmethod
    def exists(self, key: "ReportKey") -> bool:
        pass

    @abstractmethod
    def is_empty(self, key: "ReportKey") -> bool:
        """True if the report file is missing or has no content."""
        pass

    @abstractmethod
    def last_line(self, key: "ReportKey") -> str | None:
        """Last non-blank line of the report, None if there is none."""
        pass

    @abstractmethod
    def append(self, key: "ReportKey", lines: Sequence[str]) -> None:
        """
        Append lines to the report and flush them, all or nothing.

        Raises:
            OSError: If the file cannot be written
            UnicodeEncodeError: If a line cannot be encoded (nothing is written)
        """
        pass

    @abstractmethod
    def rewrite(
        self, key: "ReportKey", transform: Callable[[TextIO, TextIO], bool]
    ) -> bool:
        """
        Produce a replacement for the report and swap it in.

        transform(source, target) streams the current content into a fresh
        file. The replacement is only moved into place when it returns True;
        otherwise, or if it raises, the original stays untouched. A missing
        report is not created when the transform wrote nothing.

        Returns:
            True if the report was replaced

        Raises:
            ReportReplaceError: If the replacement could not be moved into place
        """
        pass

    @abstractmethod
    def lock(self, key: "ReportKey") -> AbstractContextManager[Any]:
        """Exclusive access to one report file for a write or a patch pass."""
        pass
