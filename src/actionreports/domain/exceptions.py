"""
Domain exceptions for action report writing.

Report generation is best-effort relative to test execution: these are raised
by the domain and infrastructure layers and caught by the report writer at the
per-action or per-file boundary, never propagated into the scheduler.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ReportError(Exception):
    """Base class for every report writing failure."""


class ConfigurationError(ReportError):
    """Raised when a reports configuration file is invalid or missing."""


class RenderError(ReportError):
    """Raised when an action's fragment cannot be rendered."""

    def __init__(self, message: str, action_id: str):
        """
        Args:
            message: Human-readable error message
            action_id: Identifier of the action within its matrix
        """
        super().__init__(message)
        self.action_id = action_id


class PostProcessingError(ReportError):
    """Raised when an action result fails to prepare its report details."""

    def __init__(self, message: str, action_id: str):
        super().__init__(message)
        self.action_id = action_id


class PatchError(ReportError):
    """
    Raised when a patch pass cannot produce a consistent replacement file.

    The original report must stay untouched whenever this is raised.
    """

    def __init__(self, message: str, path: "Path", unresolved: int):
        """
        Args:
            message: Human-readable error message
            path: Report file that was being patched
            unresolved: Number of pending updates that could not be applied
        """
        super().__init__(message)
        self.path = path
        self.unresolved = unresolved


class UnterminatedRegionError(PatchError):
    """The end marker of a pending region is missing before end of file."""

    def __init__(self, path: "Path", action_id: str, unresolved: int):
        super().__init__(
            f"Async action end not found for action '{action_id}' in {path}",
            path,
            unresolved,
        )
        self.action_id = action_id


class UnresolvedUpdatesError(PatchError):
    """Start markers were missing for some updates and strict mode is on."""

    def __init__(self, path: "Path", action_ids: tuple[str, ...]):
        super().__init__(
            f"Async action start not found for {len(action_ids)} action(s) in {path}",
            path,
            len(action_ids),
        )
        self.action_ids = action_ids


class ReportReplaceError(ReportError):
    """Raised when a patched file cannot be moved over the original."""

    def __init__(self, message: str, original: "Path", replacement: "Path"):
        super().__init__(message)
        self.original = original
        self.replacement = replacement
