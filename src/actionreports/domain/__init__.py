"""
Domain layer for incremental action reports.

Contains the report file protocol (markers, JSON framing, patch pass) with no
filesystem or rendering dependencies.
"""

from actionreports.domain.exceptions import (
    ConfigurationError,
    PatchError,
    PostProcessingError,
    RenderError,
    ReportError,
    ReportReplaceError,
    UnresolvedUpdatesError,
    UnterminatedRegionError,
)
from actionreports.domain.interfaces import (
    ActionResultInterface,
    FormatRendererInterface,
    RendererRegistryInterface,
    ReportStoreInterface,
)
from actionreports.domain.json_framing import JsonArrayFramer
from actionreports.domain.markers import MarkerProtocol
from actionreports.domain.models import (
    Action,
    ActionResult,
    ActionUpdate,
    FileUpdateResult,
    Matrix,
    MatrixStep,
    PatchResult,
    RenderContext,
    ReportFormat,
    ReportKey,
    ReportsConfig,
    ReportVariant,
    Step,
)
from actionreports.domain.patching import ReportPatchEngine
from actionreports.domain.sequence import SequenceAllocator

__all__ = [
    # Models
    "Action",
    "ActionResult",
    "ActionUpdate",
    "FileUpdateResult",
    "Matrix",
    "MatrixStep",
    "PatchResult",
    "RenderContext",
    "ReportFormat",
    "ReportKey",
    "ReportsConfig",
    "ReportVariant",
    "Step",
    # Report file protocol
    "JsonArrayFramer",
    "MarkerProtocol",
    "ReportPatchEngine",
    "SequenceAllocator",
    # Interfaces
    "ActionResultInterface",
    "FormatRendererInterface",
    "RendererRegistryInterface",
    "ReportStoreInterface",
    # Exceptions
    "ConfigurationError",
    "PatchError",
    "PostProcessingError",
    "RenderError",
    "ReportError",
    "ReportReplaceError",
    "UnresolvedUpdatesError",
    "UnterminatedRegionError",
]
