"""
actionreports: incremental HTML and JSON reports for test runs.

Writes one report file per (matrix, step, format) while actions execute,
reserves regions for asynchronous actions that are still running, and patches
those regions in place once the actions finish.

Example:
    from actionreports import (
        ActionReportWriter,
        FilesystemReportStore,
        RendererRegistry,
        ReportsConfig,
    )

    writer = ActionReportWriter(
        ReportsConfig(),
        FilesystemReportStore("reports"),
        RendererRegistry.with_defaults(),
    )
    writer.write_report(action)
    ...
    writer.update_reports(finished_async_actions)
    writer.make_reports_ending(step.safe_name)
"""

# Application layer (orchestration)
from actionreports.application.report_writer import ActionReportWriter

# Domain exceptions
from actionreports.domain.exceptions import (
    ConfigurationError,
    PatchError,
    RenderError,
    ReportError,
    ReportReplaceError,
)

# Domain interfaces (for custom renderers, results and stores)
from actionreports.domain.interfaces import (
    ActionResultInterface,
    FormatRendererInterface,
    RendererRegistryInterface,
    ReportStoreInterface,
)

# Report file protocol
from actionreports.domain.json_framing import JsonArrayFramer
from actionreports.domain.markers import MarkerProtocol

# Domain models (most commonly used)
from actionreports.domain.models import (
    Action,
    ActionResult,
    FileUpdateResult,
    Matrix,
    ReportFormat,
    ReportsConfig,
    ReportVariant,
    Step,
)
from actionreports.domain.patching import ReportPatchEngine
from actionreports.domain.sequence import SequenceAllocator

# Infrastructure (explicit import encouraged for dependency injection)
from actionreports.infrastructure.config import load_reports_config
from actionreports.infrastructure.persistence import (
    FileReplacer,
    FilesystemReportStore,
    InMemoryReportStore,
)
from actionreports.infrastructure.registry import RendererRegistry

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Domain models
    "Action",
    "ActionResult",
    "FileUpdateResult",
    "Matrix",
    "ReportFormat",
    "ReportsConfig",
    "ReportVariant",
    "Step",
    # Report file protocol
    "JsonArrayFramer",
    "MarkerProtocol",
    "ReportPatchEngine",
    "SequenceAllocator",
    # Domain interfaces
    "ActionResultInterface",
    "FormatRendererInterface",
    "RendererRegistryInterface",
    "ReportStoreInterface",
    # Domain exceptions
    "ConfigurationError",
    "PatchError",
    "RenderError",
    "ReportError",
    "ReportReplaceError",
    # Application layer
    "ActionReportWriter",
    # Infrastructure
    "FileReplacer",
    "FilesystemReportStore",
    "InMemoryReportStore",
    "RendererRegistry",
    "load_reports_config",
]
