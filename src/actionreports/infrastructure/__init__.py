"""
Infrastructure layer for action reports.

Contains adapters for external concerns (report files, renderers, config).
"""

from actionreports.infrastructure.config import load_reports_config
from actionreports.infrastructure.persistence import (
    FileReplacer,
    FilesystemReportStore,
    InMemoryReportStore,
)
from actionreports.infrastructure.registry import RendererRegistry

__all__ = [
    # Persistence
    "FileReplacer",
    "FilesystemReportStore",
    "InMemoryReportStore",
    # Rendering
    "RendererRegistry",
    # Configuration
    "load_reports_config",
]
