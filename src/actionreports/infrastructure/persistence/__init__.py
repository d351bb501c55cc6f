"""
Persistence adapters for report files.
"""

from actionreports.infrastructure.persistence.filesystem import FilesystemReportStore
from actionreports.infrastructure.persistence.memory import InMemoryReportStore
from actionreports.infrastructure.persistence.replacer import FileReplacer

__all__ = [
    "FileReplacer",
    "FilesystemReportStore",
    "InMemoryReportStore",
]
