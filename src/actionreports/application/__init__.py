"""
Application layer for action reports.

Contains the orchestration that sequences markers, renderers, patch passes
and file replacement.
"""

from actionreports.application.report_writer import ActionReportWriter

__all__ = [
    "ActionReportWriter",
]
