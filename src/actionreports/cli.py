"""
Command line tools for action report files.

Usage:
    actionreports seal <reports_dir> <step>
    actionreports reopen <reports_dir> <matrix> <step>
    actionreports inspect <report_file> [--strict]
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import Any, TypeVar

import click

from actionreports.application.report_writer import ActionReportWriter
from actionreports.console import (
    console,
    print_error,
    print_paths,
    print_report_summary,
    print_success,
)
from actionreports.domain.exceptions import ConfigurationError
from actionreports.domain.json_framing import JsonArrayFramer
from actionreports.domain.markers import MarkerProtocol
from actionreports.domain.models import ReportFormat, ReportsConfig
from actionreports.infrastructure.config import load_reports_config
from actionreports.infrastructure.persistence import FilesystemReportStore
from actionreports.infrastructure.registry import RendererRegistry
from actionreports.logging_setup import setup_logging

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def config_option(func: F) -> F:
    """Decorator adding the --config option to a click command."""

    @click.option(
        "--config",
        "config_path",
        default=None,
        type=click.Path(exists=True, dir_okay=False),
        help="Path to reports config JSON (default: all reports enabled)",
    )
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def _build_writer(reports_dir: str, config_path: str | None) -> ActionReportWriter:
    """Create a writer over a reports directory, exiting on bad config."""
    try:
        config = (
            load_reports_config(Path(config_path)) if config_path else ReportsConfig()
        )
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        print_error(str(e), "Check that the reports config file is valid JSON.")
        sys.exit(1)

    return ActionReportWriter(
        config,
        FilesystemReportStore(reports_dir),
        RendererRegistry.with_defaults(load_entry_points=True),
    )


@click.group()
@click.option(
    "--log-file",
    default=None,
    type=click.Path(),
    help="Path to log file",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose (DEBUG) logging to console",
)
def main(log_file: str | None, verbose: bool) -> None:
    """Maintain incremental action report files."""
    setup_logging("actionreports", log_file, verbose)


@main.command()
@click.argument("reports_dir", type=click.Path(exists=True, file_okay=False))
@click.argument("step")
@config_option
def seal(reports_dir: str, step: str, config_path: str | None) -> None:
    """Close the JSON reports of STEP in every matrix directory."""
    writer = _build_writer(reports_dir, config_path)
    sealed = writer.make_reports_ending(step)
    print_paths("Sealed", sealed)


@main.command()
@click.argument("reports_dir", type=click.Path(exists=True, file_okay=False))
@click.argument("matrix")
@click.argument("step")
@config_option
def reopen(reports_dir: str, matrix: str, step: str, config_path: str | None) -> None:
    """Strip the closing bracket of MATRIX's JSON report for STEP."""
    writer = _build_writer(reports_dir, config_path)
    if writer.prepare_reports_to_update(matrix, step):
        print_success(f"Reopened JSON report of step '{step}' in '{matrix}'")
    else:
        console.print("[dim]Nothing to reopen[/dim]")


@main.command()
@click.argument("report_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--strict",
    is_flag=True,
    help="Fail when async regions are still open",
)
def inspect(report_file: str, strict: bool) -> None:
    """Show the state of REPORT_FILE: open regions and JSON validity."""
    path = Path(report_file)
    fmt = ReportFormat.JSON if path.suffix == ".json" else ReportFormat.HTML
    text = path.read_text(encoding="utf-8")
    open_regions = MarkerProtocol().scan_open_regions(text.splitlines())

    elements = sealed = problem = None
    if fmt is ReportFormat.JSON:
        framer = JsonArrayFramer()
        last = next((line for line in reversed(text.splitlines()) if line.strip()), None)
        sealed = framer.is_sealed(last)
        try:
            elements = len(framer.load(text))
        except ValueError as e:
            problem = f"Not a valid JSON array: {e}"

    print_report_summary(path, fmt.value, open_regions, elements, sealed, problem)
    if problem or (strict and open_regions):
        sys.exit(1)


if __name__ == "__main__":
    main()
