"""Shared pytest fixtures for actionreports tests."""

from collections.abc import Callable
from typing import Any

import pytest

from actionreports.application.report_writer import ActionReportWriter
from actionreports.domain.models import (
    Action,
    ActionResult,
    Matrix,
    ReportsConfig,
    Step,
)
from actionreports.infrastructure.persistence.filesystem import FilesystemReportStore
from actionreports.infrastructure.persistence.memory import InMemoryReportStore
from actionreports.infrastructure.registry import RendererRegistry


@pytest.fixture
def matrix() -> Matrix:
    """Create a sample Matrix for testing."""
    return Matrix(name="Login checks", short_file_name="login_checks")


@pytest.fixture
def step() -> Step:
    """Create a sample Step for testing."""
    return Step(name="Main step", safe_name="main_step")


@pytest.fixture
def make_action(matrix: Matrix, step: Step) -> Callable[..., Action]:
    """Factory for actions of the sample matrix and step."""

    def _make(action_id: str, **kwargs: Any) -> Action:
        kwargs.setdefault("name", f"Check {action_id}")
        kwargs.setdefault("matrix", matrix)
        kwargs.setdefault("step", step)
        return Action(id_in_matrix=action_id, **kwargs)

    return _make


@pytest.fixture
def sample_result() -> ActionResult:
    """Create a sample ActionResult with details."""
    return ActionResult(
        success=True,
        message="Response matched",
        details=(("status", "200"), ("elapsed", "12 ms")),
    )


@pytest.fixture
def memory_store() -> InMemoryReportStore:
    """Create an in-memory report store."""
    return InMemoryReportStore()


@pytest.fixture
def fs_store(tmp_path) -> FilesystemReportStore:
    """Create a filesystem report store under a temporary directory."""
    return FilesystemReportStore(tmp_path / "reports")


@pytest.fixture
def renderers() -> RendererRegistry:
    """Create a registry holding the built-in renderers."""
    return RendererRegistry.with_defaults()


@pytest.fixture
def writer(
    memory_store: InMemoryReportStore, renderers: RendererRegistry
) -> ActionReportWriter:
    """Create a report writer over the in-memory store with all reports enabled."""
    return ActionReportWriter(ReportsConfig(), memory_store, renderers)


@pytest.fixture
def fs_writer(
    fs_store: FilesystemReportStore, renderers: RendererRegistry
) -> ActionReportWriter:
    """Create a report writer over the filesystem store."""
    return ActionReportWriter(ReportsConfig(), fs_store, renderers)
