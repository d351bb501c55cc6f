"""Shared fixtures for architecture tests."""

import os

import pytest
from pytestarch import (
    EvaluableArchitecture,
    LayeredArchitecture,
    get_evaluable_architecture,
)


@pytest.fixture(scope="session")
def evaluable() -> EvaluableArchitecture:
    """Build evaluable architecture from src/actionreports."""
    src_dir = os.path.abspath(
        os.path.join(os.path.dirname(__file__), "..", "..", "src")
    )
    project_path = os.path.join(src_dir, "actionreports")
    return get_evaluable_architecture(src_dir, project_path)


@pytest.fixture(scope="session")
def layers() -> LayeredArchitecture:
    """Define the three hexagonal layers plus the command line entry points.

    PyTestArch resolves module names relative to the source root,
    so modules appear as 'src.actionreports.domain', etc.
    """
    return (
        LayeredArchitecture()
        .layer("domain")
        .containing_modules(["src.actionreports.domain"])
        .layer("application")
        .containing_modules(["src.actionreports.application"])
        .layer("infrastructure")
        .containing_modules(["src.actionreports.infrastructure"])
        .layer("entrypoints")
        .containing_modules(
            [
                "src.actionreports.cli",
                "src.actionreports.console",
                "src.actionreports.logging_setup",
            ]
        )
    )
