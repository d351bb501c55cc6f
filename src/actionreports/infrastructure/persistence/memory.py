"""
In-memory implementation of the report store.

Useful for testing and dry runs.
"""

import io
import threading
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Any, TextIO

from actionreports.domain.interfaces import ReportStoreInterface
from actionreports.domain.models import ReportKey
from actionreports.infrastructure.persistence.filesystem import report_file_name


class InMemoryReportStore(ReportStoreInterface):
    """Simple in-memory report store for testing."""

    def __init__(self, base_dir: str | Path = "reports") -> None:
        self._base_dir = Path(base_dir)
        self._files: dict[Path, str] = {}
        self._dirs: set[str] = set()
        self._lock = threading.RLock()

    def report_dir(self, matrix_dir: str) -> Path:
        self._dirs.add(matrix_dir)
        return self._base_dir / matrix_dir

    def report_path(self, key: ReportKey) -> Path:
        return self._base_dir / key.matrix_dir / report_file_name(key)

    def matrix_dirs(self) -> list[str]:
        return sorted(self._dirs)

    def exists(self, key: ReportKey) -> bool:
        return self.report_path(key) in self._files

    def is_empty(self, key: ReportKey) -> bool:
        return not self._files.get(self.report_path(key))

    def last_line(self, key: ReportKey) -> str | None:
        lines = [line for line in self.read(key).splitlines() if line.strip()]
        return lines[-1] if lines else None

    def read(self, key: ReportKey) -> str:
        """Current content of a report ("" if it was never written)."""
        return self._files.get(self.report_path(key), "")

    def append(self, key: ReportKey, lines: Sequence[str]) -> None:
        self.report_dir(key.matrix_dir)
        path = self.report_path(key)
        self._files[path] = self._files.get(path, "") + "".join(
            line + "\n" for line in lines
        )

    def rewrite(
        self, key: ReportKey, transform: Callable[[TextIO, TextIO], bool]
    ) -> bool:
        source = io.StringIO(self.read(key))
        target = io.StringIO()
        if not transform(source, target):
            return False
        if not self.exists(key) and not target.getvalue():
            return False
        self.report_dir(key.matrix_dir)
        self._files[self.report_path(key)] = target.getvalue()
        return True

    def lock(self, key: ReportKey) -> AbstractContextManager[Any]:
        return self._lock
