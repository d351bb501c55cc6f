"""
Filesystem implementation of the report store.

Directory structure:
{base_dir}/
    {matrix_short_name}/
        {step_safe_name}          # complete HTML report
        {step_safe_name}_failed   # failed-only HTML report
        {step_safe_name}.json     # complete JSON report
        {step_safe_name}_*.swp    # replacement being written by a patch pass
"""

import os
import shutil
import tempfile
import threading
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Any, TextIO

from actionreports.domain.exceptions import ReportReplaceError
from actionreports.domain.interfaces import ReportStoreInterface
from actionreports.domain.models import ReportFormat, ReportKey, ReportVariant
from actionreports.infrastructure.persistence.replacer import FileReplacer

FAILED_SUFFIX = "_failed"
JSON_SUFFIX = ".json"
SWAP_SUFFIX = ".swp"

_TAIL_BLOCK = 1024


def report_file_name(key: ReportKey) -> str:
    """File name of a report inside its matrix directory."""
    if key.format is ReportFormat.JSON:
        return key.step_name + JSON_SUFFIX
    if key.variant is ReportVariant.FAILED_ONLY:
        return key.step_name + FAILED_SUFFIX
    return key.step_name


class FilesystemReportStore(ReportStoreInterface):
    """
    Append-only report files with temp-file replacement for patch passes.

    Holds one re-entrant lock per report path; all writers of the same
    directory tree must share one store instance.
    """

    def __init__(
        self,
        base_dir: str | Path,
        replacer: FileReplacer | None = None,
        encoding: str = "utf-8",
    ):
        self._base_dir = Path(base_dir)
        self._replacer = replacer or FileReplacer()
        self._encoding = encoding
        self._locks: dict[Path, AbstractContextManager[Any]] = {}
        self._locks_guard = threading.Lock()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _path(self, key: ReportKey) -> Path:
        return self._base_dir / key.matrix_dir / report_file_name(key)

    def report_dir(self, matrix_dir: str) -> Path:
        path = self._base_dir / matrix_dir
        path.mkdir(parents=True, exist_ok=True)
        return path

    def report_path(self, key: ReportKey) -> Path:
        return self._path(key)

    def matrix_dirs(self) -> list[str]:
        if not self._base_dir.is_dir():
            return []
        return sorted(p.name for p in self._base_dir.iterdir() if p.is_dir())

    def exists(self, key: ReportKey) -> bool:
        return self._path(key).is_file()

    def is_empty(self, key: ReportKey) -> bool:
        path = self._path(key)
        return not path.is_file() or path.stat().st_size == 0

    def last_line(self, key: ReportKey) -> str | None:
        """Read the last non-blank line from the end of the file."""
        path = self._path(key)
        if not path.is_file():
            return None

        with open(path, "rb") as f:
            pos = f.seek(0, os.SEEK_END)
            chunk = b""
            while pos > 0:
                size = min(_TAIL_BLOCK, pos)
                pos -= size
                f.seek(pos)
                chunk = f.read(size) + chunk
                stripped = chunk.rstrip()
                if stripped and b"\n" in stripped:
                    break

        stripped = chunk.rstrip()
        if not stripped:
            return None
        return stripped.rsplit(b"\n", 1)[-1].decode(self._encoding).rstrip("\r")

    def append(self, key: ReportKey, lines: Sequence[str]) -> None:
        """Append all lines in one write; nothing is written if encoding fails."""
        payload = "".join(line + "\n" for line in lines).encode(self._encoding)
        self.report_dir(key.matrix_dir)
        with open(self._path(key), "ab") as f:
            f.write(payload)
            f.flush()

    def rewrite(
        self, key: ReportKey, transform: Callable[[TextIO, TextIO], bool]
    ) -> bool:
        """
        Stream the report through transform into a swap file, then replace.

        A missing report reads as empty and is only created when the transform
        produced content. The swap file lives next to the report so the final
        move never crosses filesystems.
        """
        path = self._path(key)
        existed = path.is_file()
        self.report_dir(key.matrix_dir)
        fd, temp_name = tempfile.mkstemp(
            prefix=f"{path.name}_", suffix=SWAP_SUFFIX, dir=path.parent
        )
        temp_path = Path(temp_name)
        try:
            with open(fd, "w", encoding=self._encoding) as target:
                if existed:
                    with open(path, encoding=self._encoding) as source:
                        accepted = transform(source, target)
                    shutil.copymode(path, temp_path)
                else:
                    with open(os.devnull, encoding=self._encoding) as source:
                        accepted = transform(source, target)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

        if not accepted or (not existed and temp_path.stat().st_size == 0):
            temp_path.unlink(missing_ok=True)
            return False

        if not self._replacer.replace(temp_path, path):
            raise ReportReplaceError(
                f"Could not replace report file '{path}' with '{temp_path}'",
                original=path,
                replacement=temp_path,
            )
        return True

    def lock(self, key: ReportKey) -> AbstractContextManager[Any]:
        path = self._path(key).absolute()
        with self._locks_guard:
            lock = self._locks.get(path)
            if lock is None:
                lock = threading.RLock()
                self._locks[path] = lock
            return lock
