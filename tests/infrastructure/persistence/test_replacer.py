"""Tests for FileReplacer."""

from pathlib import Path

import pytest

from actionreports.infrastructure.persistence.replacer import FileReplacer


@pytest.fixture
def files(tmp_path) -> tuple[Path, Path]:
    original = tmp_path / "step_1"
    replacement = tmp_path / "step_1_abc.swp"
    original.write_text("old\n")
    replacement.write_text("new\n")
    return replacement, original


class TestAtomicReplace:
    """Tests for the default single-rename mode."""

    def test_replaces_original(self, files) -> None:
        replacement, original = files

        assert FileReplacer().replace(replacement, original) is True
        assert original.read_text() == "new\n"
        assert not replacement.exists()

    def test_missing_replacement_fails(self, files, caplog) -> None:
        replacement, original = files
        replacement.unlink()

        assert FileReplacer().replace(replacement, original) is False
        assert original.read_text() == "old\n"
        assert "Could not move updated report file" in caplog.text


class TestTwoStepReplace:
    """Tests for delete-then-rename mode."""

    def test_replaces_original(self, files) -> None:
        replacement, original = files

        assert FileReplacer(atomic=False).replace(replacement, original) is True
        assert original.read_text() == "new\n"
        assert not replacement.exists()

    def test_missing_original_is_created(self, files) -> None:
        replacement, original = files
        original.unlink()

        assert FileReplacer(atomic=False).replace(replacement, original) is True
        assert original.read_text() == "new\n"

    def test_delete_failure_keeps_both_files(self, files, monkeypatch, caplog) -> None:
        replacement, original = files

        def refuse(self, missing_ok=False):
            raise PermissionError("read-only")

        monkeypatch.setattr(Path, "unlink", refuse)

        assert FileReplacer(atomic=False).replace(replacement, original) is False
        assert original.read_text() == "old\n"
        assert replacement.read_text() == "new\n"
        assert "Could not delete original report file" in caplog.text
