"""Tests for JSON open-array framing."""

import io

import pytest

from actionreports.domain.json_framing import CLOSE, OPEN, SEPARATOR, JsonArrayFramer


@pytest.fixture
def framer() -> JsonArrayFramer:
    return JsonArrayFramer()


def _strip(framer: JsonArrayFramer, text: str) -> tuple[bool, str]:
    target = io.StringIO()
    removed = framer.strip_seal(io.StringIO(text), target)
    return removed, target.getvalue()


class TestElementPrefix:
    """Tests for element separators."""

    def test_first_element_opens_array(self, framer):
        assert framer.element_prefix(is_empty=True) == OPEN

    def test_later_elements_are_separated(self, framer):
        assert framer.element_prefix(is_empty=False) == SEPARATOR


class TestIsSealed:
    """Tests for is_sealed()."""

    def test_close_line_seals(self, framer):
        assert framer.is_sealed(CLOSE)
        assert framer.is_sealed(" ] ")

    def test_other_lines_do_not_seal(self, framer):
        assert not framer.is_sealed(None)
        assert not framer.is_sealed('{"actionId": "1"}')
        assert not framer.is_sealed("/* ASYNC action 1 end */")


class TestStripSeal:
    """Tests for strip_seal()."""

    def test_removes_trailing_bracket(self, framer):
        removed, text = _strip(framer, '[\n{"a": 1}\n]\n')

        assert removed is True
        assert text == '[\n{"a": 1}\n'

    def test_removes_blank_lines_after_bracket(self, framer):
        removed, text = _strip(framer, '[\n{"a": 1}\n]\n\n\n')

        assert removed is True
        assert text == '[\n{"a": 1}\n'

    def test_open_report_is_copied_unchanged(self, framer):
        removed, text = _strip(framer, '[\n{"a": 1}\n,\n{"b": 2}\n')

        assert removed is False
        assert text == '[\n{"a": 1}\n,\n{"b": 2}\n'

    def test_bracket_followed_by_content_is_kept(self, framer):
        removed, text = _strip(framer, '[\n{"a": 1}\n]\n,\n{"b": 2}\n')

        assert removed is False
        assert text == '[\n{"a": 1}\n]\n,\n{"b": 2}\n'


class TestLoad:
    """Tests for load()."""

    def test_sealed_report(self, framer):
        assert framer.load('[\n{"a": 1}\n,\n{"b": 2}\n]\n') == [{"a": 1}, {"b": 2}]

    def test_open_report_reads_as_sealed(self, framer):
        assert framer.load('[\n{"a": 1}\n') == [{"a": 1}]

    def test_marker_lines_are_ignored(self, framer):
        text = (
            '[\n{"a": 1}\n,\n'
            "/* ASYNC action 2 start */\n"
            '{"b": 2}\n'
            "/* ASYNC action 2 end */\n"
        )
        assert framer.load(text) == [{"a": 1}, {"b": 2}]

    def test_empty_report(self, framer):
        assert framer.load("") == []
        assert framer.load("\n\n") == []

    def test_not_an_array_raises(self, framer):
        with pytest.raises(ValueError):
            framer.load('{"a": 1}')
