"""Tests for line mapping and span re-basing."""

import pytest

from allergyscan.core.lines import (
    group_spans_by_line,
    map_lines,
    match_line_indices,
    normalize_line_breaks,
    spans_on_line,
)
from allergyscan.core.patterns import compile_terms
from allergyscan.core.scanner import scan
from allergyscan.exceptions import OffsetOutOfRangeError


class TestMapLines:
    """Tests for map_lines and LineIndex."""

    def test_empty_document_has_one_empty_line(self):
        index = map_lines("")

        assert index.lines == ("",)
        assert index.starts == (0,)
        assert index.line_of(0) == 0

    def test_no_line_breaks(self):
        index = map_lines("wheat flour")

        assert index.lines == ("wheat flour",)
        assert index.line_of(11) == 0

    def test_trailing_break_adds_empty_line(self):
        index = map_lines("Line1: malt\nLine2: barley malt\n")

        assert index.lines == ("Line1: malt", "Line2: barley malt", "")
        assert index.starts == (0, 12, 31)

    @pytest.mark.parametrize(
        "text",
        ["", "\n", "a", "a\nb", "a\n\nb\n", "\n\n\n", "malt\r\nbeer"],
    )
    def test_join_reconstructs_document(self, text):
        index = map_lines(text)

        assert "\n".join(index.lines) == text
        assert index.length == len(text)

    def test_offset_on_break_belongs_to_terminated_line(self):
        index = map_lines("ab\ncd\n")

        assert [index.line_of(offset) for offset in range(7)] == [0, 0, 0, 1, 1, 1, 2]

    def test_offsets_outside_document_raise(self):
        index = map_lines("ab\ncd")

        with pytest.raises(OffsetOutOfRangeError):
            index.line_of(-1)
        with pytest.raises(OffsetOutOfRangeError):
            index.line_of(6)

    def test_line_bounds_exclude_break(self):
        index = map_lines("ab\ncde")

        assert index.line_bounds(0) == (0, 2)
        assert index.line_bounds(1) == (3, 6)


class TestNormalizeLineBreaks:
    """Tests for normalize_line_breaks."""

    def test_converts_crlf_and_cr(self):
        assert normalize_line_breaks("a\r\nb\rc\nd") == "a\nb\nc\nd"

    def test_offsets_after_normalizing(self):
        text = normalize_line_breaks("malt\r\nbeer")
        spans = scan(compile_terms({"beer"}), text)

        assert match_line_indices(spans, map_lines(text)) == [1]
        assert spans[0].start == 5


class TestMatchLines:
    """Tests for mapping spans onto lines."""

    def test_match_line_indices(self):
        text = "Line1: malt\nLine2: barley malt\n"
        spans = scan(compile_terms({"barley", "malt"}), text)

        assert match_line_indices(spans, map_lines(text)) == [0, 1, 1]

    def test_indices_are_non_decreasing(self):
        text = "malt\n\nbeer malt\nnothing\nbeer"
        spans = scan(compile_terms({"beer", "malt"}), text)
        lines = match_line_indices(spans, map_lines(text))

        assert len(lines) == len(spans)
        assert lines == sorted(lines)

    def test_spans_on_line_are_rebased(self):
        text = "Line1: malt\nLine2: barley malt\n"
        index = map_lines(text)
        spans = scan(compile_terms({"barley", "malt"}), text)

        on_line = spans_on_line(spans, index, 1)

        assert [(s.start, s.end, s.term) for s in on_line] == [(7, 13, "barley"), (14, 18, "malt")]
        assert spans_on_line(spans, index, 2) == []

    def test_span_across_break_is_clipped(self):
        text = "malted barley\nflour here"
        index = map_lines(text)
        spans = scan(compile_terms({"barley\nflour"}), text)

        first = spans_on_line(spans, index, 0)
        second = spans_on_line(spans, index, 1)

        assert [(s.start, s.end) for s in first] == [(7, 13)]
        assert [(s.start, s.end) for s in second] == [(0, 5)]

    def test_group_spans_by_line(self):
        text = "rye and barley\nflour here\nmalt"
        index = map_lines(text)
        spans = scan(compile_terms({"barley\nflour", "malt"}), text)

        grouped = group_spans_by_line(spans, index)

        assert sorted(grouped) == [0, 1, 2]
        assert [(s.start, s.end) for s in grouped[0]] == [(8, 14)]
        assert [(s.start, s.end) for s in grouped[1]] == [(0, 5)]
        assert [(s.start, s.end, s.term) for s in grouped[2]] == [(0, 4, "malt")]
