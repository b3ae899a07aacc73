"""Tests for the full match pipeline."""

from allergyscan.core.analysis import analyze
from allergyscan.models.scan import StyledRun


class TestAnalyze:
    """Tests for analyze and ScanResult."""

    def test_two_line_scenario(self):
        result = analyze("Line1: malt\nLine2: barley malt\n", {"barley", "malt"})

        assert result.line_index.line_count == 3
        assert [s.term for s in result.spans] == ["malt", "barley", "malt"]
        assert result.match_lines == (0, 1, 1)

        nav = result.navigator()
        assert nav.cursor == 0
        assert nav.next() == 1
        assert nav.cursor == 1
        assert nav.next() == 1
        assert nav.cursor == 2
        assert nav.next() == 0

    def test_render_covers_all_lines(self):
        result = analyze("Line1: malt\nLine2: barley malt\n", {"barley", "malt"})

        rendered = result.render()

        assert len(rendered) == 3
        assert rendered[0] == [StyledRun(text="Line1: "), StyledRun(text="malt", highlighted=True)]
        assert rendered[2] == []

    def test_term_summary(self):
        result = analyze("Beer, barley, BEER", {"beer", "Barley", "soy"})

        assert result.match_count == 3
        assert result.matched_terms == {"beer": 2, "Barley": 1}
        assert result.missing_terms == ["soy"]
        assert result.terms == ("Barley", "beer", "soy")

    def test_empty_inputs(self):
        result = analyze("", set())

        assert result.line_index.lines == ("",)
        assert result.spans == ()
        assert not result.has_matches
        assert result.navigator().cursor is None

    def test_memoized(self):
        assert analyze("malt", ["malt"]) is analyze("malt", {"malt"})

    def test_fresh_navigator_per_call(self):
        result = analyze("malt malt", {"malt"})
        nav = result.navigator()
        nav.next()

        assert result.navigator().cursor == 0
