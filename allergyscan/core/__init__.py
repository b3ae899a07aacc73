"""Core functionality module."""

from allergyscan.core.analysis import ScanResult, analyze
from allergyscan.core.highlighting import render_line, runs_to_text
from allergyscan.core.lines import LineIndex, map_lines, match_line_indices, normalize_line_breaks, spans_on_line
from allergyscan.core.navigation import MatchNavigator
from allergyscan.core.patterns import NO_TERMS, TermMatcher, compile_terms, sorted_terms
from allergyscan.core.scanner import scan

__all__ = [
    "NO_TERMS",
    "LineIndex",
    "MatchNavigator",
    "ScanResult",
    "TermMatcher",
    "analyze",
    "compile_terms",
    "map_lines",
    "match_line_indices",
    "normalize_line_breaks",
    "render_line",
    "runs_to_text",
    "scan",
    "sorted_terms",
    "spans_on_line",
]
