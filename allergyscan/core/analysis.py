"""Run the full match pipeline over one document and one term set."""

import logging
from collections.abc import Iterable
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

from allergyscan.core.constants import CacheLimits
from allergyscan.core.highlighting import render_line
from allergyscan.core.lines import LineIndex, group_spans_by_line, map_lines, match_line_indices
from allergyscan.core.navigation import MatchNavigator
from allergyscan.core.patterns import compile_terms, normalize_terms
from allergyscan.core.scanner import count_by_term, scan
from allergyscan.models.scan import MatchSpan, StyledRun

logger = logging.getLogger(__name__)


class ScanResult(BaseModel):
    """Derived view of a document for a given term set."""

    model_config = ConfigDict(frozen=True)

    document: str
    terms: tuple[str, ...] = Field(description="Normalized terms in display order")
    spans: tuple[MatchSpan, ...] = Field(default=())
    line_index: LineIndex
    match_lines: tuple[int, ...] = Field(default=(), description="Line of each span's start")

    @property
    def match_count(self) -> int:
        return len(self.spans)

    @property
    def has_matches(self) -> bool:
        return bool(self.spans)

    @property
    def matched_terms(self) -> dict[str, int]:
        """Number of matches per term, for terms found at least once."""
        return count_by_term(list(self.spans))

    @property
    def missing_terms(self) -> list[str]:
        """Terms with no match in the document."""
        found = self.matched_terms
        return [term for term in self.terms if term not in found]

    def render(self) -> list[list[StyledRun]]:
        """Render every line of the document as styled runs."""
        by_line = group_spans_by_line(list(self.spans), self.line_index)
        return [render_line(line, by_line.get(line_no, [])) for line_no, line in enumerate(self.line_index.lines)]

    def navigator(self) -> MatchNavigator:
        """Create a fresh navigator over this result's matches."""
        return MatchNavigator(list(self.match_lines))


def analyze(text: str, terms: Iterable[str]) -> ScanResult:
    """Compile, scan and line-map ``text`` for ``terms``.

    Results are memoized on the (term set, document) pair; callers get the same
    immutable object back for repeated inputs.
    """
    return _analyze_frozen(text, frozenset(terms))


@lru_cache(maxsize=CacheLimits.ANALYSES)
def _analyze_frozen(text: str, terms: frozenset[str]) -> ScanResult:
    matcher = compile_terms(terms)
    spans = scan(matcher, text)
    line_index = map_lines(text)
    logger.debug(f"Found {len(spans)} matches across {line_index.line_count} lines")
    return ScanResult(
        document=text,
        terms=tuple(normalize_terms(terms)),
        spans=tuple(spans),
        line_index=line_index,
        match_lines=tuple(match_line_indices(spans, line_index)),
    )
