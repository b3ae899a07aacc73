"""Locate term occurrences in a document."""

from allergyscan.core.patterns import TermMatcher
from allergyscan.models.scan import MatchSpan


def scan(matcher: TermMatcher, text: str) -> list[MatchSpan]:
    """Scan ``text`` left to right and return every match.

    At each position the longest matching term wins and scanning resumes at the
    end of the match, so the returned spans are sorted by start and never
    overlap. Positions where nothing matches are skipped one character at a
    time by the regex engine.

    Args:
        matcher: Matcher from ``compile_terms``
        text: The document to scan

    Returns:
        Ordered, non-overlapping spans
    """
    if matcher.regex is None or not text:
        return []

    spans = []
    for match in matcher.regex.finditer(text):
        start, end = match.span()
        # terms are never empty, but an empty match would stall the cursor
        if start == end:
            continue
        spans.append(
            MatchSpan(
                start=start,
                end=end,
                term=matcher.term_for_group(match.lastindex or 1),
                text=match.group(0),
            )
        )
    return spans


def count_by_term(spans: list[MatchSpan]) -> dict[str, int]:
    """Count matches per term, in first-seen order."""
    counts: dict[str, int] = {}
    for span in spans:
        counts[span.term] = counts.get(span.term, 0) + 1
    return counts
