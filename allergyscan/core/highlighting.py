"""Unified highlighting module for scanned documents."""

from collections.abc import Iterable

from rich.text import Text

from allergyscan.core.constants import HighlightStyles
from allergyscan.models.scan import MatchSpan, StyledRun


def render_line(line: str, matches: list[MatchSpan]) -> list[StyledRun]:
    """Split a line into plain and highlighted runs.

    Args:
        line: The line text, without its line break
        matches: Line-relative spans, sorted and non-overlapping

    Returns:
        Runs covering the whole line in order; empty for an empty line
    """
    if not line:
        return []

    runs: list[StyledRun] = []
    last = 0
    for match in matches:
        start = min(max(match.start, last), len(line))
        end = min(match.end, len(line))
        if end <= start:
            continue
        if start > last:
            runs.append(StyledRun(text=line[last:start], highlighted=False))
        runs.append(StyledRun(text=line[start:end], highlighted=True))
        last = end

    if last < len(line):
        runs.append(StyledRun(text=line[last:], highlighted=False))

    return runs


def runs_to_text(runs: Iterable[StyledRun], style: str = HighlightStyles.MATCH) -> Text:
    """Convert runs into a Rich Text object with highlighted runs styled."""
    rich_text = Text()
    for run in runs:
        rich_text.append(run.text, style=style if run.highlighted else None)
    return rich_text

