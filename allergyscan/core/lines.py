"""Split documents into lines and map character offsets to line numbers.

Offsets assume single-character line breaks. Text coming from OCR backends or
files is passed through ``normalize_line_breaks`` before it reaches the
scanner, so ``"\\r\\n"`` never shifts an offset.
"""

import bisect

from pydantic import BaseModel, ConfigDict, Field

from allergyscan.core.constants import LINE_BREAK
from allergyscan.exceptions import OffsetOutOfRangeError
from allergyscan.models.scan import MatchSpan


class LineIndex(BaseModel):
    """Lines of a document together with the offset each line starts at."""

    model_config = ConfigDict(frozen=True)

    lines: tuple[str, ...] = Field(description="Document lines without their line breaks")
    starts: tuple[int, ...] = Field(description="Absolute offset of the first character of each line")

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def length(self) -> int:
        """Length of the document this index was built from."""
        return self.starts[-1] + len(self.lines[-1])

    def line_of(self, offset: int) -> int:
        """Get the index of the line containing ``offset``.

        An offset that sits on a line break belongs to the line the break
        terminates. ``length`` itself maps to the last line.

        Raises:
            OffsetOutOfRangeError: If offset is outside ``[0, length]``
        """
        if offset < 0 or offset > self.length:
            raise OffsetOutOfRangeError(offset, self.length)
        return bisect.bisect_right(self.starts, offset) - 1

    def line_bounds(self, line_no: int) -> tuple[int, int]:
        """Get the ``[start, end)`` offsets of a line, excluding its break."""
        start = self.starts[line_no]
        return start, start + len(self.lines[line_no])


def normalize_line_breaks(text: str) -> str:
    """Convert Windows and old Mac line breaks to ``"\\n"``."""
    return text.replace("\r\n", LINE_BREAK).replace("\r", LINE_BREAK)


def map_lines(text: str) -> LineIndex:
    """Build the line index of a document.

    Splits strictly on ``"\\n"``. An empty document has one empty line and a
    trailing break produces a trailing empty line.
    """
    lines = text.split(LINE_BREAK)
    starts = []
    offset = 0
    for line in lines:
        starts.append(offset)
        offset += len(line) + len(LINE_BREAK)
    return LineIndex(lines=tuple(lines), starts=tuple(starts))


def match_line_indices(spans: list[MatchSpan], index: LineIndex) -> list[int]:
    """Get the line holding the start of each span."""
    return [index.line_of(span.start) for span in spans]


def spans_on_line(spans: list[MatchSpan], index: LineIndex, line_no: int) -> list[MatchSpan]:
    """Get the spans intersecting a line, in line-relative coordinates.

    A span that crosses a line break (a term containing a newline) is clipped
    to the part inside this line. This loses precision for such terms and is
    accepted as a known simplification.
    """
    line_start, line_end = index.line_bounds(line_no)
    result = []
    for span in spans:
        if span.end <= line_start:
            continue
        if span.start > line_end:
            # spans are sorted, nothing further can touch this line
            break
        rebased = span.rebased(line_start, line_end - line_start)
        if rebased.length:
            result.append(rebased)
    return result


def group_spans_by_line(spans: list[MatchSpan], index: LineIndex) -> dict[int, list[MatchSpan]]:
    """Get line-relative spans for every line that has at least one match."""
    grouped: dict[int, list[MatchSpan]] = {}
    for span in spans:
        first = index.line_of(span.start)
        last = index.line_of(max(span.end - 1, span.start))
        for line_no in range(first, last + 1):
            line_start, line_end = index.line_bounds(line_no)
            rebased = span.rebased(line_start, line_end - line_start)
            if rebased.length:
                grouped.setdefault(line_no, []).append(rebased)
    return grouped
