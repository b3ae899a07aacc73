"""Cyclic cursor over the matches of a scan."""

import logging

logger = logging.getLogger(__name__)


class MatchNavigator:
    """Moves between matches and reports the line to scroll to.

    A navigator belongs to one (document, term set) pair. Build a new one when
    either changes; ``reset`` only rewinds the cursor over the same matches.
    """

    def __init__(self, match_lines: list[int]) -> None:
        """Initialize navigator.

        Args:
            match_lines: Line index of each match, in match order
        """
        self.match_lines = tuple(match_lines)
        self.cursor: int | None = None
        self.reset()

    @property
    def match_count(self) -> int:
        return len(self.match_lines)

    @property
    def enabled(self) -> bool:
        """Whether navigation does anything."""
        return self.match_count > 0

    @property
    def current_line(self) -> int | None:
        """Line of the match under the cursor."""
        if self.cursor is None:
            return None
        return self.match_lines[self.cursor]

    @property
    def position_label(self) -> str:
        """Human readable cursor position, e.g. ``"2/5"``."""
        if self.cursor is None:
            return "0/0"
        return f"{self.cursor + 1}/{self.match_count}"

    def reset(self) -> None:
        """Put the cursor on the first match, or clear it when there are none."""
        self.cursor = 0 if self.match_count else None

    def first(self) -> int | None:
        """Jump to the first match.

        Returns:
            Line index to scroll to, or None when there are no matches
        """
        if not self.enabled:
            return None
        return self._move_to(0)

    def next(self) -> int | None:
        """Advance to the next match, wrapping to the first."""
        if not self.enabled:
            return None
        return self._move_to(((self.cursor or 0) + 1) % self.match_count)

    def previous(self) -> int | None:
        """Step back to the previous match, wrapping to the last."""
        if not self.enabled:
            return None
        return self._move_to(((self.cursor or 0) - 1 + self.match_count) % self.match_count)

    def _move_to(self, cursor: int) -> int:
        self.cursor = cursor
        logger.debug(f"Match cursor at {self.position_label}, line {self.match_lines[cursor]}")
        return self.match_lines[cursor]
