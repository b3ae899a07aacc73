"""Compile a set of literal terms into a single case-insensitive matcher."""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache

from allergyscan.core.constants import CacheLimits

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TermMatcher:
    """Alternation matcher over literal terms, longest term first.

    ``terms`` holds the alternatives in the order the regex tries them, so the
    capturing group ``i + 1`` corresponds to ``terms[i]``.
    """

    terms: tuple[str, ...] = ()
    regex: re.Pattern[str] | None = None

    @property
    def is_empty(self) -> bool:
        """True for the matcher that matches nothing."""
        return self.regex is None

    def term_for_group(self, group_index: int) -> str:
        """Get the term behind a 1-based capturing group index."""
        return self.terms[group_index - 1]


NO_TERMS = TermMatcher()


def term_key(term: str) -> tuple[str, ...]:
    """Identity of a term under the matcher's case-insensitive comparison.

    ``re.IGNORECASE`` folds one character at a time, so ``"ß"`` and ``"ss"`` stay
    different terms here even though ``str.casefold`` maps both to ``"ss"``.
    """
    return tuple(char.lower() for char in term)


def normalize_terms(terms: Iterable[str]) -> list[str]:
    """Trim terms, drop blanks and collapse case-only duplicates.

    Returns:
        Terms in display order (case-insensitive lexicographic)
    """
    seen: set[tuple[str, ...]] = set()
    result = []
    for term in sorted_terms(t.strip() for t in terms if t and t.strip()):
        key = term_key(term)
        if key in seen:
            continue
        seen.add(key)
        result.append(term)
    return result


def sorted_terms(terms: Iterable[str]) -> list[str]:
    """Sort terms for display: case-insensitive, ties broken by the raw string."""
    return sorted(terms, key=lambda t: (t.casefold(), t))


def compile_terms(terms: Iterable[str]) -> TermMatcher:
    """Build a matcher for the given terms.

    Blank terms are dropped. An empty set yields ``NO_TERMS``. Alternatives are
    ordered by descending length so that at any start position the first
    alternative the regex engine accepts is the longest matching term.
    """
    return _compile_frozen(frozenset(t for t in terms if t))


@lru_cache(maxsize=CacheLimits.COMPILED_MATCHERS)
def _compile_frozen(terms: frozenset[str]) -> TermMatcher:
    candidates = normalize_terms(terms)
    if not candidates:
        logger.debug("No usable terms, returning empty matcher")
        return NO_TERMS

    # sort is stable, so equal lengths keep display order
    ordered = tuple(sorted(candidates, key=len, reverse=True))
    pattern = "|".join(f"({re.escape(term)})" for term in ordered)
    logger.debug(f"Compiled matcher for {len(ordered)} terms")
    return TermMatcher(terms=ordered, regex=re.compile(pattern, re.IGNORECASE))
