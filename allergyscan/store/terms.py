"""Persistent allergen term set using DiskCache."""

import logging
import time
from collections.abc import Callable, Iterable
from pathlib import Path

from allergyscan.core.constants import DEFAULT_TERMS, StoreKeys
from allergyscan.core.patterns import sorted_terms, term_key
from allergyscan.exceptions import InvalidTermError, TermStoreError
from allergyscan.models.terms import TermSnapshot
from allergyscan.store.base import BaseStore

logger = logging.getLogger(__name__)

TermListener = Callable[[frozenset[str]], None]


def clean_term(term: str) -> str:
    """Trim a user supplied term.

    Raises:
        InvalidTermError: If the term is blank
    """
    cleaned = term.strip()
    if not cleaned:
        raise InvalidTermError(term)
    return cleaned


class TermStore(BaseStore[frozenset[str]]):
    """Stores the user's term set and notifies subscribers on change.

    Writes are not buffered or merged: the last ``save`` wins.
    """

    def __init__(self, data_dir: Path) -> None:
        super().__init__(data_dir, "terms")
        self._listeners: list[TermListener] = []

    def load(self) -> frozenset[str]:
        """Load the current term set, falling back to the default terms."""
        try:
            snapshot_data = self.cache.get(StoreKeys.SNAPSHOT.value)
        except Exception as e:
            raise TermStoreError(f"Could not read terms: {e}") from e

        if snapshot_data is None:
            return DEFAULT_TERMS
        return frozenset(TermSnapshot.model_validate(snapshot_data).terms)

    def save(self, data: Iterable[str]) -> None:
        """Replace the stored term set and notify subscribers."""
        terms = frozenset(t.strip() for t in data if t and t.strip())
        snapshot = TermSnapshot(terms=sorted_terms(terms), saved_at=time.time())
        try:
            self.cache.set(StoreKeys.SNAPSHOT.value, snapshot.model_dump())
        except Exception as e:
            raise TermStoreError(f"Could not save terms: {e}") from e
        logger.debug(f"Saved {len(terms)} terms")
        self._notify(terms)

    def add(self, term: str) -> frozenset[str]:
        """Add a term and return the updated set."""
        updated = self.load() | {clean_term(term)}
        self.save(updated)
        return updated

    def remove(self, term: str) -> frozenset[str]:
        """Remove a term (case-insensitive) and return the updated set."""
        key = term_key(clean_term(term))
        updated = frozenset(t for t in self.load() if term_key(t) != key)
        self.save(updated)
        return updated

    def reset(self) -> frozenset[str]:
        """Restore the default term set."""
        try:
            self.cache.delete(StoreKeys.SNAPSHOT.value)
        except Exception as e:
            raise TermStoreError(f"Could not reset terms: {e}") from e
        self._notify(DEFAULT_TERMS)
        return DEFAULT_TERMS

    def subscribe(self, listener: TermListener) -> Callable[[], None]:
        """Call ``listener`` now with the current set and after every change.

        Returns:
            Function that removes the subscription
        """
        self._listeners.append(listener)
        listener(self.load())

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, terms: frozenset[str]) -> None:
        for listener in list(self._listeners):
            listener(terms)
