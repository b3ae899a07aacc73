"""Scan session: ties the term set, the recognized document and navigation together."""

import logging
import time
from collections.abc import Callable, Iterable

from allergyscan.core.analysis import ScanResult, analyze
from allergyscan.core.lines import normalize_line_breaks
from allergyscan.core.navigation import MatchNavigator
from allergyscan.core.patterns import term_key
from allergyscan.exceptions import RecognitionError
from allergyscan.models.recognition import ImageHandle, RecognitionOutcome
from allergyscan.ocr.backends.base import RecognitionBackend
from allergyscan.store.terms import TermStore, clean_term

logger = logging.getLogger(__name__)


class ScanSession:
    """Holds the latest term set and document and the results derived from them.

    Any change to either input recomputes the result and replaces the navigator.
    Results are never patched in place; the newest input always wins.
    """

    def __init__(
        self,
        backend: RecognitionBackend | None = None,
        terms: Iterable[str] = (),
        store: TermStore | None = None,
    ) -> None:
        """Initialize scan session.

        Args:
            backend: OCR backend used by ``recognize``
            terms: Initial term set, ignored when a store is given
            store: Optional term store; the session follows its changes
        """
        self.backend = backend
        self.store = store
        self.terms: frozenset[str] = frozenset(terms)
        self.document: str | None = None
        self.result: ScanResult | None = None
        self.navigator: MatchNavigator = MatchNavigator([])
        self.last_error: str | None = None
        self._unsubscribe: Callable[[], None] | None = None

        if store is not None:
            self._unsubscribe = store.subscribe(self.set_terms)

    def close(self) -> None:
        """Stop following the term store."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def set_terms(self, terms: Iterable[str]) -> None:
        """Replace the term set and recompute."""
        self.terms = frozenset(terms)
        self._recompute()

    def add_term(self, term: str) -> None:
        """Add a term, recompute, then persist when a store is attached."""
        self.set_terms(self.terms | {clean_term(term)})
        if self.store is not None:
            self.store.save(self.terms)

    def remove_term(self, term: str) -> None:
        """Remove a term (case-insensitive), recompute, then persist."""
        key = term_key(clean_term(term))
        self.set_terms(t for t in self.terms if term_key(t) != key)
        if self.store is not None:
            self.store.save(self.terms)

    def load_document(self, text: str) -> ScanResult:
        """Replace the document with ``text`` and recompute."""
        self.document = normalize_line_breaks(text)
        self.last_error = None
        self.result = analyze(self.document, self.terms)
        self.navigator = self.result.navigator()
        return self.result

    def recognize(self, image: ImageHandle) -> RecognitionOutcome:
        """Recognize an image and scan the resulting document.

        On failure the previous document and result are kept and the reason is
        stored in ``last_error``.
        """
        if self.backend is None:
            raise RecognitionError("none", "No recognition backend configured")

        started = time.perf_counter()
        try:
            text = self.backend.recognize(image)
        except RecognitionError as e:
            self.last_error = str(e)
            logger.warning(f"Recognition failed for {image.name}: {e}")
            return RecognitionOutcome(
                image=image,
                backend=self.backend.name,
                error=str(e),
                elapsed_seconds=time.perf_counter() - started,
            )

        elapsed = time.perf_counter() - started
        logger.debug(f"Recognized {len(text)} characters from {image.name} in {elapsed:.2f}s")
        self.load_document(text)
        return RecognitionOutcome(image=image, backend=self.backend.name, text=self.document, elapsed_seconds=elapsed)

    def first(self) -> int | None:
        return self.navigator.first()

    def next(self) -> int | None:
        return self.navigator.next()

    def previous(self) -> int | None:
        return self.navigator.previous()

    def _recompute(self) -> None:
        if self.document is None:
            self.result = None
            self.navigator = MatchNavigator([])
            return
        self.result = analyze(self.document, self.terms)
        self.navigator = self.result.navigator()
