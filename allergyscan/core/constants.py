"""
Constants and configuration values for allergyscan.
"""

from enum import IntEnum, StrEnum

# Terms seeded into an empty store
DEFAULT_TERMS = frozenset({"barley", "barley flour", "malted barley", "beer"})

LINE_BREAK = "\n"


class HighlightStyles(StrEnum):
    """Rich styles used when rendering documents."""

    MATCH = "bold black on yellow"
    CURRENT_MATCH = "bold black on dark_orange"
    LINE_NUMBER = "dim"


class StoreKeys(StrEnum):
    """Keys used inside the term store cache."""

    SNAPSHOT = "snapshot"


class OCRBackendNames(StrEnum):
    """Names accepted by the OCR backend factory."""

    GOOGLE_VISION = "google_vision"
    PADDLE = "paddle"


class FormattingConstants(IntEnum):
    """Formatting constants."""

    JSON_INDENT = 2
    LINE_NUMBER_WIDTH = 4


class OCRConstants(IntEnum):
    """OCR backend limits."""

    GOOGLE_MAX_FILE_SIZE_BYTES = 20 * 1024 * 1024
    PADDLE_MIN_CONFIDENCE_PERCENT = 50


class CacheLimits(IntEnum):
    """In-memory memoization limits."""

    COMPILED_MATCHERS = 32
    ANALYSES = 16
