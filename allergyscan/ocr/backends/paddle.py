"""
PaddleOCR backend.

Reads every text line PaddleOCR detects in the image and joins them with
line breaks, top to bottom as PaddleOCR reports them.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np
from paddleocr import PaddleOCR

from allergyscan.core.constants import OCRBackendNames, OCRConstants
from allergyscan.exceptions import RecognitionError
from allergyscan.models.recognition import ImageHandle
from allergyscan.ocr.backends.base import RecognitionBackend

logger = logging.getLogger(__name__)


class PaddleBackend(RecognitionBackend):
    name = OCRBackendNames.PADDLE

    def __init__(self, language: str = "en"):
        # textline orientation helps with rotated labels
        self._ocr = PaddleOCR(use_textline_orientation=True, lang=language)
        self.min_confidence = OCRConstants.PADDLE_MIN_CONFIDENCE_PERCENT / 100

    def recognize(self, image: ImageHandle) -> str:
        frame = np.array(image.open())
        try:
            results = self._ocr.predict(frame)
        except Exception as e:
            raise RecognitionError(self.name, f"PaddleOCR failed on {image.name}: {e}") from e
        return "\n".join(self._read_lines(results or []))

    def _read_lines(self, results: Iterable[Mapping[str, Any]]) -> list[str]:
        """Collect confident text lines from PaddleOCR ``OCRResult`` pages."""
        lines = []
        for page in results:
            for text, confidence in zip(page["rec_texts"], page["rec_scores"], strict=True):
                if confidence >= self.min_confidence:
                    lines.append(str(text))
                else:
                    logger.debug(f"Dropped low-confidence line {text!r} ({confidence:.2f})")
        return lines
