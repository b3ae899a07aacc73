"""Tests for reading PaddleOCR results."""

import pytest
from PIL import Image

from allergyscan.exceptions import RecognitionError
from allergyscan.models.recognition import ImageHandle

paddle = pytest.importorskip("allergyscan.ocr.backends.paddle")


class FakePaddleOCR:
    """Stands in for a PaddleOCR engine, returning 3.x shaped results."""

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.pages = []
        self.frames = []

    def predict(self, frame):
        self.frames.append(frame)
        if isinstance(self.pages, Exception):
            raise self.pages
        return self.pages


@pytest.fixture
def backend(monkeypatch):
    monkeypatch.setattr(paddle, "PaddleOCR", FakePaddleOCR)
    return paddle.PaddleBackend(language="en")


@pytest.fixture
def label(tmp_path):
    path = tmp_path / "label.png"
    Image.new("RGB", (8, 4), color="white").save(path)
    return ImageHandle(path=path)


class TestPaddleBackend:
    """Tests for PaddleBackend."""

    def test_engine_options(self, backend):
        assert backend._ocr.kwargs == {"use_textline_orientation": True, "lang": "en"}

    def test_reads_text_lines(self, backend, label):
        backend._ocr.pages = [
            {
                "input_path": None,
                "rec_texts": ["Ingredients: wheat flour,", "barley malt extract"],
                "rec_scores": [0.98, 0.91],
            }
        ]

        assert backend.recognize(label) == "Ingredients: wheat flour,\nbarley malt extract"
        assert backend._ocr.frames[0].shape == (4, 8, 3)

    def test_drops_low_confidence_lines(self, backend, label):
        backend._ocr.pages = [{"rec_texts": ["beer", "b33r?"], "rec_scores": [0.9, 0.2]}]

        assert backend.recognize(label) == "beer"

    def test_joins_pages(self, backend, label):
        backend._ocr.pages = [
            {"rec_texts": ["malt"], "rec_scores": [0.8]},
            {"rec_texts": ["rye"], "rec_scores": [0.7]},
        ]

        assert backend.recognize(label) == "malt\nrye"

    def test_no_text(self, backend, label):
        backend._ocr.pages = [{"rec_texts": [], "rec_scores": []}]

        assert backend.recognize(label) == ""

    def test_engine_failure(self, backend, label):
        backend._ocr.pages = RuntimeError("model not loaded")

        with pytest.raises(RecognitionError, match="model not loaded"):
            backend.recognize(label)
