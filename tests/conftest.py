"""Shared fixtures for allergyscan tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from allergyscan.exceptions import RecognitionError
from allergyscan.models.recognition import ImageHandle
from allergyscan.ocr.backends.base import RecognitionBackend
from allergyscan.store import TermStore


class StaticTextBackend(RecognitionBackend):
    """Backend returning canned text, one entry per call."""

    name = "static"

    def __init__(self, *texts: str) -> None:
        self.texts = list(texts)
        self.calls: list[ImageHandle] = []

    def recognize(self, image: ImageHandle) -> str:
        self.calls.append(image)
        return self.texts.pop(0)


class FailingBackend(RecognitionBackend):
    """Backend that always fails."""

    name = "failing"

    def recognize(self, image: ImageHandle) -> str:
        raise RecognitionError(self.name, f"could not read {image.name}")


@pytest.fixture
def term_store(tmp_path: Path) -> Iterator[TermStore]:
    store = TermStore(tmp_path)
    yield store
    store.close()


@pytest.fixture
def image(tmp_path: Path) -> ImageHandle:
    return ImageHandle(path=tmp_path / "label.jpg")
