"""Abstract base class for OCR backends."""

from abc import ABC, abstractmethod

from allergyscan.models.recognition import ImageHandle


class RecognitionBackend(ABC):
    """Abstract base class for OCR backends. Backends process a single image."""

    name: str = "base"

    @abstractmethod
    def recognize(self, image: ImageHandle) -> str:
        """Recognize the text in an image.

        Args:
            image: Handle to the image to read

        Returns:
            Recognized text, lines separated by ``"\\n"``

        Raises:
            RecognitionError: If recognition fails
        """
        ...
