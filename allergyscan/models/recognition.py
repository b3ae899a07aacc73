"""Recognition request and outcome models."""

from datetime import UTC, datetime
from pathlib import Path

from PIL import Image
from pydantic import BaseModel, Field

from allergyscan.exceptions import ImageLoadError


class ImageHandle(BaseModel):
    """Explicit handle to an image on disk, passed to OCR backends."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    def read_bytes(self) -> bytes:
        """Read the raw image bytes.

        Raises:
            ImageLoadError: If the file cannot be read
        """
        try:
            return self.path.read_bytes()
        except OSError as e:
            raise ImageLoadError(str(self.path), str(e)) from e

    def open(self) -> Image.Image:
        """Decode the image as RGB with Pillow.

        Raises:
            ImageLoadError: If the file is missing or not an image
        """
        try:
            with Image.open(self.path) as image:
                return image.convert("RGB")
        except (OSError, Image.DecompressionBombError) as e:
            raise ImageLoadError(str(self.path), str(e)) from e


class RecognitionOutcome(BaseModel):
    """Terminal result of one acquire, recognize and scan attempt."""

    image: ImageHandle
    backend: str
    text: str | None = Field(default=None, description="Recognized document on success")
    error: str | None = Field(default=None, description="Failure reason on failure")
    elapsed_seconds: float = 0.0
    finished_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.text is not None
