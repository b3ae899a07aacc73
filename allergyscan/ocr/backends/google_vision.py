"""Google Cloud Vision API backend for OCR processing."""

import json
import logging

from google.api_core import exceptions as google_exceptions
from google.cloud import vision
from google.oauth2 import service_account

from allergyscan.core.constants import OCRBackendNames, OCRConstants
from allergyscan.exceptions import RecognitionError
from allergyscan.models.recognition import ImageHandle
from allergyscan.ocr.backends.base import RecognitionBackend

logger = logging.getLogger(__name__)


class GoogleVisionBackend(RecognitionBackend):
    """Google Vision API backend using service account credentials."""

    name = OCRBackendNames.GOOGLE_VISION

    def __init__(self, credentials_json: str | None = None, language: str = "en"):
        """Initialize with credentials.

        Args:
            credentials_json: JSON string with service account credentials.
                            If not provided, application default credentials are used.
            language: Language hint for document text detection
        """
        self.language = language
        if credentials_json:
            service_account_info = json.loads(credentials_json)
            credentials = service_account.Credentials.from_service_account_info(service_account_info)
            self.client = vision.ImageAnnotatorClient(credentials=credentials)
        else:
            # Fall back to default credentials (GOOGLE_APPLICATION_CREDENTIALS)
            self.client = vision.ImageAnnotatorClient()

    def recognize(self, image: ImageHandle) -> str:
        """Run document_text_detection on the image and return its full text."""
        image_bytes = image.read_bytes()
        if len(image_bytes) > OCRConstants.GOOGLE_MAX_FILE_SIZE_BYTES:
            raise RecognitionError(
                self.name,
                f"Image {image.name} is {len(image_bytes)} bytes, above the Vision API limit",
                {"size": len(image_bytes)},
            )

        try:
            response = self.client.document_text_detection(
                image=vision.Image(content=image_bytes),
                image_context={"language_hints": [self.language]},
            )
        except google_exceptions.GoogleAPICallError as e:
            raise RecognitionError(self.name, f"Google Vision API call failed: {e}") from e

        if response.error.message:
            raise RecognitionError(self.name, f"Google Vision API error: {response.error.message}")

        if not response.full_text_annotation:
            logger.debug(f"No text found in {image.name}")
            return ""
        return response.full_text_annotation.text
