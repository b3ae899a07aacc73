"""Text recognition with pluggable backends.

    from allergyscan.ocr import get_backend

    backend = get_backend()  # ALLERGYSCAN_OCR_BACKEND, default google_vision
    text = backend.recognize(ImageHandle(path=Path("label.jpg")))

Backends need their optional dependencies: ``pip install allergyscan[google]``
for Google Cloud Vision or ``pip install allergyscan[paddle]`` for PaddleOCR.
"""

import logging

from allergyscan.config import Config
from allergyscan.core.constants import OCRBackendNames
from allergyscan.exceptions import ConfigurationError
from allergyscan.ocr.backends import RecognitionBackend

logger = logging.getLogger(__name__)


def get_backend(backend_name: str | None = None, config: Config | None = None) -> RecognitionBackend:
    """Get an OCR backend instance by name or from configuration.

    Args:
        backend_name: Optional explicit backend name ('google_vision' or 'paddle')
        config: Application config (falls back to environment)

    Returns:
        Instantiated backend

    Raises:
        ConfigurationError: If the backend is unknown or its dependencies are missing
    """
    config = config or Config()
    name = (backend_name or config.ocr_backend).lower()
    logger.debug(f"Selecting OCR backend {name}")

    if name == OCRBackendNames.GOOGLE_VISION:
        try:
            from allergyscan.ocr.backends.google_vision import GoogleVisionBackend
        except ImportError as e:
            raise ConfigurationError(
                "GoogleVisionBackend not available. Install google-cloud-vision: pip install 'allergyscan[google]'"
            ) from e
        credentials = config.google_credentials_json.get_secret_value() if config.google_credentials_json else None
        return GoogleVisionBackend(credentials_json=credentials, language=config.ocr_language)

    if name == OCRBackendNames.PADDLE:
        try:
            from allergyscan.ocr.backends.paddle import PaddleBackend
        except ImportError as e:
            raise ConfigurationError(
                "PaddleBackend not available. Install paddleocr: pip install 'allergyscan[paddle]'"
            ) from e
        return PaddleBackend(language=config.ocr_language)

    available = ", ".join(f"'{n.value}'" for n in OCRBackendNames)
    raise ConfigurationError(f"Unknown OCR backend: {name}. Available: {available}", {"backend": name})


__all__ = ["RecognitionBackend", "get_backend"]
