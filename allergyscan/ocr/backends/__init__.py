from allergyscan.ocr.backends.base import RecognitionBackend

__all__ = ["RecognitionBackend"]
