class OcrError(Exception):
    """Raised when the OCR engine fails or is unavailable."""


class OcrTimeoutError(OcrError):
    """Raised when recognition exceeds its time budget."""
