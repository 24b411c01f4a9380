from abc import ABC, abstractmethod

from PIL import Image

from ingredex.ocr.models import OcrResult


class BaseOcrEngine(ABC):
    """Contract for optical character recognition adapters."""

    @abstractmethod
    def recognize(self, image: Image.Image) -> OcrResult:
        """Recognize text in a preprocessed image.

        Raises:
            OcrTimeoutError: if recognition exceeds the engine's time budget.
            OcrError: on any other engine failure.
        """
