from ingredex.extraction.base import BaseExtractor
from ingredex.extraction.exceptions import ExtractionError, ScannedDocumentError
from ingredex.extraction.models import Confidence, ExtractedText
from ingredex.pdf.base import BasePdfExtractor
from ingredex.pdf.exceptions import PdfExtractionError


class PdfTextLayerExtractor(BaseExtractor):
    """Reads a PDF's embedded text layer through one PDF engine.

    A missing or near-empty text layer means the PDF is a scan; that is
    signalled with ScannedDocumentError so the caller escalates to OCR.
    With ``min_text_chars=1`` the same reader accepts any non-empty layer,
    which is how a short layer is kept once OCR has found nothing better.
    """

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        *,
        min_text_chars: int = 50,
        confidence: Confidence = Confidence.HIGH,
        method: str | None = None,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._min_text_chars = min_text_chars
        self._confidence = confidence
        self.method = method or f"pdf_text_{pdf_extractor.engine}"

    def extract(self, content: bytes) -> ExtractedText:
        try:
            text = self._pdf_extractor.extract(content)
        except PdfExtractionError as exc:
            raise ExtractionError(self.method, str(exc)) from exc

        visible = len("".join(text.split()))
        if visible < self._min_text_chars:
            if visible == 0:
                raise ScannedDocumentError(self.method, "document has no text layer")
            raise ScannedDocumentError(
                self.method,
                f"text layer has {visible} characters (minimum {self._min_text_chars}); "
                "document looks scanned",
            )
        return ExtractedText(text=text, method=self.method, confidence=self._confidence)
