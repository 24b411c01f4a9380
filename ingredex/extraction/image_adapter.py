import io
from threading import Event

from PIL import Image, UnidentifiedImageError

from ingredex.extraction.base import BaseExtractor
from ingredex.extraction.exceptions import ExtractionError, ExtractionTimeoutError
from ingredex.extraction.models import Confidence, ExtractedText
from ingredex.logging.logger import Log
from ingredex.ocr.base import BaseOcrEngine
from ingredex.ocr.exceptions import OcrError, OcrTimeoutError
from ingredex.ocr.models import OcrResult
from ingredex.ocr.preprocessing import ImagePreprocessor
from ingredex.pdf.exceptions import PdfExtractionError
from ingredex.pdf.renderer import PdfPageRenderer


def _to_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class _OcrTier(BaseExtractor):
    """Shared OCR plumbing: preprocess, recognize, grade the result."""

    def __init__(
        self,
        engine: BaseOcrEngine,
        preprocessor: ImagePreprocessor,
        *,
        binarize: bool,
        min_confidence: float,
    ) -> None:
        self._engine = engine
        self._preprocessor = preprocessor
        self._binarize = binarize
        self._min_confidence = min_confidence

    def _recognize(self, image: Image.Image) -> tuple[OcrResult, Image.Image]:
        prepared = self._preprocessor.prepare(image, binarize=self._binarize)
        try:
            return self._engine.recognize(prepared), prepared
        except OcrTimeoutError as exc:
            raise ExtractionTimeoutError(self.method, str(exc)) from exc
        except OcrError as exc:
            raise ExtractionError(self.method, str(exc)) from exc

    def _grade(self, mean_confidence: float) -> Confidence:
        if mean_confidence >= self._min_confidence:
            return Confidence.MEDIUM
        return Confidence.LOW


class ImageOcrExtractor(_OcrTier):
    """OCR for photographs of packaging."""

    def __init__(
        self,
        engine: BaseOcrEngine,
        preprocessor: ImagePreprocessor,
        *,
        binarize: bool = True,
        min_confidence: float = 40.0,
    ) -> None:
        super().__init__(engine, preprocessor, binarize=binarize, min_confidence=min_confidence)
        self.method = "image_ocr_binarized" if binarize else "image_ocr_grayscale"

    def extract(self, content: bytes) -> ExtractedText:
        try:
            image = Image.open(io.BytesIO(content))
            image.load()
        except (UnidentifiedImageError, OSError) as exc:
            raise ExtractionError(self.method, f"image could not be decoded: {exc}") from exc

        result, prepared = self._recognize(image)
        text = result.text.strip()
        Log.info(
            f"{self.method}: {len(text)} chars, {result.word_count} words, "
            f"mean confidence {result.mean_confidence:.1f}"
        )
        if not text:
            raise ExtractionError(self.method, "OCR found no text in the image")
        return ExtractedText(
            text=text,
            method=self.method,
            confidence=self._grade(result.mean_confidence),
            ocr_confidence=result.mean_confidence,
            image_png=_to_png(prepared),
        )


class PdfOcrExtractor(_OcrTier):
    """OCR of rendered pages, the escalation path for scanned PDFs."""

    method = "pdf_page_ocr"

    def __init__(
        self,
        renderer: PdfPageRenderer,
        engine: BaseOcrEngine,
        preprocessor: ImagePreprocessor,
        *,
        binarize: bool = True,
        min_confidence: float = 40.0,
    ) -> None:
        super().__init__(engine, preprocessor, binarize=binarize, min_confidence=min_confidence)
        self._renderer = renderer

    def extract(self, content: bytes) -> ExtractedText:
        return self.extract_until(content, Event())

    def extract_until(self, content: bytes, stop: Event) -> ExtractedText:
        try:
            pages = self._renderer.render(content)
        except PdfExtractionError as exc:
            raise ExtractionError(self.method, str(exc)) from exc
        if not pages:
            raise ExtractionError(self.method, "document has no pages")

        texts: list[str] = []
        weighted_confidence = 0.0
        words = 0
        for number, page in enumerate(pages):
            if stop.is_set():
                raise ExtractionTimeoutError(
                    self.method, f"abandoned after {number} of {len(pages)} pages"
                )
            result, _ = self._recognize(page)
            if result.text.strip():
                texts.append(result.text.strip())
            weighted_confidence += result.mean_confidence * result.word_count
            words += result.word_count

        text = "\n".join(texts)
        if not text:
            raise ExtractionError(self.method, "OCR found no text on any page")
        mean_confidence = weighted_confidence / words if words else 0.0
        return ExtractedText(
            text=text,
            method=self.method,
            confidence=self._grade(mean_confidence),
            ocr_confidence=mean_confidence,
        )
