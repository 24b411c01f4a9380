import io

import pymupdf
from PIL import Image

from ingredex.pdf.exceptions import PdfExtractionError


class PdfPageRenderer:
    """Rasterizes PDF pages so scanned documents can go through OCR."""

    def __init__(self, dpi: int = 200, max_pages: int = 10) -> None:
        self._dpi = dpi
        self._max_pages = max_pages

    def render(self, pdf_bytes: bytes) -> list[Image.Image]:
        """Render up to ``max_pages`` pages as PIL images, in page order."""
        try:
            images: list[Image.Image] = []
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                for index, page in enumerate(doc):
                    if index >= self._max_pages:
                        break
                    pixmap = page.get_pixmap(dpi=self._dpi)
                    images.append(Image.open(io.BytesIO(pixmap.tobytes("png"))))
            return images
        except Exception as exc:
            raise PdfExtractionError(f"PDF page rendering failed: {exc}") from exc
