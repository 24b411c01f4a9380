import pymupdf

from ingredex.pdf.base import BasePdfExtractor
from ingredex.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Reads the text layer with PyMuPDF.

    Blocks are sorted top-to-bottom, left-to-right, so products laid out in
    two columns still come out in reading order.
    """

    engine = "pymupdf"

    def read_pages(self, pdf_bytes: bytes) -> list[str]:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            if doc.needs_pass:
                raise PdfExtractionError("pymupdf: document is password protected")
            return [page.get_text("text", sort=True) for page in doc]
