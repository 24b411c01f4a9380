import io

import pdfplumber

from ingredex.pdf.base import BasePdfExtractor

# Horizontal gap, in points, below which characters join into one word.
_X_TOLERANCE = 1.5


class PdfPlumberAdapter(BasePdfExtractor):
    engine = "pdfplumber"

    def read_pages(self, pdf_bytes: bytes) -> list[str]:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            return [page.extract_text(x_tolerance=_X_TOLERANCE) or "" for page in pdf.pages]
