import io

from docx import Document
from docx.table import Table

from ingredex.extraction.base import BaseExtractor
from ingredex.extraction.exceptions import ExtractionError
from ingredex.extraction.models import Confidence, ExtractedText
from ingredex.extraction.table import render_rows


class DocxExtractor(BaseExtractor):
    """Extracts paragraph text and table rows from .docx, dropping formatting.

    Body blocks are read in document order, so a table between two
    paragraphs stays between them in the output.
    """

    method = "docx"

    def extract(self, content: bytes) -> ExtractedText:
        try:
            document = Document(io.BytesIO(content))
        except Exception as exc:
            raise ExtractionError(self.method, f"document could not be opened: {exc}") from exc

        parts: list[str] = []
        for block in document.iter_inner_content():
            if isinstance(block, Table):
                rows = [[cell.text.strip() for cell in row.cells] for row in block.rows]
                rendered = render_rows(rows).text
            else:
                rendered = block.text.strip()
            if rendered:
                parts.append(rendered)

        text = "\n".join(parts).strip()
        if not text:
            raise ExtractionError(self.method, "document contains no text")
        return ExtractedText(text=text, method=self.method, confidence=Confidence.HIGH)
