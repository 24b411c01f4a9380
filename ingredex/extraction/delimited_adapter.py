from ingredex.extraction.base import BaseExtractor
from ingredex.extraction.exceptions import ExtractionError
from ingredex.extraction.models import Confidence, ExtractedText
from ingredex.extraction.table import render_table
from ingredex.extraction.text_adapter import decode_text


class DelimitedTableExtractor(BaseExtractor):
    """Parses CSV/TSV uploads into pipe-delimited product lines."""

    method = "delimited_table"

    def __init__(self, delimiter: str | None = None) -> None:
        self._delimiter = delimiter

    def extract(self, content: bytes) -> ExtractedText:
        return self.extract_text(decode_text(content))

    def extract_text(self, text: str, method: str | None = None) -> ExtractedText:
        method = method or self.method
        try:
            table = render_table(text, self._delimiter)
        except Exception as exc:
            raise ExtractionError(method, f"table could not be parsed: {exc}") from exc
        if not table.text:
            raise ExtractionError(method, "table has no data rows")
        return ExtractedText(
            text=table.text,
            method=method,
            confidence=Confidence.HIGH if table.header_recognized else Confidence.MEDIUM,
        )
