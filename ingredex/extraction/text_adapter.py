from ingredex.extraction.base import BaseExtractor
from ingredex.extraction.exceptions import ExtractionError
from ingredex.extraction.models import Confidence, ExtractedText

_ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")


def decode_text(content: bytes) -> str:
    """Decode bytes trying UTF-8 (with or without BOM), then Windows/Latin-1."""
    for encoding in _ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    return content.decode("latin-1", errors="replace")


class PlainTextExtractor(BaseExtractor):
    """Reads the upload as text. Also the generic tier for unknown formats."""

    method = "plain_text"

    def extract(self, content: bytes) -> ExtractedText:
        if b"\x00" in content:
            raise ExtractionError(self.method, "content is binary, not text")
        text = decode_text(content).strip()
        if not text:
            raise ExtractionError(self.method, "file contains no text")
        return ExtractedText(text=text, method=self.method, confidence=Confidence.HIGH)
