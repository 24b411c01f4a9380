from abc import ABC, abstractmethod

from ingredex.pdf.exceptions import PdfExtractionError


class BasePdfExtractor(ABC):
    """A PDF engine that reads the embedded text layer, one page at a time.

    Digital product sheets carry their ingredient lists in this layer; a scan
    has none, which the caller detects from the length of what comes back.
    """

    engine: str = ""

    def extract(self, pdf_bytes: bytes) -> str:
        """Return the text layer, pages in order, blank pages dropped.

        Raises:
            PdfExtractionError: if the document cannot be opened or parsed.
        """
        try:
            pages = self.read_pages(pdf_bytes)
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"{self.engine} could not read the text layer: {exc}") from exc
        return "\n".join(text.strip() for text in pages if text.strip())

    @abstractmethod
    def read_pages(self, pdf_bytes: bytes) -> list[str]:
        """Return the raw text of each page; engine errors may propagate."""
