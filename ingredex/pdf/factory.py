from typing import ClassVar

from ingredex.config.settings import Settings
from ingredex.pdf.base import BasePdfExtractor
from ingredex.pdf.pdfplumber_adapter import PdfPlumberAdapter
from ingredex.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates PDF text-layer extractors based on settings."""

    ADAPTERS: ClassVar[dict[str, type[BasePdfExtractor]]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        return cls.create_engine(settings.pdf_engine)

    @classmethod
    def create_engine(cls, engine: str) -> BasePdfExtractor:
        adapter_cls = cls.ADAPTERS.get(engine.lower())
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create_chain(cls, settings: Settings) -> list[BasePdfExtractor]:
        """Configured engine first, then every other engine as a fallback."""
        primary = cls.create(settings)
        others = [
            adapter_cls()
            for name, adapter_cls in cls.ADAPTERS.items()
            if name != primary.engine
        ]
        return [primary, *others]
