from ingredex.config.settings import Settings
from ingredex.extraction.base import BaseExtractor
from ingredex.extraction.delimited_adapter import DelimitedTableExtractor
from ingredex.extraction.docx_adapter import DocxExtractor
from ingredex.extraction.image_adapter import ImageOcrExtractor, PdfOcrExtractor
from ingredex.extraction.legacy_doc_adapter import LegacyDocExtractor
from ingredex.extraction.models import Confidence
from ingredex.extraction.pdf_text_adapter import PdfTextLayerExtractor
from ingredex.extraction.spreadsheet_adapter import XlsExtractor, XlsxExtractor
from ingredex.extraction.text_adapter import PlainTextExtractor
from ingredex.ingestion.models import FormatKind
from ingredex.ocr.preprocessing import ImagePreprocessor, PreprocessingConfig
from ingredex.ocr.tesseract_adapter import TesseractAdapter
from ingredex.pdf.factory import PdfExtractorFactory
from ingredex.pdf.renderer import PdfPageRenderer

ExtractorChains = dict[FormatKind, list[BaseExtractor]]


class ExtractorFactory:
    """Builds the ordered extraction tiers for every format kind."""

    @classmethod
    def create_chains(cls, settings: Settings) -> ExtractorChains:
        ocr_engine = TesseractAdapter(
            languages=settings.ocr_languages,
            psm_mode=settings.ocr_psm_mode,
            timeout_seconds=settings.ocr_timeout_seconds,
            tesseract_cmd=settings.ocr_tesseract_cmd,
        )
        preprocessor = ImagePreprocessor(
            PreprocessingConfig(
                min_edge_px=settings.ocr_min_edge_px,
                max_edge_px=settings.ocr_max_edge_px,
                contrast_cutoff=settings.ocr_contrast_cutoff,
                binarize=settings.ocr_binarize,
            )
        )
        plain = PlainTextExtractor()

        pdf_engines = PdfExtractorFactory.create_chain(settings)
        pdf_text_tiers: list[BaseExtractor] = [
            PdfTextLayerExtractor(
                engine,
                min_text_chars=settings.pdf_min_text_chars,
                confidence=Confidence.HIGH if index == 0 else Confidence.MEDIUM,
            )
            for index, engine in enumerate(pdf_engines)
        ]
        # Last resort: a layer too short to trust still beats no text at all.
        pdf_short_text = PdfTextLayerExtractor(
            pdf_engines[0],
            min_text_chars=1,
            confidence=Confidence.LOW,
            method="pdf_text_partial",
        )
        pdf_ocr = PdfOcrExtractor(
            PdfPageRenderer(dpi=settings.pdf_ocr_dpi, max_pages=settings.pdf_ocr_max_pages),
            ocr_engine,
            preprocessor,
            binarize=settings.ocr_binarize,
            min_confidence=settings.ocr_min_confidence,
        )
        image_tiers: list[BaseExtractor] = [
            ImageOcrExtractor(
                ocr_engine,
                preprocessor,
                binarize=binarize,
                min_confidence=settings.ocr_min_confidence,
            )
            for binarize in dict.fromkeys((settings.ocr_binarize, False))
        ]

        return {
            FormatKind.PLAIN_TEXT: [plain],
            FormatKind.DELIMITED_TABLE: [DelimitedTableExtractor(), plain],
            FormatKind.PORTABLE_DOCUMENT: [*pdf_text_tiers, pdf_ocr, pdf_short_text],
            FormatKind.WORD_PROCESSOR: [
                DocxExtractor(),
                LegacyDocExtractor(timeout_seconds=settings.tier_timeout_seconds),
            ],
            FormatKind.SPREADSHEET: [XlsxExtractor(), XlsExtractor()],
            FormatKind.RASTER_IMAGE: image_tiers,
            FormatKind.UNKNOWN: [plain],
        }
