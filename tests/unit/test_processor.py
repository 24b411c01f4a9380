import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ingredex.config.settings import Settings
from ingredex.ingestion.models import UploadedDocument
from ingredex.logging.logger import Log
from ingredex.ocr.models import OcrResult
from ingredex.ocr.tesseract_adapter import TesseractAdapter
from ingredex.processor.cancellation import CancellationToken
from ingredex.processor.models import OutcomeStatus
from ingredex.processor.pipeline import PipelineContext, PipelineState, PipelineStep
from ingredex.processor.processor import Processor, build_processor

MIXED_TEXT = """Product 1: Chocolate Cookies | wheat flour, cocoa powder, sugar, butter, eggs, vanilla
ITEM#2 - Vanilla Cake
Ingredients: flour, sugar, eggs, milk, vanilla extract, baking powder
*** Halal Snack Mix ***
Contains: rice, corn, vegetable oil, salt, spices
Product Name: Organic Granola
Ingredient List: oats, honey, nuts, dried fruits, coconut oil
Another Product    almonds, dates, coconut, cinnamon
"""


def _make_processor(tmp_path: Path, **overrides: object) -> Processor:
    settings: dict[str, object] = {"temp_dir": str(tmp_path), "tier_timeout_seconds": 30}
    settings.update(overrides)
    return build_processor(Settings(**settings))


def _make_document(file_name: str, media_type: str, content: bytes) -> UploadedDocument:
    return UploadedDocument(file_name=file_name, media_type=media_type, content=content)


def _assert_no_spooled_files(tmp_path: Path) -> None:
    assert list(tmp_path.iterdir()) == []


class TestProcessorFormats:
    def test_plain_text_with_mixed_structures(self, tmp_path: Path) -> None:
        outcome = _make_processor(tmp_path).process(
            _make_document("catalogue.txt", "text/plain", MIXED_TEXT.encode())
        )

        assert outcome.status is OutcomeStatus.SUCCESS
        assert [p.product_name for p in outcome.products] == [
            "Chocolate Cookies",
            "Vanilla Cake",
            "Halal Snack Mix",
            "Organic Granola",
            "Another Product",
        ]
        assert outcome.products[0].ingredients == [
            "wheat flour",
            "cocoa powder",
            "sugar",
            "butter",
            "eggs",
            "vanilla",
        ]
        assert outcome.products[1].ingredients == [
            "flour",
            "sugar",
            "eggs",
            "milk",
            "vanilla extract",
            "baking powder",
        ]
        assert outcome.source_format == "plain_text"
        assert outcome.confidence == "high"
        assert outcome.segmentation_method == "heuristic_segmentation"
        _assert_no_spooled_files(tmp_path)

    def test_csv_rows_become_products_in_order(self, tmp_path: Path) -> None:
        content = (
            b'Product Name,Ingredients\n'
            b'Cookies,"wheat flour, sugar, salt"\n'
            b'Crackers,"rice flour, sunflower oil, sea salt"\n'
        )
        outcome = _make_processor(tmp_path).process(_make_document("products.csv", "text/csv", content))

        assert outcome.status is OutcomeStatus.SUCCESS
        assert [(p.product_name, p.ingredients) for p in outcome.products] == [
            ("Cookies", ["wheat flour", "sugar", "salt"]),
            ("Crackers", ["rice flour", "sunflower oil", "sea salt"]),
        ]
        assert outcome.extraction_method == "delimited_table"
        assert outcome.attempted_methods == ["delimited_table", "heuristic_segmentation"]

    def test_pdf_text_layer(self, tmp_path: Path, sample_pdf_bytes: bytes) -> None:
        outcome = _make_processor(tmp_path).process(
            _make_document("sheet.pdf", "application/pdf", sample_pdf_bytes)
        )

        assert outcome.status is OutcomeStatus.SUCCESS
        assert [p.product_name for p in outcome.products] == ["Chocolate Cookies", "Vanilla Cake"]
        assert outcome.extraction_method == "pdf_text_pdfplumber"
        assert outcome.confidence == "high"

    def test_short_pdf_text_layer_survives_empty_ocr(
        self, tmp_path: Path, short_pdf_bytes: bytes
    ) -> None:
        blank = OcrResult(text="", mean_confidence=0.0, word_count=0)
        with patch.object(TesseractAdapter, "recognize", return_value=blank):
            outcome = _make_processor(tmp_path).process(
                _make_document("cookies.pdf", "application/pdf", short_pdf_bytes)
            )

        assert outcome.status is OutcomeStatus.SUCCESS
        assert outcome.products[0].product_name == "Cookies"
        assert outcome.products[0].ingredients == ["flour", "sugar", "salt"]
        assert outcome.extraction_method == "pdf_text_partial"
        assert outcome.confidence == "low"
        assert outcome.attempted_methods[:4] == [
            "pdf_text_pdfplumber",
            "pdf_text_pymupdf",
            "pdf_page_ocr",
            "pdf_text_partial",
        ]

    def test_docx(self, tmp_path: Path, docx_bytes: bytes) -> None:
        outcome = _make_processor(tmp_path).process(
            _make_document(
                "sheet.docx",
                "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
                docx_bytes,
            )
        )

        assert outcome.status is OutcomeStatus.SUCCESS
        assert [p.product_name for p in outcome.products] == ["Vanilla Cake", "Granola"]

    def test_xlsx(self, tmp_path: Path, xlsx_bytes: bytes) -> None:
        outcome = _make_processor(tmp_path).process(
            _make_document("sheet.xlsx", "application/octet-stream", xlsx_bytes)
        )

        assert outcome.status is OutcomeStatus.SUCCESS
        assert [p.product_name for p in outcome.products] == ["Cookies", "Crackers"]
        assert outcome.source_format == "spreadsheet"

    def test_image_is_read_with_ocr(self, tmp_path: Path, label_image_bytes: bytes) -> None:
        ocr_result = OcrResult(text="Cola | water, sugar, caramel", mean_confidence=85.0, word_count=4)
        with patch.object(TesseractAdapter, "recognize", return_value=ocr_result):
            outcome = _make_processor(tmp_path).process(
                _make_document("label.png", "image/png", label_image_bytes)
            )

        assert outcome.status is OutcomeStatus.SUCCESS
        assert outcome.products[0].product_name == "Cola"
        assert outcome.products[0].ingredients == ["water", "sugar", "caramel"]
        assert outcome.extraction_method == "image_ocr_binarized"
        assert outcome.confidence == "medium"

    def test_ocr_text_tries_ai_structuring_first(self, tmp_path: Path, label_image_bytes: bytes) -> None:
        ocr_result = OcrResult(text="Cola | water, sugar", mean_confidence=85.0, word_count=3)
        processor = _make_processor(tmp_path, structuring_enabled=True, llm_provider="example")
        with patch.object(TesseractAdapter, "recognize", return_value=ocr_result):
            outcome = processor.process(_make_document("label.png", "image/png", label_image_bytes))

        assert outcome.status is OutcomeStatus.SUCCESS
        assert outcome.attempted_methods == [
            "image_ocr_binarized",
            "ai_structured",
            "heuristic_segmentation",
        ]

    def test_plain_ingredient_list_uses_flat_fallback(self, tmp_path: Path) -> None:
        outcome = _make_processor(tmp_path).process(
            _make_document("label.txt", "text/plain", b"Ingredients: water, sugar, salt\n")
        )

        assert outcome.status is OutcomeStatus.SUCCESS
        assert outcome.products[0].product_name == "Unnamed product"
        assert outcome.products[0].ingredients == ["water", "sugar", "salt"]
        assert outcome.segmentation_method == "flat_fallback"


class TestProcessorFailures:
    def test_blank_pdf_exhausts_every_extraction_tier(
        self, tmp_path: Path, empty_pdf_bytes: bytes
    ) -> None:
        blank = OcrResult(text="", mean_confidence=0.0, word_count=0)
        with patch.object(TesseractAdapter, "recognize", return_value=blank):
            outcome = _make_processor(tmp_path).process(
                _make_document("blank.pdf", "application/pdf", empty_pdf_bytes)
            )

        assert outcome.status is OutcomeStatus.EXTRACTION_FAILED
        assert outcome.attempted_methods == [
            "pdf_text_pdfplumber",
            "pdf_text_pymupdf",
            "pdf_page_ocr",
            "pdf_text_partial",
        ]
        assert "No extractable content found in 'blank.pdf'" in outcome.message
        assert outcome.products == []
        _assert_no_spooled_files(tmp_path)

    def test_executable_is_rejected_before_extraction(self, tmp_path: Path) -> None:
        outcome = _make_processor(tmp_path).process(
            _make_document("setup.exe", "application/octet-stream", b"MZ\x90\x00\x03\x00")
        )

        assert outcome.status is OutcomeStatus.UNSUPPORTED_FORMAT
        assert outcome.attempted_methods == []
        assert outcome.extraction_method is None
        assert "File type not supported" in outcome.message
        _assert_no_spooled_files(tmp_path)

    def test_upload_too_large(self, tmp_path: Path) -> None:
        outcome = _make_processor(tmp_path, max_upload_size_bytes=8).process(
            _make_document("big.txt", "text/plain", b"sugar, salt, pepper")
        )
        assert outcome.status is OutcomeStatus.UPLOAD_TOO_LARGE

    def test_empty_upload(self, tmp_path: Path) -> None:
        outcome = _make_processor(tmp_path).process(_make_document("empty.txt", "text/plain", b""))
        assert outcome.status is OutcomeStatus.EMPTY_UPLOAD

    def test_text_without_ingredients(self, tmp_path: Path) -> None:
        outcome = _make_processor(tmp_path).process(
            _make_document("numbers.txt", "text/plain", b"1\n22\n333\n")
        )

        assert outcome.status is OutcomeStatus.NO_PRODUCTS_FOUND
        assert "Supported structures" in outcome.message
        assert outcome.extraction_method == "plain_text"
        _assert_no_spooled_files(tmp_path)

    def test_cancelled_before_start(self, tmp_path: Path) -> None:
        token = CancellationToken()
        token.cancel()

        outcome = _make_processor(tmp_path).process(
            _make_document("a.txt", "text/plain", MIXED_TEXT.encode()),
            cancellation=token,
        )

        assert outcome.status is OutcomeStatus.CANCELLED
        assert outcome.products == []
        _assert_no_spooled_files(tmp_path)


class _CancellingStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.cancellation.cancel()
        return context


class _ExplodingStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        raise RuntimeError("disk on fire")


class TestProcessorLifecycle:
    def test_cancellation_between_steps(self, tmp_path: Path) -> None:
        processor = build_processor(Settings(temp_dir=str(tmp_path)))
        later_step = MagicMock(spec=PipelineStep)
        processor._steps = [*processor._steps[:2], _CancellingStep(), later_step]

        outcome = processor.process(_make_document("a.txt", "text/plain", b"Cake | flour, eggs"))

        assert outcome.status is OutcomeStatus.CANCELLED
        later_step.run.assert_not_called()
        _assert_no_spooled_files(tmp_path)

    def test_unexpected_error_runs_failed_step_and_propagates(self, tmp_path: Path) -> None:
        processor = build_processor(Settings(temp_dir=str(tmp_path)))
        failed_step = MagicMock(spec=PipelineStep)
        processor = Processor(steps=[*processor._steps[:2], _ExplodingStep()], failed_step=failed_step)

        with pytest.raises(RuntimeError, match="disk on fire"):
            processor.process(_make_document("a.txt", "text/plain", b"Cake | flour, eggs"))

        context = failed_step.run.call_args.args[0]
        assert context.state is PipelineState.FAILED
        assert context.error_message == "disk on fire"
        _assert_no_spooled_files(tmp_path)

    def test_failed_step_runs_for_handled_failures(self) -> None:
        failed_step = MagicMock(spec=PipelineStep)
        processor = build_processor(Settings())
        processor = Processor(steps=processor._steps, failed_step=failed_step)

        outcome = processor.process(_make_document("empty.txt", "text/plain", b""))

        assert outcome.status is OutcomeStatus.EMPTY_UPLOAD
        failed_step.run.assert_called_once()

    def test_outcome_dict(self, tmp_path: Path) -> None:
        outcome = _make_processor(tmp_path).process(
            _make_document("a.txt", "text/plain", b"Cake | flour, eggs")
        )

        data = outcome.to_dict()

        assert data["status"] == "success"
        assert data["products"] == [{"productName": "Cake", "ingredients": ["flour", "eggs"]}]


class TestBuildProcessor:
    def test_applies_configured_log_level(self) -> None:
        with patch.object(Log, "configure") as mock_configure:
            build_processor(Settings(log_level="DEBUG", app_env="staging"))

        mock_configure.assert_called_once_with("DEBUG")

    def test_info_logs_are_emitted_after_build(self, caplog: pytest.LogCaptureFixture) -> None:
        build_processor(Settings(log_level="INFO", app_env="staging"))

        with caplog.at_level(logging.INFO, logger="ingredex"):
            Log.info("tier ok")

        assert logging.getLogger("ingredex").getEffectiveLevel() == logging.INFO
        assert "tier ok" in caplog.text
