from ingredex.config.settings import Settings
from ingredex.extraction.factory import ExtractorFactory
from ingredex.ingestion.detector import UploadValidator
from ingredex.ingestion.exceptions import (
    EmptyUploadError,
    UnsupportedFormatError,
    UploadRejectedError,
    UploadTooLargeError,
)
from ingredex.ingestion.models import UploadedDocument
from ingredex.llm.factory import LLMClientFactory
from ingredex.logging.logger import Log, Timer
from ingredex.processor.cancellation import CancellationToken
from ingredex.processor.exceptions import (
    ExtractionFailedError,
    NoProductsFoundError,
    PipelineCancelledError,
)
from ingredex.processor.models import OutcomeStatus, PipelineOutcome
from ingredex.processor.orchestrator import ExtractionOrchestrator, SegmentationOrchestrator
from ingredex.processor.pipeline import PipelineContext, PipelineState, PipelineStep
from ingredex.processor.steps import (
    DetectFormatStep,
    ExtractTextStep,
    LogFailureStep,
    NormalizeTextStep,
    SegmentStep,
    SpoolUploadStep,
    TokenizeStep,
)
from ingredex.segmentation.segmenter import ProductSegmenter
from ingredex.structuring.structurer import LLMStructurer
from ingredex.text.normalizer import TextNormalizer
from ingredex.tokenization.tokenizer import IngredientTokenizer

_REJECTION_STATUSES: dict[type[UploadRejectedError], OutcomeStatus] = {
    UnsupportedFormatError: OutcomeStatus.UNSUPPORTED_FORMAT,
    UploadTooLargeError: OutcomeStatus.UPLOAD_TOO_LARGE,
    EmptyUploadError: OutcomeStatus.EMPTY_UPLOAD,
}


class Processor:
    """Runs one upload through the pipeline.

    Pipeline: detect -> spool -> extract -> normalize -> segment -> tokenize.
    Handled failures come back as a PipelineOutcome; anything else runs the
    failed step and is re-raised. The spooled upload is always released.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        failed_step: PipelineStep | None = None,
    ) -> None:
        self._steps = steps
        self._failed_step = failed_step or LogFailureStep()

    def process(
        self,
        document: UploadedDocument,
        cancellation: CancellationToken | None = None,
    ) -> PipelineOutcome:
        context = PipelineContext(document=document, cancellation=cancellation or CancellationToken())
        Log.info(f"Processing '{document.file_name}' ({document.size_bytes} bytes)")
        with Timer("pipeline") as timer:
            try:
                for step in self._steps:
                    context.cancellation.raise_if_cancelled()
                    context = step.run(context)
                context.cancellation.raise_if_cancelled()
            except UploadRejectedError as exc:
                status = _REJECTION_STATUSES.get(type(exc), OutcomeStatus.UNSUPPORTED_FORMAT)
                return self._fail(context, status, exc)
            except ExtractionFailedError as exc:
                return self._fail(context, OutcomeStatus.EXTRACTION_FAILED, exc)
            except NoProductsFoundError as exc:
                return self._fail(context, OutcomeStatus.NO_PRODUCTS_FOUND, exc)
            except PipelineCancelledError as exc:
                return self._fail(context, OutcomeStatus.CANCELLED, exc)
            except Exception as exc:
                context.error_message = str(exc)
                self._mark_failed(context)
                raise
            finally:
                if context.upload is not None:
                    context.upload.release()

        Log.info(f"Processed '{document.file_name}' in {timer.get_elapsed_ms()}ms")
        return self._success(context)

    def _fail(
        self, context: PipelineContext, status: OutcomeStatus, exc: Exception
    ) -> PipelineOutcome:
        context.error_message = str(exc)
        self._mark_failed(context)
        extracted = context.extracted
        return PipelineOutcome(
            status=status,
            file_name=context.document.file_name,
            source_format=context.format_kind.value,
            confidence=extracted.confidence.value if extracted else None,
            extraction_method=extracted.method if extracted else None,
            attempted_methods=list(context.attempted_methods),
            message=context.error_message,
        )

    def _mark_failed(self, context: PipelineContext) -> None:
        if context.state is not PipelineState.FAILED:
            context.state = PipelineState.FAILED
        self._failed_step.run(context)

    @staticmethod
    def _success(context: PipelineContext) -> PipelineOutcome:
        extracted = context.extracted
        return PipelineOutcome(
            status=OutcomeStatus.SUCCESS,
            file_name=context.document.file_name,
            products=list(context.products),
            source_format=context.format_kind.value,
            confidence=extracted.confidence.value if extracted else None,
            extraction_method=extracted.method if extracted else None,
            segmentation_method=context.segmentation_method or None,
            attempted_methods=list(context.attempted_methods),
            message=f"Found {len(context.products)} products",
        )


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with all required adapters."""
    Log.configure(settings.log_level)
    Log.info(f"Building processor for the '{settings.app_env}' environment")
    normalizer = TextNormalizer()
    structurer = None
    if settings.structuring_enabled:
        structurer = LLMStructurer(
            client=LLMClientFactory.create(settings),
            model=settings.structuring_model_name,
            temperature=LLMClientFactory.resolve_temperature(settings),
        )
    steps: list[PipelineStep] = [
        DetectFormatStep(UploadValidator(settings.max_upload_size_bytes)),
        SpoolUploadStep(temp_dir=settings.temp_dir),
        ExtractTextStep(
            ExtractionOrchestrator(
                ExtractorFactory.create_chains(settings),
                tier_timeout_seconds=settings.tier_timeout_seconds,
            )
        ),
        NormalizeTextStep(normalizer),
        SegmentStep(
            SegmentationOrchestrator(
                ProductSegmenter(normalizer=normalizer),
                structurer,
                tier_timeout_seconds=settings.tier_timeout_seconds,
            )
        ),
        TokenizeStep(IngredientTokenizer(normalizer), normalizer),
    ]
    return Processor(steps=steps, failed_step=LogFailureStep())
