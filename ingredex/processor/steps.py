from ingredex.extraction.exceptions import TiersExhaustedError
from ingredex.ingestion.detector import UploadValidator
from ingredex.ingestion.temporary_upload import TemporaryUpload
from ingredex.logging.logger import Log
from ingredex.processor.exceptions import ExtractionFailedError, NoProductsFoundError
from ingredex.processor.models import ProductRecord
from ingredex.processor.orchestrator import ExtractionOrchestrator, SegmentationOrchestrator
from ingredex.processor.pipeline import PipelineContext, PipelineState, PipelineStep
from ingredex.segmentation.models import UNNAMED_PRODUCT
from ingredex.text.normalizer import TextNormalizer
from ingredex.tokenization.tokenizer import IngredientTokenizer

SUPPORTED_STRUCTURES_HINT = (
    "'Name | ingredients' or 'Name: a, b, c' lines; a product header (e.g. 'Product 1: Name', "
    "'ITEM#2 - Name', '*** Name ***') followed by an 'Ingredients:' line; a name and a "
    "comma-separated list in aligned columns; or a plain comma-separated ingredient list"
)


class DetectFormatStep(PipelineStep):
    def __init__(self, validator: UploadValidator) -> None:
        self._validator = validator

    def run(self, context: PipelineContext) -> PipelineContext:
        context.format_kind = self._validator.validate(context.document)
        context.advance(PipelineState.DETECTED)
        return context


class SpoolUploadStep(PipelineStep):
    """Moves the upload's bytes to a temp file owned by this invocation.

    The Processor releases ``context.upload`` on every exit path.
    """

    def __init__(self, temp_dir: str | None = None) -> None:
        self._temp_dir = temp_dir

    def run(self, context: PipelineContext) -> PipelineContext:
        context.upload = TemporaryUpload(context.document, temp_dir=self._temp_dir).open()
        Log.debug(f"Spooled '{context.document.file_name}' to {context.upload.path}")
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, orchestrator: ExtractionOrchestrator) -> None:
        self._orchestrator = orchestrator

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload is None:
            raise ValueError("PipelineContext.upload must be set before extraction")
        context.advance(PipelineState.EXTRACTING)
        content = context.upload.read_bytes()
        try:
            success = self._orchestrator.extract(content, context.format_kind, context.cancellation)
        except TiersExhaustedError as exc:
            context.attempted_methods.extend(exc.attempted_methods)
            tried = ", ".join(exc.attempted_methods) or "none"
            raise ExtractionFailedError(
                f"No extractable content found in '{context.document.file_name}'. "
                f"Tried: {tried}.",
                exc.failures,
            ) from exc
        context.attempted_methods.extend(success.attempted_methods)
        context.extracted = success.value
        Log.info(
            f"Extracted {len(success.value.text)} chars from '{context.document.file_name}' "
            f"via {success.method} ({success.value.confidence.value} confidence)"
        )
        return context


class NormalizeTextStep(PipelineStep):
    def __init__(self, normalizer: TextNormalizer) -> None:
        self._normalizer = normalizer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extracted is None:
            raise ValueError("PipelineContext.extracted must be set before normalization")
        context.normalized_text = self._normalizer.normalize_layout(context.extracted.text)
        Log.debug(f"Normalized text:\n{context.normalized_text}")
        return context


class SegmentStep(PipelineStep):
    def __init__(self, orchestrator: SegmentationOrchestrator) -> None:
        self._orchestrator = orchestrator

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extracted is None:
            raise ValueError("PipelineContext.extracted must be set before segmentation")
        context.advance(PipelineState.SEGMENTING)
        try:
            success = self._orchestrator.segment(
                context.extracted, context.normalized_text, context.cancellation
            )
        except TiersExhaustedError as exc:
            context.attempted_methods.extend(exc.attempted_methods)
            raise NoProductsFoundError(
                f"Text was extracted from '{context.document.file_name}' but no products "
                f"were recognized. Supported structures: {SUPPORTED_STRUCTURES_HINT}.",
                exc.failures,
            ) from exc
        context.attempted_methods.extend(success.attempted_methods)
        context.blocks = success.value
        context.segmentation_method = success.method
        Log.info(f"Segmented {len(success.value)} product blocks via {success.method}")
        return context


class TokenizeStep(PipelineStep):
    def __init__(self, tokenizer: IngredientTokenizer, normalizer: TextNormalizer) -> None:
        self._tokenizer = tokenizer
        self._normalizer = normalizer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.advance(PipelineState.TOKENIZING)
        products: list[ProductRecord] = []
        for block in context.blocks:
            ingredients = self._tokenizer.tokenize(block.ingredients_text)
            if not ingredients:
                Log.debug(f"Dropped block '{block.name}': no valid ingredients")
                continue
            products.append(
                ProductRecord(
                    product_name=self._normalizer.normalize(block.name) or UNNAMED_PRODUCT,
                    ingredients=ingredients,
                    strategy=block.strategy.label,
                )
            )
        if not products:
            raise NoProductsFoundError(
                f"No ingredients could be read from '{context.document.file_name}'. "
                f"Supported structures: {SUPPORTED_STRUCTURES_HINT}."
            )
        context.products = products
        context.advance(PipelineState.DONE)
        Log.info(
            f"Tokenized {len(products)} products, "
            f"{sum(len(p.ingredients) for p in products)} ingredients"
        )
        return context


class LogFailureStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        Log.error(
            f"Processing of '{context.document.file_name}' failed: {context.error_message}"
        )
        return context
