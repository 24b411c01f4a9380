from collections.abc import Iterable

from ingredex.classification.base import BaseClassifier
from ingredex.classification.completeness import ensure_complete
from ingredex.classification.exceptions import (
    ClassificationError,
    ClassificationUnavailableError,
)
from ingredex.classification.models import (
    ClassificationRequest,
    ClassificationResult,
    ClassificationStatus,
    ProductClassification,
)
from ingredex.logging.logger import Log
from ingredex.processor.models import PipelineOutcome, ProductRecord


class ClassificationService:
    """The only entry point to the classifier.

    Every result passes through the completeness validator before it is
    returned, so callers always get one verdict per submitted ingredient.
    """

    def __init__(self, classifier: BaseClassifier) -> None:
        self._classifier = classifier

    def classify(self, request: ClassificationRequest) -> ClassificationResult:
        """Classify one product.

        Raises:
            ClassificationUnavailableError: if the classifier failed or
                returned output that could not be used.
        """
        if not request.ingredients:
            return ClassificationResult(product_name=request.product_name)
        try:
            raw = self._classifier.classify(request)
        except ClassificationUnavailableError:
            raise
        except ClassificationError as exc:
            raise ClassificationUnavailableError(str(exc)) from exc

        result = ensure_complete(request, raw)
        Log.info(
            f"Classified '{request.product_name}': "
            f"{result.analyzed_count}/{result.expected_count} analyzed"
        )
        return result

    def classify_products(self, records: Iterable[ProductRecord]) -> list[ProductClassification]:
        """Classify each product independently, in input order."""
        outcomes: list[ProductClassification] = []
        for record in records:
            request = ClassificationRequest(
                product_name=record.product_name,
                ingredients=tuple(record.ingredients),
            )
            try:
                outcomes.append(
                    ProductClassification(
                        product_name=record.product_name,
                        status=ClassificationStatus.CLASSIFIED,
                        result=self.classify(request),
                    )
                )
            except ClassificationUnavailableError as exc:
                Log.error(f"Classification unavailable for '{record.product_name}': {exc}")
                outcomes.append(
                    ProductClassification(
                        product_name=record.product_name,
                        status=ClassificationStatus.UNAVAILABLE,
                        error=str(exc),
                    )
                )
        return outcomes

    def classify_outcome(self, outcome: PipelineOutcome) -> list[ProductClassification]:
        """Classify the products of a finished pipeline run; failed runs have none."""
        if not outcome.succeeded:
            return []
        return self.classify_products(outcome.products)
