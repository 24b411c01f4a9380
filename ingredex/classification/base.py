from abc import ABC, abstractmethod

from ingredex.classification.models import ClassificationRequest, ClassificationResult


class BaseClassifier(ABC):
    """Contract for external ingredient classifiers."""

    @abstractmethod
    def classify(self, request: ClassificationRequest) -> ClassificationResult:
        """Classify every ingredient of one product.

        Args:
            request: Product name plus ordered ingredient tokens.

        Returns:
            ClassificationResult as returned by the classifier. It may hold
            fewer verdicts than were requested.

        Raises:
            ClassificationError: on any failure.
        """
