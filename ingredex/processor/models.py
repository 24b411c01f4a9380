from dataclasses import dataclass, field
from enum import Enum


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    UNSUPPORTED_FORMAT = "unsupported_format"
    UPLOAD_TOO_LARGE = "upload_too_large"
    EMPTY_UPLOAD = "empty_upload"
    EXTRACTION_FAILED = "extraction_failed"
    NO_PRODUCTS_FOUND = "no_products_found"
    CANCELLED = "cancelled"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class ProductRecord:
    """One product as handed to the dashboard and the classifier."""

    product_name: str
    ingredients: list[str]
    strategy: str = ""


@dataclass(frozen=True)
class PipelineOutcome:
    """Result of one upload's pipeline invocation. Never raised, always returned."""

    status: OutcomeStatus
    file_name: str
    products: list[ProductRecord] = field(default_factory=list)
    source_format: str = ""
    confidence: str | None = None
    extraction_method: str | None = None
    segmentation_method: str | None = None
    attempted_methods: list[str] = field(default_factory=list)
    message: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    def to_dict(self) -> dict[str, object]:
        return {
            "status": self.status.value,
            "fileName": self.file_name,
            "products": [
                {"productName": product.product_name, "ingredients": list(product.ingredients)}
                for product in self.products
            ],
            "metadata": {
                "sourceFormat": self.source_format,
                "confidence": self.confidence,
                "extractionMethod": self.extraction_method,
                "segmentationMethod": self.segmentation_method,
                "attemptedMethods": list(self.attempted_methods),
            },
            "message": self.message,
        }
