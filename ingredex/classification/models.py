from dataclasses import dataclass, field
from enum import Enum


class Verdict(str, Enum):
    APPROVED = "APPROVED"
    PROHIBITED = "PROHIBITED"
    QUESTIONABLE = "QUESTIONABLE"
    VERIFY_SOURCE = "VERIFY_SOURCE"


class RiskLevel(str, Enum):
    VERY_LOW = "VERY_LOW"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"


@dataclass(frozen=True)
class ClassificationRequest:
    """What is sent to the classifier: a product and its ordered ingredients."""

    product_name: str
    ingredients: tuple[str, ...]


@dataclass(frozen=True)
class IngredientVerdict:
    """Classifier verdict for one ingredient."""

    name: str
    verdict: Verdict
    risk_level: RiskLevel
    category: str = ""
    rationale: str = ""
    synthetic: bool = False


@dataclass(frozen=True)
class ClassificationResult:
    """Classifier output for one product, in submission order."""

    product_name: str
    ingredients: list[IngredientVerdict] = field(default_factory=list)
    expected_count: int = 0

    @property
    def analyzed_count(self) -> int:
        return sum(1 for verdict in self.ingredients if not verdict.synthetic)

    @property
    def complete(self) -> bool:
        return self.analyzed_count >= self.expected_count


class ClassificationStatus(str, Enum):
    """Why a product does or does not carry verdicts.

    UNAVAILABLE means the analysis service was down or replied with something
    unusable; the document itself was read fine.
    """

    CLASSIFIED = "classified"
    UNAVAILABLE = "classification_unavailable"


@dataclass(frozen=True)
class ProductClassification:
    """Outcome of classifying one product within a batch."""

    product_name: str
    status: ClassificationStatus
    result: ClassificationResult | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is ClassificationStatus.CLASSIFIED
