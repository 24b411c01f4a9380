from dataclasses import dataclass, field
from enum import Enum

from ingredex.ingestion.models import FormatKind


class Confidence(str, Enum):
    """Categorical quality signal set by the tier that produced the text."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class ExtractedText:
    """Textual representation of one upload, as produced by a single tier."""

    text: str
    method: str
    confidence: Confidence
    source_format: FormatKind = FormatKind.UNKNOWN
    ocr_confidence: float | None = None
    image_png: bytes | None = field(default=None, repr=False)

    @property
    def is_ocr(self) -> bool:
        return self.ocr_confidence is not None
