from dataclasses import dataclass


@dataclass(frozen=True)
class OcrResult:
    """Recognized text and the mean confidence (0-100) of its words."""

    text: str
    mean_confidence: float
    word_count: int = 0
