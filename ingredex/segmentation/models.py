from dataclasses import dataclass
from enum import IntEnum

UNNAMED_PRODUCT = "Unnamed product"


class SegmentationStrategy(IntEnum):
    """Segmentation strategies in priority order (lower value wins)."""

    PIPE_DELIMITED = 1
    LABELED_HEADER = 2
    COLUMN_ALIGNED = 3
    AI_STRUCTURED = 4
    FLAT_FALLBACK = 5

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class ProductBlock:
    """One candidate product: raw name plus raw ingredient statement."""

    name: str
    ingredients_text: str
    strategy: SegmentationStrategy
    position: int


@dataclass(frozen=True)
class StrategyMatch:
    name: str
    ingredients_text: str
    consumed: int = 1
