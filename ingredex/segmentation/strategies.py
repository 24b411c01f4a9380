"""Line-level segmentation strategies.

Each strategy inspects the line at ``index`` (and possibly the one after it)
and either claims it with a StrategyMatch or leaves it for the next
strategy. ``consumed`` tells the segmenter how many lines were claimed.
"""

import re
from abc import ABC, abstractmethod
from typing import ClassVar

from ingredex.segmentation.models import UNNAMED_PRODUCT, SegmentationStrategy, StrategyMatch
from ingredex.text.labels import INGREDIENT_LABELS
from ingredex.text.normalizer import TextNormalizer, fold

_NAME_PREFIX_RE = re.compile(
    r"^\s*(?:(?:product(?:\s+name)?|item|name|title|no\.?)\s*#?\s*\d*\s*(?:[:.)]|[-–]\s)\s*|\d+\s*[.)]\s+)",
    re.IGNORECASE,
)
_NUMBERED_HEADER_RE = re.compile(
    r"^\s*(?:product|item|no\.?|#)\s*#?\s*\d+\s*[-–:.)]\s*(?P<name>.+)$",
    re.IGNORECASE,
)
_NAMED_HEADER_RE = re.compile(
    r"^\s*(?:product\s+name|product|item|name|title)\s*(?::|[-–]\s)\s*(?P<name>.+)$",
    re.IGNORECASE,
)
_BANNER_HEADER_RE = re.compile(
    r"^\s*(?P<mark>[*=#~_\-])(?P=mark){2,}\s*(?P<name>[^*=#~_\-].*?)\s*[*=#~_\-]*\s*$"
)
_HEADER_LABEL_ONLY_RE = re.compile(
    r"^\s*(?:product(?:\s+name)?|item|name|title)\s*#?\s*\d*\s*$", re.IGNORECASE
)
_COLUMN_SPLIT_RE = re.compile(r"\s{2,}|\t")


def clean_product_name(raw: str, normalizer: TextNormalizer) -> str:
    """Drop numbering/labelling conventions such as "Product 1:" from a name."""
    name = normalizer.normalize(_NAME_PREFIX_RE.sub("", raw, count=1))
    return name.strip(" :-–|*=#") or UNNAMED_PRODUCT


def parse_header(line: str) -> str | None:
    """Return the product name if ``line`` is a product header, else None."""
    for pattern in (_NUMBERED_HEADER_RE, _NAMED_HEADER_RE, _BANNER_HEADER_RE):
        match = pattern.match(line)
        if match:
            name = match.group("name").strip(" :-–*=#")
            if name:
                return name
    return None


def _is_label_only(text: str) -> bool:
    return fold(text).strip(" :") in INGREDIENT_LABELS


class BaseSegmentationStrategy(ABC):
    """Contract for line-oriented segmentation strategies."""

    strategy: ClassVar[SegmentationStrategy]

    def __init__(self, normalizer: TextNormalizer | None = None) -> None:
        self._normalizer = normalizer or TextNormalizer()

    def match(self, lines: list[str], index: int) -> bool:
        return self.apply(lines, index) is not None

    @abstractmethod
    def apply(self, lines: list[str], index: int) -> StrategyMatch | None:
        """Claim the line at ``index``, or return None to pass."""


class PipeDelimitedStrategy(BaseSegmentationStrategy):
    """``Name | Ingredients`` or ``Name: a, b, c`` on a single line."""

    strategy = SegmentationStrategy.PIPE_DELIMITED

    def apply(self, lines: list[str], index: int) -> StrategyMatch | None:
        line = lines[index]
        if "|" in line:
            return self._apply_pipe(line)
        return self._apply_colon(line)

    def _apply_pipe(self, line: str) -> StrategyMatch | None:
        parts = [part.strip() for part in line.split("|") if part.strip()]
        if len(parts) < 2:
            return None
        name, rest = parts[0], parts[1:]
        ingredients = rest[0] if len(rest) == 1 else next((p for p in rest if "," in p), rest[0])
        # Header row of a rendered table.
        if _is_label_only(ingredients):
            return None
        return StrategyMatch(
            name=clean_product_name(name, self._normalizer),
            ingredients_text=ingredients,
        )

    def _apply_colon(self, line: str) -> StrategyMatch | None:
        if ":" not in line or self._normalizer.has_ingredients_label(line):
            return None
        left, _, right = line.partition(":")
        left, right = left.strip(), right.strip()
        if not left or "," not in right or "," in left:
            return None
        if _HEADER_LABEL_ONLY_RE.match(left) or len(left) > 80:
            return None
        return StrategyMatch(
            name=clean_product_name(left, self._normalizer),
            ingredients_text=right,
        )


class LabeledHeaderStrategy(BaseSegmentationStrategy):
    """A product header line followed by an ingredients-label line."""

    strategy = SegmentationStrategy.LABELED_HEADER

    def apply(self, lines: list[str], index: int) -> StrategyMatch | None:
        if index + 1 >= len(lines):
            return None
        name = parse_header(lines[index])
        if name is None:
            return None
        next_line = lines[index + 1]
        if not self._normalizer.has_ingredients_label(next_line):
            return None
        return StrategyMatch(
            name=clean_product_name(name, self._normalizer),
            ingredients_text=self._normalizer.strip_label(next_line).strip(),
            consumed=2,
        )


class ColumnAlignedStrategy(BaseSegmentationStrategy):
    """Name and comma-separated ingredients in two whitespace-aligned columns."""

    strategy = SegmentationStrategy.COLUMN_ALIGNED

    def apply(self, lines: list[str], index: int) -> StrategyMatch | None:
        parts = [part.strip() for part in _COLUMN_SPLIT_RE.split(lines[index].strip()) if part.strip()]
        if len(parts) != 2 or "," not in parts[1]:
            return None
        return StrategyMatch(
            name=clean_product_name(parts[0], self._normalizer),
            ingredients_text=parts[1],
        )


DEFAULT_STRATEGIES: tuple[type[BaseSegmentationStrategy], ...] = (
    PipeDelimitedStrategy,
    LabeledHeaderStrategy,
    ColumnAlignedStrategy,
)
