from ingredex.logging.logger import Log
from ingredex.segmentation.models import (
    UNNAMED_PRODUCT,
    ProductBlock,
    SegmentationStrategy,
)
from ingredex.segmentation.strategies import (
    DEFAULT_STRATEGIES,
    BaseSegmentationStrategy,
    clean_product_name,
    parse_header,
)
from ingredex.text.normalizer import TextNormalizer


class ProductSegmenter:
    """Splits layout-normalized text into ordered ProductBlocks.

    Strategies are tried in list order for every line; the first one that
    matches owns the line (and any line it consumes), so no line feeds two
    blocks. Lines no strategy claims are skipped.
    """

    def __init__(
        self,
        strategies: list[BaseSegmentationStrategy] | None = None,
        normalizer: TextNormalizer | None = None,
    ) -> None:
        self._normalizer = normalizer or TextNormalizer()
        if strategies is None:
            strategies = [strategy_cls(self._normalizer) for strategy_cls in DEFAULT_STRATEGIES]
        self._strategies = strategies

    def segment(self, text: str) -> list[ProductBlock]:
        """Run the line strategies only. May return an empty list."""
        lines = [line for line in text.split("\n") if line.strip()]
        blocks: list[ProductBlock] = []
        index = 0
        while index < len(lines):
            consumed = 1
            for strategy in self._strategies:
                match = strategy.apply(lines, index)
                if match is None:
                    continue
                consumed = max(1, match.consumed)
                if match.ingredients_text.strip():
                    blocks.append(
                        ProductBlock(
                            name=match.name,
                            ingredients_text=match.ingredients_text.strip(),
                            strategy=strategy.strategy,
                            position=len(blocks),
                        )
                    )
                    Log.debug(f"{strategy.strategy.label} matched line {index + 1}: {match.name!r}")
                break
            index += consumed
        return blocks

    def flat_fallback(self, text: str) -> list[ProductBlock]:
        """Treat the whole document as one implicit product.

        Comma-bearing lines are taken as the ingredient statement when there
        are any; otherwise every line is kept so the tokenizer can split on
        newlines.
        """
        lines = [line.strip() for line in text.split("\n") if line.strip()]
        if not lines:
            return []

        name = UNNAMED_PRODUCT
        header = parse_header(lines[0]) if "," not in lines[0] else None
        if header is not None:
            name = clean_product_name(header, self._normalizer)
            lines = lines[1:]

        comma_lines = [line for line in lines if "," in line]
        if comma_lines:
            ingredients = ", ".join(self._normalizer.strip_label(line).strip() for line in comma_lines)
        else:
            ingredients = "\n".join(self._normalizer.strip_label(line).strip() for line in lines)

        if not ingredients.strip(" ,\n"):
            return []
        return [
            ProductBlock(
                name=name,
                ingredients_text=ingredients.strip(),
                strategy=SegmentationStrategy.FLAT_FALLBACK,
                position=0,
            )
        ]

    def segment_with_fallback(self, text: str) -> list[ProductBlock]:
        return self.segment(text) or self.flat_fallback(text)
