"""Turns the structuring model's JSON into ProductBlocks.

Unlike classification, entries that are malformed are dropped rather than
failing the whole reply: a partially usable answer is still better than
falling through to the flat fallback.
"""

from typing import Any

from ingredex.logging.logger import Log
from ingredex.segmentation.models import UNNAMED_PRODUCT, ProductBlock, SegmentationStrategy
from ingredex.structuring.exceptions import StructuringError


def validate_and_build(data: dict[str, Any]) -> list[ProductBlock]:
    """Validate parsed JSON and build ProductBlocks in reply order.

    Raises:
        StructuringError: if the reply has no ``products`` list.
    """
    products = data.get("products")
    if not isinstance(products, list):
        raise StructuringError("'products' must be a list")

    blocks: list[ProductBlock] = []
    for index, item in enumerate(products):
        block = _build_block(item, position=len(blocks))
        if block is None:
            Log.warning(f"Structured product at index {index} dropped: malformed entry")
            continue
        blocks.append(block)
    return blocks


def _build_block(raw: Any, position: int) -> ProductBlock | None:
    if not isinstance(raw, dict):
        return None
    ingredients = _coerce_ingredients(raw.get("ingredients"))
    if not ingredients:
        return None
    name = raw.get("productName")
    if not isinstance(name, str) or not name.strip():
        name = UNNAMED_PRODUCT
    return ProductBlock(
        name=name.strip(),
        ingredients_text=ingredients,
        strategy=SegmentationStrategy.AI_STRUCTURED,
        position=position,
    )


def _coerce_ingredients(raw: Any) -> str:
    if isinstance(raw, str):
        return raw.strip()
    if isinstance(raw, list):
        return ", ".join(str(item).strip() for item in raw if isinstance(item, str) and item.strip())
    return ""
