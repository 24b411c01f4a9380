"""Fallback orchestration for extraction and segmentation tiers."""

from dataclasses import replace
from functools import partial
from threading import Event

from ingredex.extraction.base import BaseExtractor
from ingredex.extraction.models import ExtractedText
from ingredex.ingestion.models import FormatKind
from ingredex.processor.cancellation import CancellationToken
from ingredex.processor.exceptions import NoProductsFoundError
from ingredex.processor.tiers import Tier, TierSuccess, attempt_tiers
from ingredex.segmentation.models import ProductBlock
from ingredex.segmentation.segmenter import ProductSegmenter
from ingredex.structuring.structurer import LLMStructurer


class ExtractionOrchestrator:
    """Tries each extractor registered for a format until one yields text."""

    def __init__(
        self,
        chains: dict[FormatKind, list[BaseExtractor]],
        *,
        tier_timeout_seconds: float | None = None,
    ) -> None:
        self._chains = chains
        self._tier_timeout_seconds = tier_timeout_seconds

    def extract(
        self,
        content: bytes,
        kind: FormatKind,
        cancellation: CancellationToken | None = None,
    ) -> TierSuccess[ExtractedText]:
        """Raises TiersExhaustedError when no tier for ``kind`` produced text."""
        chain = self._chains.get(kind) or self._chains.get(FormatKind.UNKNOWN, [])
        tiers: list[Tier[ExtractedText]] = []
        for extractor in chain:
            stop = Event()
            tiers.append(
                Tier(
                    name=extractor.method,
                    attempt=partial(extractor.extract_until, content, stop),
                    timeout_seconds=self._tier_timeout_seconds,
                    stop=stop,
                )
            )
        success = attempt_tiers(tiers, cancellation=cancellation)
        return replace(success, value=replace(success.value, source_format=kind))


class SegmentationOrchestrator:
    """Heuristic strategies, optional AI structuring, then the flat fallback.

    OCR text is noisy enough that the AI tier goes first when available.
    """

    HEURISTIC = "heuristic_segmentation"
    AI_STRUCTURED = "ai_structured"
    FLAT_FALLBACK = "flat_fallback"

    def __init__(
        self,
        segmenter: ProductSegmenter,
        structurer: LLMStructurer | None = None,
        *,
        tier_timeout_seconds: float | None = None,
    ) -> None:
        self._segmenter = segmenter
        self._structurer = structurer
        self._tier_timeout_seconds = tier_timeout_seconds

    def segment(
        self,
        extracted: ExtractedText,
        text: str,
        cancellation: CancellationToken | None = None,
    ) -> TierSuccess[list[ProductBlock]]:
        """Raises TiersExhaustedError when no tier found any product."""
        heuristic = Tier(
            name=self.HEURISTIC,
            attempt=lambda: _require_blocks(self._segmenter.segment(text), self.HEURISTIC),
        )
        flat = Tier(
            name=self.FLAT_FALLBACK,
            attempt=lambda: _require_blocks(self._segmenter.flat_fallback(text), self.FLAT_FALLBACK),
        )
        tiers = [heuristic, flat]
        if self._structurer is not None:
            structurer = self._structurer
            ai = Tier(
                name=self.AI_STRUCTURED,
                attempt=lambda: _require_blocks(
                    structurer.structure(text, image_png=extracted.image_png), self.AI_STRUCTURED
                ),
                timeout_seconds=self._tier_timeout_seconds,
            )
            tiers = [ai, heuristic, flat] if extracted.is_ocr else [heuristic, ai, flat]
        return attempt_tiers(tiers, cancellation=cancellation)


def _require_blocks(blocks: list[ProductBlock], method: str) -> list[ProductBlock]:
    if not blocks:
        raise NoProductsFoundError(f"{method} found no products")
    return blocks
