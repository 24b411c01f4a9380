from abc import ABC, abstractmethod
from threading import Event

from ingredex.extraction.models import ExtractedText


class BaseExtractor(ABC):
    """Contract for all per-format extraction tiers."""

    method: str = ""

    @abstractmethod
    def extract(self, content: bytes) -> ExtractedText:
        """Turn raw upload bytes into text.

        Args:
            content: The upload's bytes, read from its temporary file.

        Returns:
            ExtractedText labelled with this tier's method and confidence.

        Raises:
            ExtractionError: if this tier cannot produce usable text.
        """

    def extract_until(self, content: bytes, stop: Event) -> ExtractedText:
        """Same as extract, but gives up between units of work once ``stop`` is set.

        Tiers built on one blocking call have nothing to interrupt.
        """
        return self.extract(content)
