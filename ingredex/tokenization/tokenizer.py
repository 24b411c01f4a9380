"""Ingredient statement tokenizer.

The first delimiter (in priority order) that yields more than one segment
wins; segments are then cleaned and filtered. Order is preserved and
duplicates are kept.
"""

import re
import unicodedata

from ingredex.text.normalizer import TextNormalizer

_DELIMITERS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("comma", re.compile(r",")),
    ("semicolon", re.compile(r";")),
    ("sentence", re.compile(r"\.\s{2,}")),
    ("newline", re.compile(r"\n")),
    ("tab", re.compile(r"\t")),
    ("spaces", re.compile(r" {2,}")),
)

_BULLET_RE = re.compile(r"^[•‣⁃∙▪●◦■□·*>\-–—]+\s*")
_ORDINAL_RE = re.compile(r"^(?:\(\d+\)|\d+\s*[.)])\s+")
_EDGE_PUNCTUATION = " \t\n.,;:!?*\"'`“”‘’«»-–—_/\\|"
_DIGITS_RE = re.compile(r"^\d+$")
_WHITESPACE_RE = re.compile(r"\s+")

MIN_TOKEN_LENGTH = 2
MAX_TOKEN_LENGTH = 99

STOPWORDS = frozenset({"and", "or", "etc", "and/or", "und", "oder", "et", "ou", "ve", "dan", "atau"})


class IngredientTokenizer:
    """Turns one raw ingredient statement into an ordered list of ingredients."""

    def __init__(self, normalizer: TextNormalizer | None = None) -> None:
        self._normalizer = normalizer or TextNormalizer()

    def tokenize(self, text: str) -> list[str]:
        text = unicodedata.normalize("NFC", text)
        text = self._normalizer.strip_label(text)
        text = self._normalizer.remove_annotations(text)
        tokens: list[str] = []
        for segment in self.split(text):
            token = self.clean(segment)
            if self.is_valid(token):
                tokens.append(token)
        return tokens

    @staticmethod
    def split(text: str) -> list[str]:
        for _, pattern in _DELIMITERS:
            segments = [segment for segment in pattern.split(text) if segment.strip()]
            if len(segments) > 1:
                return segments
        return [text] if text.strip() else []

    @staticmethod
    def clean(segment: str) -> str:
        token = segment.strip()
        token = _BULLET_RE.sub("", token)
        token = _ORDINAL_RE.sub("", token)
        token = token.strip(_EDGE_PUNCTUATION)
        return _WHITESPACE_RE.sub(" ", token)

    @staticmethod
    def is_valid(token: str) -> bool:
        if not MIN_TOKEN_LENGTH <= len(token) <= MAX_TOKEN_LENGTH:
            return False
        if _DIGITS_RE.match(token):
            return False
        return token.lower() not in STOPWORDS
