"""Format-independent text cleanup.

Two levels are exposed. ``normalize_layout`` is applied once to a whole
document and keeps its line structure so the segmenter can still see lines,
pipes and aligned columns. ``normalize`` is the full transform (label
stripping, annotation removal, whitespace collapse) and is applied to
product names and ingredient statements after segmentation.
"""

import re
import threading
import unicodedata
from functools import lru_cache

import icu

from ingredex.text.labels import INGREDIENT_LABELS, LABEL_SEPARATORS

_ZERO_WIDTH = dict.fromkeys(map(ord, "\u200b\u200c\u200d\u2060\ufeff"), None)
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_TABLE_RULE_RE = re.compile(r"^\s*\|?\s*:?-{3,}:?\s*(\|\s*:?-{3,}:?\s*)*\|?\s*$")
_WHITESPACE_RE = re.compile(r"\s+")
_PARENS_RE = re.compile(r"\([^()]*\)")
_BRACKETS_RE = re.compile(r"\[[^\[\]]*\]")

_LABEL_RE = re.compile(
    r"^\s*(?:"
    + "|".join(re.escape(label) for label in sorted(INGREDIENT_LABELS, key=len, reverse=True))
    + r")\s*["
    + re.escape(LABEL_SEPARATORS)
    + r"]\s*"
)

_transliterator = icu.Transliterator.createInstance("Latin-ASCII; Lower")
_transliterator_lock = threading.Lock()


@lru_cache(maxsize=4096)
def _fold_char(char: str) -> str:
    with _transliterator_lock:
        return _transliterator.transliterate(char)


def fold(text: str) -> str:
    """Accent- and case-insensitive form of ``text`` used for matching only."""
    return "".join(_fold_char(char) for char in text)


class TextNormalizer:
    """Strips boilerplate and noise from extracted text."""

    def normalize_layout(self, text: str) -> str:
        text = unicodedata.normalize("NFC", text)
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        text = text.translate(_ZERO_WIDTH).replace("\u00a0", " ")
        text = _CONTROL_RE.sub("", text)
        lines = []
        for line in text.split("\n"):
            line = line.rstrip()
            if not line.strip() or _TABLE_RULE_RE.match(line):
                continue
            lines.append(line)
        return "\n".join(lines)

    def normalize(self, text: str) -> str:
        text = unicodedata.normalize("NFC", text)
        text = self.strip_label(text)
        text = self.remove_annotations(text)
        return self.collapse_whitespace(text)

    def strip_label(self, text: str) -> str:
        """Remove a leading "Ingredients:" style label in any supported language."""
        end = self._label_end(text)
        return text[end:] if end else text

    def has_ingredients_label(self, text: str) -> bool:
        return self._label_end(text) > 0

    @staticmethod
    def remove_annotations(text: str) -> str:
        """Drop parenthetical and bracketed asides, innermost first."""
        previous = None
        while previous != text:
            previous = text
            text = _PARENS_RE.sub(" ", text)
            text = _BRACKETS_RE.sub(" ", text)
        return text

    @staticmethod
    def collapse_whitespace(text: str) -> str:
        return _WHITESPACE_RE.sub(" ", text).strip()

    @staticmethod
    def _label_end(text: str) -> int:
        """Offset in ``text`` just past a leading label, or 0 if there is none.

        Folding may change string length, so the match is found on the
        folded form and mapped back by folding the original one character
        at a time.
        """
        head = text[:80]
        match = _LABEL_RE.match(fold(head))
        if match is None:
            return 0
        target = match.end()
        folded_length = 0
        for index, char in enumerate(head):
            if folded_length >= target:
                return index
            folded_length += len(_fold_char(char))
        return len(head)
