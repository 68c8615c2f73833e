from __future__ import annotations
import re
from functools import lru_cache

from .base import SeverityMatcher


class SubstringMatcher(SeverityMatcher):
    """Literal, case-sensitive substring test. ``ERRORS`` counts as ``ERROR``."""
    NAME = "substring"

    def matches(self, line: str, token: str) -> bool:
        return token in line


class CaseInsensitiveMatcher(SeverityMatcher):
    NAME = "nocase"

    def matches(self, line: str, token: str) -> bool:
        return token.casefold() in line.casefold()


@lru_cache(maxsize=None)
def _word_regex(token: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(token) + r"\b")


class WordMatcher(SeverityMatcher):
    """Case-sensitive whole-word match, so ``ERRORS`` or ``NO_ERROR`` do not count."""
    NAME = "word"

    def matches(self, line: str, token: str) -> bool:
        return _word_regex(token).search(line) is not None
