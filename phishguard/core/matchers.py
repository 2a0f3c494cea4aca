"""
Text matchers used by the rule table
Each matcher answers one question: does this text trigger me?
"""

import re
from typing import Iterable, Pattern

_TOKEN_PATTERN = re.compile(r"\w+")


class Matcher:
    """Base matcher interface"""

    def matches(self, text: str) -> bool:
        raise NotImplementedError


class KeywordSet(Matcher):
    """Matches when any keyword appears as a whole token"""

    def __init__(self, words: Iterable[str]):
        self.words = frozenset(w.lower() for w in words)

    def matches(self, text: str) -> bool:
        return any(token in self.words for token in _TOKEN_PATTERN.findall(text))

    def __repr__(self) -> str:
        return f"KeywordSet({sorted(self.words)})"


class PhraseContains(Matcher):
    """Matches when any phrase is contained in the text"""

    def __init__(self, phrases: Iterable[str]):
        self.phrases = tuple(p.lower() for p in phrases)

    def matches(self, text: str) -> bool:
        return any(phrase in text for phrase in self.phrases)

    def __repr__(self) -> str:
        return f"PhraseContains({list(self.phrases)})"


class RegexLike(Matcher):
    """Full regular-expression matcher"""

    def __init__(self, pattern: str, case_sensitive: bool = False):
        flags = 0 if case_sensitive else re.IGNORECASE
        self.pattern: Pattern[str] = re.compile(pattern, flags)
        self.case_sensitive = case_sensitive

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def __repr__(self) -> str:
        return f"RegexLike({self.pattern.pattern!r})"
