"""
Lexical feature extraction for the linear risk model
"""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from phishguard.core.heuristic_scorer import normalize

# Single-token weights. Negative entries are everyday business vocabulary.
KEYWORD_WEIGHTS: Dict[str, float] = {
    "verify": 0.9,
    "account": 0.5,
    "password": 0.9,
    "urgent": 0.8,
    "immediately": 0.7,
    "suspended": 0.9,
    "locked": 0.8,
    "unauthorized": 0.8,
    "login": 0.7,
    "confirm": 0.6,
    "click": 0.6,
    "bank": 0.6,
    "security": 0.4,
    "update": 0.4,
    "winner": 0.9,
    "prize": 0.9,
    "lottery": 1.0,
    "congratulations": 0.7,
    "claim": 0.7,
    "free": 0.5,
    "gift": 0.5,
    "limited": 0.4,
    "expires": 0.5,
    "credit": 0.5,
    "ssn": 1.0,
    "invoice": 0.5,
    "payment": 0.5,
    "refund": 0.6,
    "wire": 0.6,
    "bitcoin": 0.8,
    "kindly": 0.6,
    "dear": 0.2,
    # benign business vocabulary
    "meeting": -0.5,
    "agenda": -0.5,
    "team": -0.3,
    "report": -0.3,
    "review": -0.2,
    "project": -0.3,
    "draft": -0.3,
    "schedule": -0.4,
    "minutes": -0.3,
    "lunch": -0.4,
    "thanks": -0.4,
    "thank": -0.3,
    "regards": -0.4,
}

# Phrase weights, matched as substrings of the normalized text
NGRAM_WEIGHTS: Dict[str, float] = {
    "verify your": 1.0,
    "your account": 0.6,
    "click here": 0.9,
    "act now": 1.0,
    "limited time": 0.7,
    "you have won": 1.2,
    "claim your": 0.9,
    "confirm your": 0.8,
    "login here": 0.9,
    "account suspended": 1.1,
    "will be suspended": 1.0,
    "unusual activity": 0.9,
    "security alert": 0.8,
    "reset your password": 1.0,
    "wire transfer": 0.8,
    "gift card": 1.0,
    "dear customer": 0.8,
    "bit.ly": 1.2,
    "tinyurl": 1.2,
}

FLAGGED_WORD_THRESHOLD = 0.6

_PUNCTUATION_TABLE = str.maketrans({ch: " " for ch in ".,!?;:\"'"})
SYMBOL_CHARACTERS = frozenset("!@#$%^&*()_+-=[]{}|\\;:'\",.<>/?`~")


@dataclass(frozen=True)
class Features:
    """Features fed to the linear risk model"""
    keyword_score: float = 0.0
    ngram_score: float = 0.0
    uppercase_ratio: float = 0.0
    symbol_ratio: float = 0.0
    digit_ratio: float = 0.0
    flagged_words: Tuple[str, ...] = ()
    flagged_ngrams: Tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "Features":
        return cls()

    def to_dict(self) -> dict:
        return {
            "keyword_score": self.keyword_score,
            "ngram_score": self.ngram_score,
            "uppercase_ratio": self.uppercase_ratio,
            "symbol_ratio": self.symbol_ratio,
            "digit_ratio": self.digit_ratio,
            "flagged_words": list(self.flagged_words),
            "flagged_ngrams": list(self.flagged_ngrams),
        }


def tokenize(text: str) -> Tuple[str, ...]:
    """Normalize, blank out punctuation, split and de-duplicate preserving order"""
    tokens = normalize(text).translate(_PUNCTUATION_TABLE).split()
    return tuple(dict.fromkeys(tokens))


class FeatureExtractor:
    """Computes keyword, phrase and character-class features"""

    def __init__(
        self,
        keyword_weights: Optional[Mapping[str, float]] = None,
        ngram_weights: Optional[Mapping[str, float]] = None,
    ):
        self.keyword_weights = dict(keyword_weights if keyword_weights is not None else KEYWORD_WEIGHTS)
        self.ngram_weights = dict(ngram_weights if ngram_weights is not None else NGRAM_WEIGHTS)

    def extract(self, text: str) -> Features:
        normalized = normalize(text)

        keyword_score = 0.0
        flagged_words = []
        for token in tokenize(text):
            weight = self.keyword_weights.get(token)
            if weight is None:
                continue
            keyword_score += weight
            if weight > FLAGGED_WORD_THRESHOLD:
                flagged_words.append(token)

        ngram_score = 0.0
        flagged_ngrams = []
        for phrase, weight in self.ngram_weights.items():
            if phrase in normalized:
                ngram_score += weight
                flagged_ngrams.append(phrase)

        length = len(text)
        if length == 0:
            uppercase_ratio = symbol_ratio = digit_ratio = 0.0
        else:
            uppercase_ratio = sum(1 for ch in text if ch.isupper()) / length
            symbol_ratio = sum(1 for ch in text if ch in SYMBOL_CHARACTERS) / length
            digit_ratio = sum(1 for ch in text if ch.isdigit()) / length

        return Features(
            keyword_score=keyword_score,
            ngram_score=ngram_score,
            uppercase_ratio=uppercase_ratio,
            symbol_ratio=symbol_ratio,
            digit_ratio=digit_ratio,
            flagged_words=tuple(flagged_words),
            flagged_ngrams=tuple(flagged_ngrams),
        )
