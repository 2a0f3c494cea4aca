"""
Linear Risk Model
Fixed, hand-specified linear combination of features passed through a sigmoid.
No training or learned artifact is involved.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

from phishguard.core.feature_extractor import FeatureExtractor, Features

# exp() overflows a float just above 709
LOGIT_LIMIT = 50.0


@dataclass(frozen=True)
class ModelWeights:
    """Model coefficients"""
    keyword: float = 1.2
    ngram: float = 1.5
    uppercase: float = 5.0
    symbol: float = 3.0
    digit: float = 1.5
    bias: float = -2.0


@dataclass(frozen=True)
class ModelResult:
    """Outcome of the linear model layer"""
    score: float
    probability: float = 0.0
    logit: float = 0.0
    features: Features = field(default_factory=Features.empty)


def sigmoid(x: float) -> float:
    x = max(-LOGIT_LIMIT, min(LOGIT_LIMIT, x))
    return 1.0 / (1.0 + math.exp(-x))


class LinearRiskModel:
    """Deterministic stand-in for a learned text classifier"""

    def __init__(
        self,
        weights: Optional[ModelWeights] = None,
        extractor: Optional[FeatureExtractor] = None,
    ):
        self.weights = weights or ModelWeights()
        self.extractor = extractor or FeatureExtractor()

    def logit(self, features: Features) -> float:
        w = self.weights
        return (
            features.keyword_score * w.keyword
            + features.ngram_score * w.ngram
            + features.uppercase_ratio * w.uppercase
            + features.symbol_ratio * w.symbol
            + features.digit_ratio * w.digit
            + w.bias
        )

    def predict(self, text: str) -> ModelResult:
        """Score text on a 0-100 scale. Blank text scores 0 without running the model."""
        if not text.strip():
            return ModelResult(score=0.0)

        features = self.extractor.extract(text)
        logit = self.logit(features)
        probability = sigmoid(logit)
        return ModelResult(
            score=min(100.0, probability * 100.0),
            probability=probability,
            logit=logit,
            features=features,
        )
