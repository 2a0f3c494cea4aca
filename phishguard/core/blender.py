"""
Score blending and risk labels
The thresholds here are shared with the dashboard and reporting code.
"""

import math
from enum import Enum

HEURISTIC_WEIGHT = 0.5
MODEL_WEIGHT = 0.5

# Inclusive upper bounds
LOW_RISK_MAX = 30
MEDIUM_RISK_MAX = 60


class RiskLabel(Enum):
    """Risk label derived from the rounded score"""
    LOW = "Low Risk"
    MEDIUM = "Medium Risk"
    HIGH = "High Risk"


def blend(heuristic_score: float, model_score: float) -> float:
    """Combine both layers; stays real-valued, rounding happens at the record boundary"""
    return min(100.0, heuristic_score * HEURISTIC_WEIGHT + model_score * MODEL_WEIGHT)


def round_score(score: float) -> int:
    """Round half up and clamp to 0-100 (round() would round 30.5 down to 30)"""
    return max(0, min(100, int(math.floor(score + 0.5))))


def label_for_score(score: int) -> RiskLabel:
    if score > MEDIUM_RISK_MAX:
        return RiskLabel.HIGH
    if score > LOW_RISK_MAX:
        return RiskLabel.MEDIUM
    return RiskLabel.LOW
