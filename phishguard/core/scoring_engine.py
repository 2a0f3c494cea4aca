"""
Content Risk Scoring Engine
Runs the heuristic layer and the linear model on the same text, blends the two
scores and explains the result. Pure and synchronous: no I/O after construction.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from phishguard.core.blender import RiskLabel, blend, label_for_score, round_score
from phishguard.core.config import settings
from phishguard.core.explanation import ExplanationGenerator
from phishguard.core.feature_extractor import Features
from phishguard.core.heuristic_scorer import HeuristicScorer, MatchEvidence
from phishguard.core.risk_model import LinearRiskModel
from phishguard.core.rule_table import CATEGORY_BONUSES, CategoryBonus, Rule, build_rules, load_rule_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreReport:
    """Complete scoring result for one text"""
    score: int
    label: RiskLabel
    explanation: str
    heuristic_evidence: Tuple[MatchEvidence, ...]
    ml_features: Features
    blended_score: float
    heuristic_score: float
    ml_score: float
    bonuses: Tuple[CategoryBonus, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "label": self.label.value,
            "explanation": self.explanation,
            "heuristic_evidence": [e.to_dict() for e in self.heuristic_evidence],
            "ml_features": self.ml_features.to_dict(),
            "blended_score": round(self.blended_score, 2),
            "heuristic_score": round(self.heuristic_score, 2),
            "ml_score": round(self.ml_score, 2),
            "bonuses": [
                {"categories": [b.first.value, b.second.value], "bonus": b.bonus}
                for b in self.bonuses
            ],
        }


class ScoringEngine:
    """Heuristic + linear model scorer with explanation"""

    def __init__(
        self,
        rules: Optional[Sequence[Rule]] = None,
        bonuses: Sequence[CategoryBonus] = CATEGORY_BONUSES,
        model: Optional[LinearRiskModel] = None,
        explainer: Optional[ExplanationGenerator] = None,
    ):
        self.heuristics = HeuristicScorer(rules, bonuses)
        self.model = model or LinearRiskModel()
        self.explainer = explainer or ExplanationGenerator()

    def score(self, text: str) -> ScoreReport:
        heuristic = self.heuristics.score(text)
        model = self.model.predict(text)

        blended = blend(heuristic.score, model.score)
        final = round_score(blended)
        explanation = self.explainer.generate(final, heuristic, model)

        return ScoreReport(
            score=final,
            label=label_for_score(final),
            explanation=explanation,
            heuristic_evidence=heuristic.evidence,
            ml_features=model.features,
            blended_score=blended,
            heuristic_score=heuristic.score,
            ml_score=model.score,
            bonuses=heuristic.bonuses,
        )


# Global instance
_engine: Optional[ScoringEngine] = None


def get_scoring_engine() -> ScoringEngine:
    """Get or create the global scoring engine (rule overrides read once)"""
    global _engine
    if _engine is None:
        config = load_rule_config(settings.RULES_CONFIG_FILE)
        rules = build_rules(config)
        _engine = ScoringEngine(rules=rules)
        logger.info(f"Scoring engine initialized with {len(rules)} rules")
    return _engine


def score(text: str) -> ScoreReport:
    """Convenience function to score a text with the global engine"""
    return get_scoring_engine().score(text)
