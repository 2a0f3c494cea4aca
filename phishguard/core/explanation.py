"""
Explanation Generator
Turns heuristic evidence and model features into a readable, tiered report
"""

from typing import Dict, List

from phishguard.core.heuristic_scorer import HeuristicResult
from phishguard.core.risk_model import ModelResult

LOW_RISK_MESSAGE = "Low Risk: no phishing indicators were found in this content."

MAX_PHRASES = 3
MAX_KEYWORDS = 4
MODEL_SCORE_CUE = 20
UPPERCASE_CUE_RATIO = 0.1
SYMBOL_CUE_RATIO = 0.05

RECOMMENDATIONS = {
    "high": (
        "This content shows strong signs of phishing. Do not click any links, open attachments "
        "or reply with personal information. Delete it and report it to your IT security team."
    ),
    "medium": (
        "Exercise caution with this content. Verify the sender through an official channel "
        "before clicking links or sharing any information."
    ),
    "low": (
        "Only minor indicators were found, but stay cautious and confirm any unexpected "
        "request through a channel you trust."
    ),
}

TIER_LABELS = {"high": "High Risk", "medium": "Medium Risk", "low": "Low Risk"}


def _tier(score: int) -> str:
    if score > 60:
        return "high"
    if score > 30:
        return "medium"
    return "low"


class ExplanationGenerator:
    """Stateless formatter for analysis explanations"""

    def generate(self, score: int, heuristic: HeuristicResult, model: ModelResult) -> str:
        # Below 5 the evidence is ignored on purpose
        if score < 5:
            return LOW_RISK_MESSAGE

        tier = _tier(score)
        lines = [f"Overall assessment: {TIER_LABELS[tier]} ({score}/100)."]

        indicators = self._group_by_category(heuristic)
        if indicators:
            lines.append("")
            lines.append("Detected indicators:")
            for category, reasons in indicators.items():
                lines.append(f"- {category}: {' '.join(reasons)}")

        cues = self._linguistic_cues(model)
        if cues:
            lines.append("")
            lines.append("Linguistic cues:")
            lines.extend(cues)

        lines.append("")
        lines.append(f"Recommendation: {RECOMMENDATIONS[tier]}")
        return "\n".join(lines)

    @staticmethod
    def _group_by_category(heuristic: HeuristicResult) -> Dict[str, List[str]]:
        grouped: Dict[str, List[str]] = {}
        for item in heuristic.evidence:
            grouped.setdefault(item.category.value, []).append(item.reason)
        return grouped

    @staticmethod
    def _linguistic_cues(model: ModelResult) -> List[str]:
        features = model.features
        if not (features.flagged_ngrams or features.flagged_words or model.score > MODEL_SCORE_CUE):
            return []

        cues = [f"- The language model rates this wording {model.score:.0f}% likely to be phishing."]
        if features.flagged_ngrams:
            phrases = ", ".join(f"'{p}'" for p in features.flagged_ngrams[:MAX_PHRASES])
            cues.append(f"- Suspicious phrases: {phrases}.")
        if features.flagged_words:
            cues.append(f"- Flagged keywords: {', '.join(features.flagged_words[:MAX_KEYWORDS])}.")
        if features.uppercase_ratio > UPPERCASE_CUE_RATIO:
            cues.append("- An unusually large share of the text is written in capital letters.")
        if features.symbol_ratio > SYMBOL_CUE_RATIO:
            cues.append("- The text contains an unusual density of symbols and punctuation.")
        return cues
