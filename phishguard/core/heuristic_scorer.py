"""
Heuristic Scorer
Applies the rule table to a piece of text and adds category correlation bonuses
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence, Set, Tuple

from phishguard.core.rule_table import CATEGORY_BONUSES, Category, CategoryBonus, Rule, build_rules

MAX_SCORE = 100


def normalize(text: str) -> str:
    """Lower-case the text; every case-insensitive rule sees only this form"""
    return text.lower()


@dataclass(frozen=True)
class MatchEvidence:
    """One matched rule"""
    rule_id: str
    category: Category
    reason: str

    def to_dict(self) -> dict:
        return {"rule_id": self.rule_id, "category": self.category.value, "reason": self.reason}


@dataclass(frozen=True)
class HeuristicResult:
    """Outcome of the heuristic layer"""
    score: float
    base_score: int = 0
    evidence: Tuple[MatchEvidence, ...] = ()
    categories: FrozenSet[Category] = field(default_factory=frozenset)
    bonuses: Tuple[CategoryBonus, ...] = ()


class HeuristicScorer:
    """Weighted rule matching with de-duplication and correlation bonuses"""

    def __init__(
        self,
        rules: Optional[Sequence[Rule]] = None,
        bonuses: Sequence[CategoryBonus] = CATEGORY_BONUSES,
    ):
        self.rules = tuple(rules) if rules is not None else build_rules()
        self.bonuses = tuple(bonuses)

    def score(self, text: str) -> HeuristicResult:
        """
        Score raw text.

        Each rule adds its weight at most once however often it matches.
        Bonuses are added after the base sum and before clamping.
        """
        if not any(ch.isalnum() for ch in text):
            return HeuristicResult(score=0.0)

        normalized = normalize(text)
        total = 0
        evidence: List[MatchEvidence] = []
        seen: Set[str] = set()
        categories: Set[Category] = set()

        for rule in self.rules:
            if rule.id in seen:
                continue
            haystack = text if rule.case_sensitive else normalized
            if rule.matcher.matches(haystack):
                seen.add(rule.id)
                total += rule.weight
                categories.add(rule.category)
                evidence.append(MatchEvidence(rule.id, rule.category, rule.reason))

        applied = tuple(
            b for b in self.bonuses
            if b.first in categories and b.second in categories
        )
        base = total
        total += sum(b.bonus for b in applied)

        return HeuristicResult(
            score=float(min(MAX_SCORE, total)),
            base_score=base,
            evidence=tuple(evidence),
            categories=frozenset(categories),
            bonuses=applied,
        )
