"""
Tests for the end-to-end scoring engine
"""

import pytest

from phishguard.core.blender import RiskLabel, label_for_score
from phishguard.core.explanation import LOW_RISK_MESSAGE
from phishguard.core.scoring_engine import ScoreReport, ScoringEngine

from conftest import BENIGN_SAMPLE, PHISHING_SAMPLE


class TestScoringEngine:

    def test_phishing_sample_is_high_risk(self, engine):
        report = engine.score(PHISHING_SAMPLE)
        assert report.score >= 95
        assert report.label is RiskLabel.HIGH
        assert report.explanation.startswith("Overall assessment: High Risk")
        assert "Urgency" in report.explanation
        assert "Suspicious Links" in report.explanation
        assert "Do not click any links" in report.explanation

    def test_benign_sample_is_low_risk(self, engine):
        report = engine.score(BENIGN_SAMPLE)
        assert report.score < 5
        assert report.label is RiskLabel.LOW
        assert report.explanation == LOW_RISK_MESSAGE
        assert report.heuristic_evidence == ()

    def test_empty_input(self, engine):
        report = engine.score("")
        assert report.score == 0
        assert report.label is RiskLabel.LOW
        assert report.explanation == LOW_RISK_MESSAGE

    def test_symbols_only_input(self, engine):
        report = engine.score("!!!!")
        assert report.heuristic_score == 0
        assert report.heuristic_evidence == ()
        assert 0 <= report.score <= 100

    @pytest.mark.parametrize("text", [
        PHISHING_SAMPLE,
        BENIGN_SAMPLE,
        "URGENT " * 5000,
        "Ünïcödé ✉️ 账户 验证 - http://bit.ly/ü",
        "\x00\t\n",
    ])
    def test_score_in_range_and_label_consistent(self, engine, text):
        report = engine.score(text)
        assert isinstance(report.score, int)
        assert 0 <= report.score <= 100
        assert report.label is label_for_score(report.score)
        assert report.blended_score == pytest.approx(
            min(100, 0.5 * report.heuristic_score + 0.5 * report.ml_score)
        )

    def test_deterministic(self, engine):
        assert engine.score(PHISHING_SAMPLE) == engine.score(PHISHING_SAMPLE)
        assert ScoringEngine().score(PHISHING_SAMPLE) == engine.score(PHISHING_SAMPLE)

    def test_report_serializes(self, engine):
        data = engine.score(PHISHING_SAMPLE).to_dict()
        assert data["label"] == "High Risk"
        assert data["heuristic_evidence"][0] == {
            "rule_id": "urgency_language",
            "category": "Urgency",
            "reason": data["heuristic_evidence"][0]["reason"],
        }
        assert "bit.ly" in data["ml_features"]["flagged_ngrams"]
        assert {"categories": ["Authority", "Urgency"], "bonus": 20} in data["bonuses"]

    def test_report_type(self, engine):
        assert isinstance(engine.score("hello"), ScoreReport)
