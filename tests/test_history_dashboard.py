"""
Tests for the history store and the dashboard/report helpers
"""

from datetime import datetime

import pytest

from phishguard.services.analysis_record import Analysis
from phishguard.services.dashboard import REPORT_TITLE, RiskSummary, render_text_report, summarize
from phishguard.services.history_store import HistoryStore


def _analysis(score, text="sample", label="Low Risk"):
    return Analysis(text=text, score=score, label=label, time="2026-01-01T10:00:00", explanation="why")


class TestHistoryStore:

    def test_in_memory_store(self):
        store = HistoryStore(None)
        store.append(_analysis(10))
        assert len(store) == 1

    def test_persists_and_reloads(self, tmp_path):
        path = tmp_path / "nested" / "history.json"
        store = HistoryStore(path)
        store.append(_analysis(10, text="first"))
        store.append(_analysis(90, text="second", label="High Risk"))

        reloaded = HistoryStore(path)
        assert [e.text for e in reloaded.all()] == ["first", "second"]
        assert reloaded.all()[1].label == "High Risk"

    def test_all_returns_a_copy(self):
        store = HistoryStore(None)
        store.append(_analysis(10))
        store.all().clear()
        assert len(store) == 1

    @pytest.mark.parametrize("content", ["{broken", '{"text": "x"}', '[{"score": 3}]'])
    def test_corrupt_file_starts_empty(self, tmp_path, content):
        path = tmp_path / "history.json"
        path.write_text(content, encoding="utf-8")
        assert len(HistoryStore(path)) == 0

    def test_unreadable_file_is_kept_aside(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text('[{"text": "old", "score": 12, "label": "Low Risk"', encoding="utf-8")

        store = HistoryStore(path)
        store.append(_analysis(50, text="new"))

        kept = list(tmp_path.glob("history.json.corrupt-*"))
        assert len(kept) == 1
        assert '"old"' in kept[0].read_text(encoding="utf-8")
        assert [e.text for e in HistoryStore(path).all()] == ["new"]

    def test_save_leaves_no_temp_files(self, tmp_path):
        path = tmp_path / "history.json"
        store = HistoryStore(path)
        for score in (10, 20, 30):
            store.append(_analysis(score))
        assert [p.name for p in tmp_path.iterdir()] == ["history.json"]

    def test_clear(self, tmp_path):
        path = tmp_path / "history.json"
        store = HistoryStore(path)
        store.append(_analysis(10))
        store.append(_analysis(20))
        assert store.clear() == 2
        assert len(HistoryStore(path)) == 0


class TestDashboard:

    def test_summarize_uses_label_thresholds(self):
        history = [_analysis(s) for s in (0, 30, 31, 60, 61, 100)]
        summary = summarize(history)
        assert summary == RiskSummary(low=2, medium=2, high=2)
        assert summary.to_dict() == {"low": 2, "medium": 2, "high": 2, "total": 6}

    def test_summarize_empty(self):
        assert summarize([]).total == 0

    def test_text_report(self):
        history = [
            _analysis(12, text="hello team"),
            _analysis(88, text="[Image Analysis: x.png] verify now", label="High Risk"),
        ]
        report = render_text_report(history, generated_at=datetime(2026, 3, 4, 5, 6, 7))
        lines = report.splitlines()

        assert lines[0] == REPORT_TITLE
        assert lines[1] == "Report generated on: 2026-03-04T05:06:07"
        assert lines[2] == "Total analyses: 2 (Low: 1, Medium: 0, High: 1)"
        assert "1. Risk Level: Low Risk (12%)" in lines
        assert "2. Risk Level: High Risk (88%)" in lines
        assert "   Content: [Image Analysis: x.png] verify now" in lines
        assert "   Reasoning: why" in lines
