"""
API tests using FastAPI's TestClient
The remote model is disabled and the history file lives in a temp directory.
"""

from phishguard.core.config import settings

from conftest import BENIGN_SAMPLE, PHISHING_SAMPLE


class TestAnalyzeEndpoints:

    def test_analyze_phishing(self, client):
        response = client.post("/api/analyze", json={"text": PHISHING_SAMPLE})
        assert response.status_code == 200
        data = response.json()
        assert data["label"] == "High Risk"
        assert data["engine"] == "local"
        assert data["score"] >= 95
        assert data["heuristic_evidence"][0]["rule_id"] == "urgency_language"
        assert "click here" in data["ml_features"]["flagged_ngrams"]

    def test_analyze_benign_with_source(self, client):
        response = client.post("/api/analyze", json={"text": BENIGN_SAMPLE, "source": "Email"})
        assert response.status_code == 200
        data = response.json()
        assert data["label"] == "Low Risk"
        assert data["text"] == f"[Email] {BENIGN_SAMPLE}"

    def test_blank_text_rejected(self, client):
        response = client.post("/api/analyze", json={"text": "   "})
        assert response.status_code == 400
        assert response.json()["detail"] == "Please enter text or a URL to analyze"
        assert client.get("/api/history").json()["count"] == 0

    def test_oversized_text_rejected(self, client, monkeypatch):
        monkeypatch.setattr(settings, "MAX_TEXT_LENGTH", 10)
        response = client.post("/api/analyze", json={"text": "x" * 11})
        assert response.status_code == 400

    def test_invalid_source_rejected(self, client):
        response = client.post("/api/analyze", json={"text": "hello", "source": "<script>"})
        assert response.status_code == 400

    def test_image_text(self, client):
        response = client.post(
            "/api/analyze/image-text",
            json={"filename": "screenshot.png", "text": PHISHING_SAMPLE},
        )
        assert response.status_code == 200
        assert response.json()["text"].startswith("[Image Analysis: screenshot.png] ")

    def test_image_text_rejects_traversal(self, client):
        response = client.post(
            "/api/analyze/image-text",
            json={"filename": "../etc/passwd", "text": PHISHING_SAMPLE},
        )
        assert response.status_code == 400


class TestHistoryEndpoints:

    def test_history_dashboard_and_clear(self, client):
        client.post("/api/analyze", json={"text": PHISHING_SAMPLE})
        client.post("/api/analyze", json={"text": BENIGN_SAMPLE})

        history = client.get("/api/history").json()
        assert history["count"] == 2
        assert [e["label"] for e in history["entries"]] == ["High Risk", "Low Risk"]

        dashboard = client.get("/api/dashboard").json()
        assert dashboard == {"low": 1, "medium": 0, "high": 1, "total": 2}

        report = client.get("/api/report")
        assert report.status_code == 200
        assert "attachment" in report.headers["content-disposition"]
        assert report.text.startswith("PhishGuard - Offline Analysis Report")
        assert "1. Risk Level: High Risk" in report.text

        assert client.delete("/api/history").json() == {"cleared": 2}
        assert client.get("/api/dashboard").json()["total"] == 0

    def test_history_persisted_to_file(self, client):
        client.post("/api/analyze", json={"text": BENIGN_SAMPLE})
        with open(settings.HISTORY_FILE, encoding="utf-8") as f:
            assert BENIGN_SAMPLE in f.read()


class TestHealthEndpoints:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_status(self, client):
        data = client.get("/api/status").json()
        assert data["rule_count"] == 18
        assert data["history_count"] == 0
        assert data["remote_model_enabled"] is False
        assert data["remote_model"] is None
