"""
Shared fixtures for the PhishGuard test suite
"""

import pytest
from fastapi.testclient import TestClient

from phishguard.core.config import settings
from phishguard.core.scoring_engine import ScoringEngine
from phishguard.services.history_store import HistoryStore

PHISHING_SAMPLE = "URGENT: verify your account immediately, click here http://bit.ly/x"
BENIGN_SAMPLE = "Hi team, attaching the Q3 report for your review. Thanks!"


@pytest.fixture
def engine():
    return ScoringEngine()


@pytest.fixture
def memory_history():
    return HistoryStore(None)


@pytest.fixture
def client(tmp_path, monkeypatch):
    """API client with an isolated history file and the remote model disabled"""
    monkeypatch.setattr(settings, "HISTORY_FILE", str(tmp_path / "history.json"))
    monkeypatch.setattr(settings, "REMOTE_MODEL_ENABLED", False)

    from main import app

    with TestClient(app) as test_client:
        yield test_client
