"""
Tests for the command line entry point
"""

import io
import json

from phishguard.cli import main
from phishguard.core.scoring_engine import ScoringEngine

from conftest import BENIGN_SAMPLE, PHISHING_SAMPLE


def test_scores_file(tmp_path, capsys):
    path = tmp_path / "mail.txt"
    path.write_text(PHISHING_SAMPLE, encoding="utf-8")

    assert main(["--file", str(path)], engine=ScoringEngine()) == 0
    out = capsys.readouterr().out
    assert out.startswith("Risk Level: High Risk")
    assert "Recommendation:" in out


def test_scores_stdin_as_json(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(BENIGN_SAMPLE))

    assert main(["--json"], engine=ScoringEngine()) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["label"] == "Low Risk"
    assert data["heuristic_evidence"] == []


def test_empty_input_fails(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("  \n"))

    assert main([], engine=ScoringEngine()) == 1
    assert "stdin" in capsys.readouterr().err
