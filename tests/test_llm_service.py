"""
Tests for the optional remote model service
The Ollama runnable is replaced with a RunnableLambda; no server is contacted.
"""

import asyncio
import time

import pytest
from langchain_core.runnables import RunnableLambda

from phishguard.core.config import settings
from phishguard.services.llm_service import (
    MalformedRemoteResponse,
    RemoteAssessment,
    RemoteModelError,
    RemoteModelService,
    ResourceUnavailable,
    get_remote_service,
    parse_assessment,
)


def _service(responder, timeout=5.0):
    service = RemoteModelService(model="test-model", base_url="http://localhost:1", timeout=timeout)
    service._available = True
    service._llm = RunnableLambda(responder)
    return service


class TestParseAssessment:

    def test_well_formed(self):
        result = parse_assessment("RISK_SCORE: 82\nEXPLANATION: Asks for a password.")
        assert result == RemoteAssessment(score=82, explanation="Asks for a password.")

    def test_tolerates_surrounding_chatter(self):
        response = "Sure!\n  RISK_SCORE: 10.\n  EXPLANATION: Looks like a normal note.\nHope that helps"
        assert parse_assessment(response).score == 10

    @pytest.mark.parametrize("response", [
        "EXPLANATION: no score here",
        "RISK_SCORE: high\nEXPLANATION: words",
        "RISK_SCORE: 140\nEXPLANATION: out of range",
        "RISK_SCORE: -1\nEXPLANATION: out of range",
        "RISK_SCORE: 50",
        "",
    ])
    def test_malformed(self, response):
        with pytest.raises(MalformedRemoteResponse):
            parse_assessment(response)


class TestRemoteModelService:

    def test_assess_success(self):
        service = _service(lambda prompt: "RISK_SCORE: 91\nEXPLANATION: Credential lure.")
        result = asyncio.run(service.assess("verify your account"))
        assert result.score == 91
        assert result.explanation == "Credential lure."

    def test_prompt_includes_truncated_text(self):
        seen = {}

        def responder(prompt):
            seen["prompt"] = prompt.to_string()
            return "RISK_SCORE: 5\nEXPLANATION: Fine."

        asyncio.run(_service(responder).assess("x" * 5000))
        assert "x" * 1500 in seen["prompt"]
        assert "x" * 1501 not in seen["prompt"]

    def test_unavailable_raises(self):
        service = _service(lambda prompt: "unused")
        service._available = False
        with pytest.raises(ResourceUnavailable):
            asyncio.run(service.assess("hello"))

    def test_malformed_response_raises(self):
        service = _service(lambda prompt: "I think this is fine")
        with pytest.raises(MalformedRemoteResponse):
            asyncio.run(service.assess("hello"))

    def test_invocation_error_is_wrapped(self):
        def responder(prompt):
            raise ConnectionError("boom")

        with pytest.raises(RemoteModelError, match="boom"):
            asyncio.run(_service(responder).assess("hello"))

    def test_timeout_is_wrapped(self):
        def responder(prompt):
            time.sleep(0.3)
            return "RISK_SCORE: 1\nEXPLANATION: late"

        with pytest.raises(RemoteModelError, match="timed out"):
            asyncio.run(_service(responder, timeout=0.05).assess("hello"))

    def test_status(self):
        service = _service(lambda prompt: "")
        assert service.status() == {
            "model": "test-model",
            "base_url": "http://localhost:1",
            "available": True,
        }

    def test_disabled_by_default(self, monkeypatch):
        monkeypatch.setattr(settings, "REMOTE_MODEL_ENABLED", False)
        assert get_remote_service() is None
