"""
Remote Model Service - Ollama Integration with LangChain
Optional second opinion that replaces the local score when it works

Any failure raises a RemoteModelError subclass; callers fall back to the
local scoring engine.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx
from langchain_ollama import OllamaLLM
from langchain_core.prompts import PromptTemplate
from langchain_core.output_parsers import StrOutputParser

from phishguard.core.config import settings

logger = logging.getLogger(__name__)


class RemoteModelError(Exception):
    """Remote model could not produce an assessment"""


class ResourceUnavailable(RemoteModelError):
    """Server unreachable or model not installed"""


class MalformedRemoteResponse(RemoteModelError):
    """Response did not follow the expected format"""


@dataclass(frozen=True)
class RemoteAssessment:
    """Score and explanation produced by the remote model"""
    score: int
    explanation: str


PHISHING_PROMPT = PromptTemplate.from_template("""Assess this content for phishing risk. Be concise.

Content (first 1500 chars):
{text}

Consider urgency, requests for credentials or money, impersonation,
suspicious links and unexpected rewards or attachments.

Respond in this exact format:
RISK_SCORE: [integer from 0 to 100]
EXPLANATION: [One or two sentences]""")


def parse_assessment(response: str) -> RemoteAssessment:
    """Parse the model response, raising MalformedRemoteResponse on anything unexpected"""
    score: Optional[int] = None
    explanation = ""

    for line in response.strip().split("\n"):
        line = line.strip()
        if line.startswith("RISK_SCORE:"):
            value = line.split(":", 1)[1].strip().rstrip(".")
            try:
                score = int(value)
            except ValueError:
                raise MalformedRemoteResponse(f"Non-integer risk score: {value!r}")
        elif line.startswith("EXPLANATION:"):
            explanation = line.split(":", 1)[1].strip()

    if score is None:
        raise MalformedRemoteResponse("Missing RISK_SCORE line")
    if not 0 <= score <= 100:
        raise MalformedRemoteResponse(f"Risk score out of range: {score}")
    if not explanation:
        raise MalformedRemoteResponse("Missing EXPLANATION line")

    return RemoteAssessment(score=score, explanation=explanation)


class RemoteModelService:
    """
    LLM service using Ollama for local inference.

    - Availability is checked against /api/tags and cached
    - Timeouts and parse failures surface as RemoteModelError
    """

    def __init__(
        self,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.model = model or settings.OLLAMA_MODEL
        self.base_url = base_url or settings.OLLAMA_HOST
        self.timeout = timeout if timeout is not None else settings.REMOTE_MODEL_TIMEOUT
        self._llm: Optional[OllamaLLM] = None
        self._available: Optional[bool] = None

    @property
    def llm(self) -> OllamaLLM:
        """Lazy initialization of LLM"""
        if self._llm is None:
            self._llm = OllamaLLM(
                model=self.model,
                base_url=self.base_url,
                temperature=0.1,  # Low temperature for consistent outputs
                num_predict=256,
            )
            logger.info(f"Remote model initialized: {self.model}")
        return self._llm

    async def is_available(self) -> bool:
        """Check if Ollama is running and model is available"""
        if self._available is not None:
            return self._available

        try:
            async with httpx.AsyncClient(timeout=5.0) as client:
                response = await client.get(f"{self.base_url}/api/tags")
                if response.status_code == 200:
                    models = response.json().get("models", [])
                    model_names = [m.get("name", "").split(":")[0] for m in models]
                    self._available = self.model.split(":")[0] in model_names
                    if not self._available:
                        logger.warning(f"Model {self.model} not found. Available: {model_names}")
                else:
                    self._available = False
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Ollama not available: {e}")
            self._available = False

        return self._available

    async def assess(self, text: str) -> RemoteAssessment:
        """Ask the remote model for a score and explanation"""
        if not await self.is_available():
            raise ResourceUnavailable(f"Model {self.model} unavailable at {self.base_url}")

        chain = PHISHING_PROMPT | self.llm | StrOutputParser()
        try:
            result = await asyncio.wait_for(
                asyncio.to_thread(chain.invoke, {"text": text[:1500]}),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            raise RemoteModelError(f"Remote model timed out after {self.timeout}s")
        except Exception as e:
            raise RemoteModelError(f"Remote model call failed: {e}") from e

        return parse_assessment(result)

    def status(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "base_url": self.base_url,
            "available": self._available,
        }


# Global instance
_remote_service: Optional[RemoteModelService] = None


def get_remote_service() -> Optional[RemoteModelService]:
    """Get the global remote model service, or None when disabled in settings"""
    global _remote_service
    if not settings.REMOTE_MODEL_ENABLED:
        return None
    if _remote_service is None:
        _remote_service = RemoteModelService()
    return _remote_service
