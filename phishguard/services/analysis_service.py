"""
Analysis Service
Runs the scoring engine for a caller, optionally consults the remote model,
and records the result in the history
"""

import asyncio
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from phishguard.core.blender import label_for_score
from phishguard.core.scoring_engine import ScoreReport, ScoringEngine
from phishguard.services.analysis_record import Analysis
from phishguard.services.history_store import HistoryStore
from phishguard.services.llm_service import RemoteModelError, RemoteModelService

logger = logging.getLogger(__name__)

IMAGE_SOURCE_LABEL = "Image Analysis"


class AnalysisService:
    """Orchestrates one analysis: local scoring, optional remote model, history"""

    def __init__(
        self,
        engine: ScoringEngine,
        history: HistoryStore,
        remote: Optional[RemoteModelService] = None,
    ):
        self.engine = engine
        self.history = history
        self.remote = remote

    async def analyze(self, text: str, source_label: Optional[str] = None) -> Tuple[Analysis, ScoreReport]:
        """
        Analyze text and append the record to the history.

        The local report is always computed. When a remote model is configured
        and succeeds, its score and explanation replace the local ones.
        """
        report = self.engine.score(text)
        score = report.score
        explanation = report.explanation
        engine = "local"

        if self.remote is not None:
            try:
                assessment = await self.remote.assess(text)
                score = assessment.score
                explanation = assessment.explanation
                engine = "remote"
                logger.info(f"Remote model scored content {score} (local {report.score})")
            except RemoteModelError as e:
                logger.warning(f"Remote model failed, using local engine: {e}")

        record_text = f"[{source_label}] {text}" if source_label else text
        analysis = Analysis(
            text=record_text,
            score=score,
            label=label_for_score(score).value,
            time=datetime.now().isoformat(timespec="seconds"),
            explanation=explanation,
            engine=engine,
            source=source_label,
        )
        # Rewriting the JSON file is blocking I/O
        await asyncio.to_thread(self.history.append, analysis)
        return analysis, report

    async def analyze_many(self, texts: Iterable[str]) -> List[Analysis]:
        results = []
        for text in texts:
            analysis, _ = await self.analyze(text)
            results.append(analysis)
        return results

