"""
Startup initialization logic
Handles system component initialization on server startup
"""

import logging
from pathlib import Path
from fastapi import FastAPI

from phishguard.core.config import settings
from phishguard.core.scoring_engine import get_scoring_engine
from phishguard.services.analysis_service import AnalysisService
from phishguard.services.history_store import HistoryStore
from phishguard.services.llm_service import get_remote_service

logger = logging.getLogger(__name__)


async def initialize_system(app: FastAPI):
    """
    Initialize system components on startup

    The scoring engine is built once and shared; it holds no mutable state.
    The remote model is only probed when enabled in settings.

    Args:
        app: FastAPI application instance
    """
    try:
        logger.info("[1/3] Creating directories...")
        Path(settings.HISTORY_FILE).parent.mkdir(parents=True, exist_ok=True)

        logger.info("[2/3] Loading scoring engine and history...")
        engine = get_scoring_engine()
        history = HistoryStore(settings.HISTORY_FILE)
        remote = get_remote_service()

        app.state.engine = engine
        app.state.history_store = history
        app.state.remote_service = remote
        app.state.analysis_service = AnalysisService(engine, history, remote)

        if remote is None:
            logger.info("[3/3] Remote model disabled - local engine only")
        elif await remote.is_available():
            logger.info(f"[3/3] Remote model ready: {remote.model}")
        else:
            logger.warning(f"[3/3] Remote model {remote.model} unavailable - falling back to local engine")

    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise


def get_init_status(app: FastAPI) -> dict:
    """Get current initialization status"""
    engine = getattr(app.state, "engine", None)
    history = getattr(app.state, "history_store", None)
    remote = getattr(app.state, "remote_service", None)
    return {
        "rule_count": len(engine.heuristics.rules) if engine else 0,
        "history_count": len(history) if history is not None else 0,
        "remote_model_enabled": remote is not None,
        "remote_model_available": remote.status()["available"] if remote else None,
        "remote_model": remote.model if remote else None,
    }
