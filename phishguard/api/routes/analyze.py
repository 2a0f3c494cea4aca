"""
Content Analysis API Endpoint
Scores pasted text (email body, message, URL) or OCR-extracted image text
for phishing risk

Rate limiting: 30 requests/minute per IP
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel
import logging
from slowapi import Limiter
from slowapi.util import get_remote_address

from phishguard.core.config import settings
from phishguard.core.input_sanitizer import (
    sanitize_text_input,
    sanitize_filename,
    sanitize_source_label,
    log_security_event,
)
from phishguard.core.scoring_engine import ScoreReport
from phishguard.services.analysis_record import Analysis
from phishguard.services.analysis_service import IMAGE_SOURCE_LABEL

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


class AnalyzeRequest(BaseModel):
    """Text submitted for analysis"""
    text: str
    source: Optional[str] = None


class ImageTextRequest(BaseModel):
    """Text already extracted from an image by OCR"""
    filename: str
    text: str


class EvidenceItem(BaseModel):
    """Matched heuristic rule"""
    rule_id: str
    category: str
    reason: str


class FeatureSummary(BaseModel):
    """Linear model features"""
    keyword_score: float
    ngram_score: float
    uppercase_ratio: float
    symbol_ratio: float
    digit_ratio: float
    flagged_words: List[str] = []
    flagged_ngrams: List[str] = []


class AnalyzeResponse(BaseModel):
    """Response model for content analysis"""
    text: str
    score: int
    label: str
    explanation: str
    engine: str
    time: str
    heuristic_score: float
    ml_score: float
    blended_score: float
    heuristic_evidence: List[EvidenceItem]
    ml_features: FeatureSummary


def _build_response(analysis: Analysis, report: ScoreReport) -> AnalyzeResponse:
    details = report.to_dict()
    return AnalyzeResponse(
        text=analysis.text,
        score=analysis.score,
        label=analysis.label,
        explanation=analysis.explanation,
        engine=analysis.engine,
        time=analysis.time,
        heuristic_score=details["heuristic_score"],
        ml_score=details["ml_score"],
        blended_score=details["blended_score"],
        heuristic_evidence=details["heuristic_evidence"],
        ml_features=details["ml_features"],
    )


@router.post("/analyze", response_model=AnalyzeResponse)
@limiter.limit("30/minute")
async def analyze_text(request: Request, payload: AnalyzeRequest) -> AnalyzeResponse:
    """
    Analyze text for phishing indicators

    Returns the 0-100 risk score, its label, a categorized explanation
    and the evidence from both scoring layers. The result is appended
    to the analysis history.
    """
    client_ip = request.client.host if request.client else "unknown"

    text, error = sanitize_text_input(payload.text, settings.MAX_TEXT_LENGTH)
    if error:
        log_security_event("INVALID_TEXT_INPUT", error, client_ip)
        raise HTTPException(status_code=400, detail=error)

    source, error = sanitize_source_label(payload.source)
    if error:
        raise HTTPException(status_code=400, detail=error)

    analysis, report = await request.app.state.analysis_service.analyze(text, source_label=source)
    logger.info(f"Analyzed {len(text)} chars: {analysis.label} ({analysis.score}) via {analysis.engine}")
    return _build_response(analysis, report)


@router.post("/analyze/image-text", response_model=AnalyzeResponse)
@limiter.limit("30/minute")
async def analyze_image_text(request: Request, payload: ImageTextRequest) -> AnalyzeResponse:
    """
    Analyze text extracted from an image

    OCR runs on the client; the text is scored exactly like typed text
    and recorded under an image source label.
    """
    client_ip = request.client.host if request.client else "unknown"

    filename, error = sanitize_filename(payload.filename)
    if error:
        log_security_event("INVALID_IMAGE_FILENAME", f"{error} - Filename: {payload.filename[:50]}", client_ip)
        raise HTTPException(status_code=400, detail=error)

    text, error = sanitize_text_input(payload.text, settings.MAX_TEXT_LENGTH)
    if error:
        raise HTTPException(status_code=400, detail=f"No readable text extracted from image: {error}")

    analysis, report = await request.app.state.analysis_service.analyze(
        text, source_label=f"{IMAGE_SOURCE_LABEL}: {filename}"
    )
    return _build_response(analysis, report)
