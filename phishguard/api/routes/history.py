"""
History, dashboard and report endpoints
Rate limiting: 60/minute for reads, 10/minute for clearing
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from slowapi import Limiter
from slowapi.util import get_remote_address

from phishguard.services.dashboard import render_text_report, summarize

logger = logging.getLogger(__name__)
limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


class HistoryEntry(BaseModel):
    """A recorded analysis"""
    text: str
    score: int
    label: str
    time: str
    explanation: str
    engine: str
    source: Optional[str] = None


class HistoryResponse(BaseModel):
    """All recorded analyses, oldest first"""
    count: int
    entries: List[HistoryEntry]


class ClearResponse(BaseModel):
    cleared: int


class DashboardResponse(BaseModel):
    """Analysis counts per risk label"""
    low: int
    medium: int
    high: int
    total: int


@router.get("/history", response_model=HistoryResponse)
@limiter.limit("60/minute")
async def get_history(request: Request) -> HistoryResponse:
    entries = request.app.state.history_store.all()
    return HistoryResponse(
        count=len(entries),
        entries=[HistoryEntry(**entry.to_dict()) for entry in entries],
    )


@router.delete("/history", response_model=ClearResponse)
@limiter.limit("10/minute")
async def clear_history(request: Request) -> ClearResponse:
    """Delete every recorded analysis. This cannot be undone."""
    cleared = request.app.state.history_store.clear()
    return ClearResponse(cleared=cleared)


@router.get("/dashboard", response_model=DashboardResponse)
@limiter.limit("60/minute")
async def get_dashboard(request: Request) -> DashboardResponse:
    summary = summarize(request.app.state.history_store.all())
    return DashboardResponse(**summary.to_dict())


@router.get("/report", response_class=PlainTextResponse)
@limiter.limit("10/minute")
async def get_report(request: Request) -> PlainTextResponse:
    """Plain-text report of the full history"""
    history = request.app.state.history_store.all()
    return PlainTextResponse(
        render_text_report(history),
        headers={"Content-Disposition": 'attachment; filename="PhishGuard_Report.txt"'},
    )
