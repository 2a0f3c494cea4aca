"""
Health check endpoint
Provides system status information
"""

from typing import Optional
from fastapi import APIRouter, Request
from pydantic import BaseModel
from datetime import datetime, timezone
import time

from phishguard.utils.startup import get_init_status

router = APIRouter()

VERSION = "1.0.0"

# Track startup time
_startup_time = time.time()


class HealthResponse(BaseModel):
    """Health check response model"""
    status: str
    version: str
    uptime_seconds: float
    timestamp: str


class StatusResponse(BaseModel):
    """System status response model"""
    rule_count: int
    history_count: int
    remote_model_enabled: bool
    remote_model_available: Optional[bool]
    remote_model: Optional[str]


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint

    Returns:
        HealthResponse: System health status
    """
    uptime = time.time() - _startup_time

    return HealthResponse(
        status="healthy",
        version=VERSION,
        uptime_seconds=round(uptime, 2),
        timestamp=datetime.now(timezone.utc).isoformat()
    )


@router.get("/status", response_model=StatusResponse)
async def system_status(request: Request):
    """
    System status endpoint - scoring engine, history and remote model state

    Returns:
        StatusResponse: component status
    """
    return StatusResponse(**get_init_status(request.app))
